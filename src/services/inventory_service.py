"""인벤토리 Service — Core↔EventBus 연결, 스냅샷 변환

Service → Core 허용. 상태 변화는 EventBus로 알린다.
저장 계층은 export_snapshot()/import_snapshot()만 사용한다.
"""

from typing import Any, Optional

from src.config import Settings, settings
from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.inventory import (
    Character,
    Inventory,
    InventoryResult,
    InventorySnapshot,
    Item,
    ItemKind,
    SortKey,
)
from src.core.inventory.models import EquipmentTraits, MaterialTraits
from src.core.logging import get_logger
from src.services.schemas import (
    EquipmentSchema,
    InventorySnapshotSchema,
    ItemSchema,
    MaterialSchema,
)

logger = get_logger(__name__)

SOURCE = "inventory_service"


class InventoryService:
    """한 세션의 인벤토리 조작 + 이벤트 발행"""

    def __init__(
        self,
        event_bus: EventBus,
        inventory: Optional[Inventory] = None,
        config: Settings = settings,
    ):
        self._bus = event_bus
        self._config = config
        self._inventory = inventory or Inventory(
            max_weight=config.INVENTORY_MAX_WEIGHT,
            max_equipped=config.MAX_EQUIPPED_ITEMS,
            high_tier_level=config.HIGH_TIER_REQUIRED_LEVEL,
            rarity_glyph=config.RARITY_GLYPH,
        )

    @property
    def inventory(self) -> Inventory:
        return self._inventory

    # === 아이템 ===

    def add_item(self, item: Optional[Item]) -> InventoryResult:
        result = self._inventory.add_item(item)
        if not result:
            self._emit_rejected("add_item", result, item)
            return result

        event_type = EventTypes.ITEM_MERGED if result.merged else EventTypes.ITEM_ADDED
        self._emit(
            event_type,
            {
                "item_id": result.item.item_id,
                "incoming_item_id": item.item_id,
                **self._weight_data(),
            },
        )
        return result

    def remove_item(self, key: int | str) -> InventoryResult:
        result = self._inventory.remove_item(key)
        if not result:
            self._emit_rejected("remove_item", result, None, key=key)
            return result
        self._emit(
            EventTypes.ITEM_REMOVED,
            {"item_id": result.item.item_id, **self._weight_data()},
        )
        return result

    def clear(self) -> int:
        count = self._inventory.clear()
        self._emit(EventTypes.INVENTORY_CLEARED, {"removed": count})
        return count

    def expand_capacity(self, additional: int) -> InventoryResult:
        result = self._inventory.expand_capacity(additional)
        if not result:
            self._emit_rejected("expand_capacity", result, None)
            return result
        self._emit(
            EventTypes.INVENTORY_EXPANDED,
            {"additional": additional, **self._weight_data()},
        )
        return result

    # === 정렬 / 검색 ===

    def sort(self, sort_key: SortKey | str) -> list[Item]:
        ordered = self._inventory.sort(sort_key)
        self._emit(
            EventTypes.INVENTORY_SORTED,
            {
                "sort_key": SortKey(sort_key).value,
                "item_ids": [item.item_id for item in ordered],
            },
        )
        return ordered

    def search(self, name: str) -> Optional[Item]:
        return self._inventory.search(name)

    def search_by_type(self, item_type: str) -> list[Item]:
        return self._inventory.search_by_type(item_type)

    def recursive_search(self, criteria: str) -> Optional[Item]:
        return self._inventory.recursive_search(criteria)

    def search_from(self, criteria: str, start_index: int) -> Optional[Item]:
        return self._inventory.search_from(criteria, start_index)

    def export_to_csv(self) -> str:
        return self._inventory.export_to_csv()

    def get_statistics(self) -> dict[str, int]:
        return self._inventory.get_statistics()

    def calculate_total_value(self) -> int:
        return self._inventory.calculate_total_value()

    # === 장착 ===

    def equip(self, character: Optional[Character], item: Optional[Item]) -> InventoryResult:
        result = self._inventory.equip_item(character, item)
        if not result:
            self._emit_rejected("equip", result, item, character=character)
            return result
        self._emit(
            EventTypes.ITEM_EQUIPPED,
            {
                "character_id": character.character_id,
                "item_id": result.item.item_id,
                "slot": result.item.slot,
                **self._weight_data(),
            },
        )
        return result

    def unequip(self, character: Optional[Character], item: Optional[Item]) -> InventoryResult:
        result = self._inventory.unequip_item(character, item)
        if not result:
            self._emit_rejected("unequip", result, item, character=character)
            return result
        self._emit_unequipped(character, result)
        return result

    def unequip_slot(self, character: Optional[Character], slot: str) -> InventoryResult:
        result = self._inventory.unequip_slot(character, slot)
        if not result:
            self._emit_rejected("unequip_slot", result, None, character=character, slot=slot)
            return result
        self._emit_unequipped(character, result)
        return result

    def equipped_for(self, character_id: str) -> list[Item]:
        return self._inventory.equipped_for(character_id)

    # === 스냅샷 (저장 계층 경계) ===

    def export_snapshot(self) -> InventorySnapshotSchema:
        snap = self._inventory.snapshot()
        return InventorySnapshotSchema(
            items=[self._item_to_schema(i) for i in snap.items],
            current_weight=snap.current_weight,
            max_weight=snap.max_weight,
            equipped={
                cid: [self._item_to_schema(i) for i in items]
                for cid, items in snap.equipped.items()
            },
        )

    def import_snapshot(self, schema: InventorySnapshotSchema) -> InventoryResult:
        """스키마 → Core 스냅샷 → restore. 용량 초과 시 상태 유지."""
        snap = InventorySnapshot(
            items=[self._item_to_core(s) for s in schema.items],
            current_weight=schema.current_weight,
            max_weight=schema.max_weight,
            equipped={
                cid: [self._item_to_core(s) for s in items]
                for cid, items in schema.equipped.items()
            },
        )
        result = self._inventory.restore(snap)
        if not result:
            self._emit_rejected("import_snapshot", result, None)
            return result
        self._emit(
            EventTypes.INVENTORY_RESTORED,
            {"item_count": len(snap.items), **self._weight_data()},
        )
        return result

    # === 이벤트 헬퍼 ===

    def _emit(self, event_type: str, data: dict[str, Any]) -> None:
        self._bus.emit(GameEvent(event_type=event_type, data=data, source=SOURCE))

    def _emit_unequipped(self, character: Character, result: InventoryResult) -> None:
        self._emit(
            EventTypes.ITEM_UNEQUIPPED,
            {
                "character_id": character.character_id,
                "item_id": result.item.item_id,
                "slot": result.item.slot,
                **self._weight_data(),
            },
        )

    def _emit_rejected(
        self,
        operation: str,
        result: InventoryResult,
        item: Optional[Item],
        character: Optional[Character] = None,
        **extra: Any,
    ) -> None:
        data: dict[str, Any] = {
            "operation": operation,
            "error": result.error.value if result.error else None,
            "item_id": item.item_id if item is not None else None,
            "character_id": character.character_id if character is not None else None,
        }
        data.update(extra)
        self._emit(EventTypes.INVENTORY_REJECTED, data)

    def _weight_data(self) -> dict[str, int]:
        return {
            "current_weight": self._inventory.current_weight,
            "max_weight": self._inventory.max_weight,
        }

    # === Core ↔ Schema 변환 ===

    def _item_to_schema(self, core: Item) -> ItemSchema:
        """Core → Schema"""
        return ItemSchema(
            item_id=core.item_id,
            name=core.name,
            item_type=core.item_type,
            weight=core.weight,
            value=core.value,
            stackable=core.stackable,
            kind=core.kind.value,
            material=MaterialSchema(
                material_type=core.material.material_type,
                rarity=core.material.rarity,
            )
            if core.material
            else None,
            equipment=EquipmentSchema(
                slot=core.equipment.slot,
                required_level=core.equipment.required_level,
                base_stats=dict(core.equipment.base_stats),
                refinement=core.equipment.refinement,
            )
            if core.equipment
            else None,
        )

    def _item_to_core(self, schema: ItemSchema) -> Item:
        """Schema → Core"""
        return Item(
            name=schema.name,
            item_type=schema.item_type,
            weight=schema.weight,
            value=schema.value,
            stackable=schema.stackable,
            kind=ItemKind(schema.kind),
            material=MaterialTraits(
                material_type=schema.material.material_type,
                rarity=schema.material.rarity,
            )
            if schema.material
            else None,
            equipment=EquipmentTraits(
                slot=schema.equipment.slot,
                required_level=schema.equipment.required_level,
                base_stats=dict(schema.equipment.base_stats),
                refinement=schema.equipment.refinement,
            )
            if schema.equipment
            else None,
            item_id=schema.item_id,
        )
