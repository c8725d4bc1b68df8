"""무게 제한 인벤토리 + 캐릭터별 장착 관리

불변 조건:
- current_weight == sum(item.weight for item in items)
- 성공한 변경 후 current_weight <= max_weight
- 장착 중인 장비는 items에 존재하지 않는다 (장착/해제 시 소유권 이동)

실패는 InventoryResult로 반환하고, 실패한 연산은 상태를 바꾸지 않는다.
"""

from __future__ import annotations

import copy
import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Optional

from .equipment import DEFAULT_MAX_EQUIPPED, check_equip, check_unequip, find_in_slot
from .errors import InventoryError, InventoryResult
from .export import export_to_csv
from .models import STATISTICS_KEYS, Character, Item, ItemKind, equipment_stats
from .searching import binary_search, recursive_search, sequential_search
from .sorting import SortKey, by_name, insertion_sort, sort_items

logger = logging.getLogger(__name__)

DEFAULT_MAX_WEIGHT = 1000


@dataclass
class InventorySnapshot:
    """저장 계층과 주고받는 상태 스냅샷.

    equipped: character_id → 장착 장비 목록 (장착 순서)
    """

    items: list[Item]
    current_weight: int
    max_weight: int
    equipped: dict[str, list[Item]] = field(default_factory=dict)


class Inventory:
    """아이템 컬렉션 + 무게 예산 + 장착 맵.

    장착 맵은 character_id → [item_id] 이고, 장비 개체는
    _equipment_table(item_id → Item)이 소유한다.
    """

    def __init__(
        self,
        max_weight: int = DEFAULT_MAX_WEIGHT,
        max_equipped: int = DEFAULT_MAX_EQUIPPED,
        high_tier_level: int = 60,
        rarity_glyph: str = "★",
    ) -> None:
        if max_weight < 0:
            raise ValueError(f"max_weight must be >= 0: {max_weight}")
        if max_equipped < 1:
            raise ValueError(f"max_equipped must be >= 1: {max_equipped}")

        self._items: list[Item] = []
        self._current_weight = 0
        self._max_weight = max_weight
        self._max_equipped = max_equipped
        self._high_tier_level = high_tier_level
        self._rarity_glyph = rarity_glyph

        self._equipped: dict[str, list[int]] = {}
        self._equipment_table: dict[int, Item] = {}

        # 이름 정렬 사본 캐시 (revision, sorted)
        self._revision = 0
        self._name_sorted_cache: Optional[tuple[int, list[Item]]] = None

    # === 상태 조회 ===

    @property
    def items(self) -> list[Item]:
        """현재 아이템 시퀀스의 사본."""
        return list(self._items)

    @property
    def current_weight(self) -> int:
        return self._current_weight

    @property
    def max_weight(self) -> int:
        return self._max_weight

    @property
    def free_weight(self) -> int:
        return self._max_weight - self._current_weight

    @property
    def max_equipped(self) -> int:
        return self._max_equipped

    @property
    def item_count(self) -> int:
        return len(self._items)

    def get_item(self, index: int) -> Optional[Item]:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def contains(self, item: Optional[Item]) -> bool:
        """ID 기준 보유 여부."""
        if item is None:
            return False
        return self._index_of_id(item.item_id) is not None

    def contains_name(self, name: str) -> bool:
        return any(item.name == name for item in self._items)

    # === 추가 / 제거 ===

    def add_item(self, item: Optional[Item]) -> InventoryResult:
        """아이템 추가.

        용량 검사는 들어오는 아이템 무게 기준 (병합이어도 동일).
        스택 가능하면 같은 kind·이름의 스택 가능 아이템과 병합:
        - 재료: value 합, weight 최댓값인 새 개체로 같은 위치 교체
        - 그 외: 기존 개체 value에 더함
        """
        if item is None:
            logger.info("Add rejected: no item given")
            return InventoryResult.fail(InventoryError.INVALID_ARGUMENT)

        if self.contains(item) or item.item_id in self._equipment_table:
            logger.info("Add rejected: item %d is already held", item.item_id)
            return InventoryResult.fail(InventoryError.INVALID_ARGUMENT, item)

        if self._current_weight + item.weight > self._max_weight:
            logger.info(
                "Add rejected: %s (weight %d) exceeds capacity %d/%d",
                item.name,
                item.weight,
                self._current_weight,
                self._max_weight,
            )
            return InventoryResult.fail(InventoryError.CAPACITY_EXCEEDED, item)

        if item.stackable:
            idx = self._find_stack(item)
            if idx is not None:
                merged = self._merge(self._items[idx], item)
                self._items[idx] = merged
                self._current_weight = self._total_weight()
                self._touch()
                logger.debug(
                    "Merged %s into stack %d (value=%d, weight %d/%d)",
                    item.name,
                    merged.item_id,
                    merged.value,
                    self._current_weight,
                    self._max_weight,
                )
                return InventoryResult.ok(merged, merged=True)

        self._items.append(item)
        self._current_weight += item.weight
        self._touch()
        logger.debug(
            "Added %s (id=%d, weight %d/%d)",
            item.name,
            item.item_id,
            self._current_weight,
            self._max_weight,
        )
        return InventoryResult.ok(item)

    def remove_item(self, key: int | str) -> InventoryResult:
        """ID(int) 또는 이름(str)으로 첫 일치 항목 제거."""
        if isinstance(key, bool) or not isinstance(key, (int, str)):
            return InventoryResult.fail(InventoryError.INVALID_ARGUMENT)

        if isinstance(key, int):
            idx = self._index_of_id(key)
        else:
            idx = next(
                (i for i, item in enumerate(self._items) if item.name == key), None
            )

        if idx is None:
            logger.info("Remove failed: %r not found", key)
            return InventoryResult.fail(InventoryError.ITEM_NOT_FOUND)

        removed = self._detach(idx)
        logger.debug(
            "Removed %s (id=%d, weight %d/%d)",
            removed.name,
            removed.item_id,
            self._current_weight,
            self._max_weight,
        )
        return InventoryResult.ok(removed)

    def clear(self) -> int:
        """아이템 전부 제거. 장착 맵은 유지. 반환: 제거 수."""
        count = len(self._items)
        self._items = []
        self._current_weight = 0
        self._touch()
        logger.debug("Cleared %d items", count)
        return count

    def expand_capacity(self, additional: int) -> InventoryResult:
        if additional < 0:
            return InventoryResult.fail(InventoryError.INVALID_ARGUMENT)
        self._max_weight += additional
        logger.debug("Capacity expanded by %d to %d", additional, self._max_weight)
        return InventoryResult.ok()

    # === 정렬 ===

    def sort(self, sort_key: SortKey | str) -> list[Item]:
        """정렬된 사본으로 작업 시퀀스를 통째로 교체. 반환: 새 순서."""
        self._items = sort_items(self._items, sort_key, self._high_tier_level)
        self._touch()
        return list(self._items)

    # === 검색 ===

    def search(self, name: str) -> Optional[Item]:
        """이름 정확 일치 — 삽입 정렬 사본에 이진 검색.

        정렬과 검색이 같은 비교(이름 사전순)를 써야 한다.
        사본은 내용이 바뀔 때까지 재사용.
        """
        return binary_search(self._name_sorted(), name, by_name)

    def search_by_type(self, item_type: str) -> list[Item]:
        return sequential_search(self._items, lambda item: item.item_type == item_type)

    def recursive_search(self, criteria: str) -> Optional[Item]:
        return recursive_search(self._items, criteria)

    def search_from(self, criteria: str, start_index: int) -> Optional[Item]:
        """start_index부터 첫 일치 항목. 잘못된 인덱스면 None."""
        if not 0 <= start_index < len(self._items):
            logger.info("Invalid start index %d", start_index)
            return None
        return recursive_search(self._items, criteria, start_index)

    # === 집계 / 내보내기 ===

    def calculate_total_value(self) -> int:
        return sum(item.value for item in self._items)

    def get_statistics(self) -> dict[str, int]:
        stats: dict[str, int] = dict(Counter(item.item_type for item in self._items))
        totals = (len(self._items), self._current_weight, self.calculate_total_value())
        stats.update(zip(STATISTICS_KEYS, totals))
        return stats

    def export_to_csv(self) -> str:
        return export_to_csv(self._items, self._rarity_glyph, self._high_tier_level)

    # === 장착 ===

    def equipped_for(self, character_id: str) -> list[Item]:
        """캐릭터의 장착 목록 (장착 순서)."""
        return [
            self._equipment_table[item_id]
            for item_id in self._equipped.get(character_id, [])
        ]

    def holders_of(self, item_id: int) -> list[str]:
        """해당 장비를 장착한 character_id 목록."""
        return [cid for cid, ids in self._equipped.items() if item_id in ids]

    def equip_item(
        self, character: Optional[Character], item: Optional[Item]
    ) -> InventoryResult:
        """장착. 성공 시 item은 인벤토리에서 장착 테이블로 이동."""
        equipped = self.equipped_for(character.character_id) if character else []
        error = check_equip(
            character, item, self.contains(item), equipped, self._max_equipped
        )
        if error is not None:
            logger.info(
                "Equip rejected: %s → %s (%s)",
                getattr(item, "name", None),
                getattr(character, "name", None),
                error.value,
            )
            return InventoryResult.fail(error, item)

        idx = self._index_of_id(item.item_id)
        stored = self._detach(idx)
        self._equipment_table[stored.item_id] = stored
        self._equipped.setdefault(character.character_id, []).append(stored.item_id)

        stats = equipment_stats(stored)
        character.on_equip(stored, stats)
        logger.debug(
            "%s equipped %s in slot %s", character.name, stored.name, stored.slot
        )
        return InventoryResult.ok(stored)

    def unequip_item(
        self, character: Optional[Character], item: Optional[Item]
    ) -> InventoryResult:
        """해제. 인벤토리 재추가가 실패하면 (용량 초과, 이미 보유) 장착 상태 유지."""
        equipped = self.equipped_for(character.character_id) if character else []
        error = check_unequip(character, item, equipped)
        if error is not None:
            logger.info(
                "Unequip rejected: %s ← %s (%s)",
                getattr(item, "name", None),
                getattr(character, "name", None),
                error.value,
            )
            return InventoryResult.fail(error, item)

        stored = self._equipment_table[item.item_id]
        if self._current_weight + stored.weight > self._max_weight:
            logger.info(
                "Unequip rejected: no room for %s (%d/%d)",
                stored.name,
                self._current_weight,
                self._max_weight,
            )
            return InventoryResult.fail(InventoryError.CAPACITY_EXCEEDED, stored)

        cid = character.character_id
        ids = self._equipped[cid]
        position = ids.index(stored.item_id)
        del ids[position]
        if not ids:
            del self._equipped[cid]
        # 복원된 스냅샷에서는 같은 ID를 여러 캐릭터가 장착할 수 있다
        shared = bool(self.holders_of(stored.item_id))
        if not shared:
            del self._equipment_table[stored.item_id]

        result = self.add_item(stored)
        if not result:
            self._equipped.setdefault(cid, []).insert(position, stored.item_id)
            self._equipment_table[stored.item_id] = stored
            logger.info(
                "Unequip rejected: %s could not return to inventory (%s)",
                stored.name,
                result.error.value,
            )
            return InventoryResult.fail(result.error, stored)

        stats = equipment_stats(stored)
        character.on_unequip(stored, stats)
        logger.debug("%s unequipped %s", character.name, stored.name)
        return InventoryResult.ok(result.item, merged=result.merged)

    def unequip_slot(
        self, character: Optional[Character], slot: str
    ) -> InventoryResult:
        if character is None:
            return InventoryResult.fail(InventoryError.INVALID_ARGUMENT)
        item = find_in_slot(self.equipped_for(character.character_id), slot)
        if item is None:
            logger.info("Unequip rejected: %s has nothing in %s", character.name, slot)
            return InventoryResult.fail(InventoryError.SLOT_EMPTY)
        return self.unequip_item(character, item)

    # === 스냅샷 ===

    def snapshot(self) -> InventorySnapshot:
        """저장용 상태 사본. 이후 변경은 스냅샷에 반영되지 않는다."""
        return InventorySnapshot(
            items=copy.deepcopy(self._items),
            current_weight=self._current_weight,
            max_weight=self._max_weight,
            equipped={
                cid: copy.deepcopy(self.equipped_for(cid)) for cid in self._equipped
            },
        )

    def restore(self, snapshot: InventorySnapshot) -> InventoryResult:
        """스냅샷으로 상태 교체.

        용량 불변 조건만 검사한다. 그 외 (ID 중복, 슬롯 중복 등)는
        그대로 받아들인다. current_weight는 아이템에서 다시 계산.
        """
        total = sum(item.weight for item in snapshot.items)
        if total > snapshot.max_weight:
            logger.info(
                "Restore rejected: weight %d exceeds capacity %d",
                total,
                snapshot.max_weight,
            )
            return InventoryResult.fail(InventoryError.CAPACITY_EXCEEDED)
        if total != snapshot.current_weight:
            logger.warning(
                "Snapshot weight %d differs from item total %d; using item total",
                snapshot.current_weight,
                total,
            )

        self._items = copy.deepcopy(snapshot.items)
        self._max_weight = snapshot.max_weight
        self._current_weight = total
        self._equipped = {}
        self._equipment_table = {}
        for cid, equipped in snapshot.equipped.items():
            restored = copy.deepcopy(equipped)
            self._equipped[cid] = [item.item_id for item in restored]
            for item in restored:
                self._equipment_table[item.item_id] = item
        self._touch()
        logger.debug(
            "Restored %d items, %d characters with equipment",
            len(self._items),
            len(self._equipped),
        )
        return InventoryResult.ok()

    @classmethod
    def from_snapshot(cls, snapshot: InventorySnapshot, **kwargs) -> Inventory:
        inventory = cls(max_weight=snapshot.max_weight, **kwargs)
        result = inventory.restore(snapshot)
        if not result:
            raise ValueError(f"Cannot restore snapshot: {result.error.value}")
        return inventory

    # === 내부 ===

    def _touch(self) -> None:
        self._revision += 1

    def _name_sorted(self) -> list[Item]:
        if self._name_sorted_cache is None or self._name_sorted_cache[0] != self._revision:
            self._name_sorted_cache = (
                self._revision,
                insertion_sort(self._items, by_name),
            )
        return self._name_sorted_cache[1]

    def _total_weight(self) -> int:
        return sum(item.weight for item in self._items)

    def _index_of_id(self, item_id: int) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item.item_id == item_id:
                return i
        return None

    def _detach(self, index: int) -> Item:
        item = self._items.pop(index)
        self._current_weight -= item.weight
        self._touch()
        return item

    def _find_stack(self, item: Item) -> Optional[int]:
        for i, existing in enumerate(self._items):
            if (
                existing.stackable
                and existing.kind == item.kind
                and existing.name == item.name
            ):
                return i
        return None

    @staticmethod
    def _merge(existing: Item, incoming: Item) -> Item:
        if existing.kind == ItemKind.MATERIAL and incoming.kind == ItemKind.MATERIAL:
            return replace(
                existing,
                value=existing.value + incoming.value,
                weight=max(existing.weight, incoming.weight),
                stackable=True,
            )
        existing.value += incoming.value
        return existing
