"""인벤토리 도메인 모델 (I/O 무관)

Item은 닫힌 종류 집합(ItemKind)을 태그로 가진다. 병합·표시 로직은
kind로 분기하고, 종류별 데이터는 MaterialTraits / EquipmentTraits에 둔다.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

MIN_RARITY = 1
MAX_RARITY = 5

STAT_NAMES: tuple[str, ...] = ("attack", "defense", "hp")
# get_statistics 집계 키. item_type으로 쓸 수 없다.
STATISTICS_KEYS: tuple[str, ...] = ("total_count", "total_weight", "total_value")

_item_ids = itertools.count(1)


def next_item_id() -> int:
    """프로세스 전역 정수 ID 발급."""
    return next(_item_ids)


class ItemKind(str, Enum):
    BASIC = "basic"
    MATERIAL = "material"
    EQUIPMENT = "equipment"


class EquipmentSlot(str, Enum):
    """자주 쓰는 슬롯. 슬롯 자체는 임의 문자열도 허용."""

    WEAPON = "weapon"
    HEAD = "head"
    BODY = "body"
    ACCESSORY = "accessory"


@dataclass(frozen=True)
class MaterialTraits:
    material_type: str  # "ore", "herb", ...
    rarity: int  # 1~5


@dataclass(frozen=True)
class EquipmentTraits:
    slot: str
    required_level: int = 1
    base_stats: dict[str, int] = field(default_factory=dict)  # {"attack": 40}
    refinement: int = 1  # 재련 단계, 스탯 배율


@dataclass
class Item:
    """인벤토리에 들어가는 아이템 개체.

    item_type은 필터/통계용 분류 태그. kind와는 별개다
    (예: kind=BASIC, item_type="consumable").
    """

    name: str
    item_type: str
    weight: int = 0
    value: int = 0
    stackable: bool = False
    kind: ItemKind = ItemKind.BASIC
    material: Optional[MaterialTraits] = None
    equipment: Optional[EquipmentTraits] = None
    item_id: int = field(default_factory=next_item_id)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Item name must not be empty")
        if self.weight < 0:
            raise ValueError(f"Negative weight for {self.name}: {self.weight}")
        if self.value < 0:
            raise ValueError(f"Negative value for {self.name}: {self.value}")
        if self.item_type in STATISTICS_KEYS:
            raise ValueError(f"Reserved item_type for {self.name}: {self.item_type}")

        if self.kind == ItemKind.MATERIAL:
            if self.material is None:
                raise ValueError(f"Material item {self.name} needs MaterialTraits")
            if not MIN_RARITY <= self.material.rarity <= MAX_RARITY:
                raise ValueError(
                    f"Rarity out of range for {self.name}: {self.material.rarity}"
                )
        elif self.kind == ItemKind.EQUIPMENT:
            if self.equipment is None:
                raise ValueError(f"Equipment item {self.name} needs EquipmentTraits")
            if self.equipment.required_level < 1:
                raise ValueError(
                    f"Required level must be >= 1 for {self.name}: "
                    f"{self.equipment.required_level}"
                )
            if self.equipment.refinement < 1:
                raise ValueError(
                    f"Refinement must be >= 1 for {self.name}: "
                    f"{self.equipment.refinement}"
                )

    @property
    def is_material(self) -> bool:
        return self.kind == ItemKind.MATERIAL

    @property
    def is_equipment(self) -> bool:
        return self.kind == ItemKind.EQUIPMENT

    @property
    def material_type(self) -> Optional[str]:
        return self.material.material_type if self.material else None

    @property
    def rarity(self) -> Optional[int]:
        return self.material.rarity if self.material else None

    @property
    def slot(self) -> Optional[str]:
        return self.equipment.slot if self.equipment else None

    @property
    def required_level(self) -> int:
        return self.equipment.required_level if self.equipment else 0


def make_item(
    name: str,
    item_type: str,
    weight: int = 1,
    value: int = 0,
    stackable: bool = False,
    item_id: int | None = None,
) -> Item:
    """일반 아이템 생성."""
    item = Item(
        name=name,
        item_type=item_type,
        weight=weight,
        value=value,
        stackable=stackable,
    )
    if item_id is not None:
        item.item_id = item_id
    return item


def make_material(
    name: str,
    material_type: str,
    rarity: int,
    value: int = 0,
    weight: int = 1,
    stackable: bool = True,
    item_id: int | None = None,
) -> Item:
    """재료 아이템 생성. 기본적으로 스택 가능."""
    item = Item(
        name=name,
        item_type=ItemKind.MATERIAL.value,
        weight=weight,
        value=value,
        stackable=stackable,
        kind=ItemKind.MATERIAL,
        material=MaterialTraits(material_type=material_type, rarity=rarity),
    )
    if item_id is not None:
        item.item_id = item_id
    return item


def make_equipment(
    name: str,
    slot: str,
    required_level: int = 1,
    base_stats: dict[str, int] | None = None,
    weight: int = 5,
    value: int = 0,
    refinement: int = 1,
    item_id: int | None = None,
) -> Item:
    """장비 아이템 생성. 장비는 스택되지 않는다."""
    item = Item(
        name=name,
        item_type=ItemKind.EQUIPMENT.value,
        weight=weight,
        value=value,
        stackable=False,
        kind=ItemKind.EQUIPMENT,
        equipment=EquipmentTraits(
            slot=slot.value if isinstance(slot, Enum) else slot,
            required_level=required_level,
            base_stats=dict(base_stats or {}),
            refinement=refinement,
        ),
    )
    if item_id is not None:
        item.item_id = item_id
    return item


def equipment_stats(item: Item) -> dict[str, int]:
    """장비 스탯 계산 (attack/defense/hp).

    재련 1단계당 +10%. 정수 내림.
    장비가 아니면 전부 0.
    """
    if item.equipment is None:
        return {stat: 0 for stat in STAT_NAMES}
    multiplier = 100 + 10 * (item.equipment.refinement - 1)
    return {
        stat: item.equipment.base_stats.get(stat, 0) * multiplier // 100
        for stat in STAT_NAMES
    }


def rarity_stars(item: Item, high_tier_level: int = 60) -> int:
    """표시용 별 개수.

    재료: rarity 그대로
    장비: required_level >= high_tier_level → 5, 그 외 3
    일반: 1
    """
    if item.kind == ItemKind.MATERIAL and item.material is not None:
        return item.material.rarity
    if item.kind == ItemKind.EQUIPMENT and item.equipment is not None:
        return 5 if item.equipment.required_level >= high_tier_level else 3
    return 1


# ── Character (외부 협력자) ─────────────────────────────────────


class Character(Protocol):
    """장착 판정에 필요한 최소 인터페이스."""

    character_id: str
    name: str
    level: int

    def on_equip(self, item: Item, stats: dict[str, int]) -> None: ...

    def on_unequip(self, item: Item, stats: dict[str, int]) -> None: ...


@dataclass
class PartyMember:
    """Character 기본 구현. 장착 스탯을 stats에 가감한다."""

    character_id: str
    name: str
    level: int = 1
    stats: dict[str, int] = field(
        default_factory=lambda: {stat: 0 for stat in STAT_NAMES}
    )

    def on_equip(self, item: Item, stats: dict[str, int]) -> None:
        for stat, amount in stats.items():
            self.stats[stat] = self.stats.get(stat, 0) + amount

    def on_unequip(self, item: Item, stats: dict[str, int]) -> None:
        for stat, amount in stats.items():
            self.stats[stat] = self.stats.get(stat, 0) - amount
