"""장착 규칙 (Unequipped ↔ Equipped)

판정만 담당한다. 실제 이동은 Inventory가 수행.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .errors import InventoryError
from .models import Character, Item

DEFAULT_MAX_EQUIPPED = 4


def check_equip(
    character: Optional[Character],
    item: Optional[Item],
    in_inventory: bool,
    equipped: Sequence[Item],
    max_equipped: int = DEFAULT_MAX_EQUIPPED,
) -> Optional[InventoryError]:
    """장착 가능 여부. 순서대로 검사하고 첫 실패를 반환, 통과 시 None.

    1. character / item 존재, item이 장비  → INVALID_ARGUMENT
    2. character.level >= required_level  → LEVEL_TOO_LOW
    3. 인벤토리에 있음                     → NOT_IN_INVENTORY
    4. 장착 수 < max_equipped              → SLOTS_FULL
    5. 같은 슬롯 미사용                     → SLOT_OCCUPIED
    """
    if character is None or item is None or item.equipment is None:
        return InventoryError.INVALID_ARGUMENT
    if character.level < item.equipment.required_level:
        return InventoryError.LEVEL_TOO_LOW
    if not in_inventory:
        return InventoryError.NOT_IN_INVENTORY
    if len(equipped) >= max_equipped:
        return InventoryError.SLOTS_FULL
    if find_in_slot(equipped, item.equipment.slot) is not None:
        return InventoryError.SLOT_OCCUPIED
    return None


def check_unequip(
    character: Optional[Character],
    item: Optional[Item],
    equipped: Sequence[Item],
) -> Optional[InventoryError]:
    """해제 가능 여부. 용량 검사는 Inventory.add 경로에서 따로 한다."""
    if character is None or item is None:
        return InventoryError.INVALID_ARGUMENT
    if not any(e.item_id == item.item_id for e in equipped):
        return InventoryError.NOT_EQUIPPED
    return None


def find_in_slot(equipped: Sequence[Item], slot: str) -> Optional[Item]:
    """해당 슬롯에 장착된 장비. 없으면 None."""
    for item in equipped:
        if item.slot == slot:
            return item
    return None
