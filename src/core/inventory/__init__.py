"""인벤토리/장비 Core — 순수 Python, I/O 무관"""

from .errors import InventoryError, InventoryResult
from .inventory import Inventory, InventorySnapshot
from .models import (
    Character,
    EquipmentSlot,
    EquipmentTraits,
    Item,
    ItemKind,
    MaterialTraits,
    PartyMember,
    equipment_stats,
    make_equipment,
    make_item,
    make_material,
    rarity_stars,
)
from .sorting import SortKey, sort_items

__all__ = [
    "Character",
    "EquipmentSlot",
    "EquipmentTraits",
    "Inventory",
    "InventoryError",
    "InventoryResult",
    "InventorySnapshot",
    "Item",
    "ItemKind",
    "MaterialTraits",
    "PartyMember",
    "SortKey",
    "equipment_stats",
    "make_equipment",
    "make_item",
    "make_material",
    "rarity_stars",
    "sort_items",
]
