"""Inventory Core Engine"""
__version__ = "0.1.0"

from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.inventory import Inventory, InventoryError, InventoryResult, Item, SortKey

__all__ = [
    "EventBus",
    "GameEvent",
    "EventTypes",
    "Inventory",
    "InventoryError",
    "InventoryResult",
    "Item",
    "SortKey",
]
