"""Inventory engine entrypoint.

`python -m src.main` runs a short demo session and prints the CSV export.
"""

from src.config import Settings, settings
from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.inventory import (
    EquipmentSlot,
    PartyMember,
    SortKey,
    make_equipment,
    make_item,
    make_material,
)
from src.core.logging import get_logger, setup_logging
from src.services.inventory_service import InventoryService

logger = get_logger(__name__)

_LOGGED_EVENTS = (
    EventTypes.ITEM_ADDED,
    EventTypes.ITEM_MERGED,
    EventTypes.ITEM_REMOVED,
    EventTypes.ITEM_EQUIPPED,
    EventTypes.ITEM_UNEQUIPPED,
    EventTypes.INVENTORY_REJECTED,
)


def _log_event(event: GameEvent) -> None:
    logger.info("%s %s", event.event_type, event.data)


def build_inventory_service(config: Settings = settings) -> InventoryService:
    """EventBus + InventoryService 조립. 주요 이벤트는 로그로 남긴다."""
    event_bus = EventBus()
    for event_type in _LOGGED_EVENTS:
        event_bus.subscribe(event_type, _log_event)
    return InventoryService(event_bus, config=config)


def run_demo(service: InventoryService) -> str:
    """샘플 아이템 추가 → 장착 → 정렬 후 CSV 반환."""
    service.add_item(make_material("Iron Ore", "ore", rarity=2, value=10, weight=3))
    service.add_item(make_material("Iron Ore", "ore", rarity=2, value=15, weight=4))
    service.add_item(make_material("Moonpetal", "herb", rarity=5, value=120))
    service.add_item(make_item("Health Potion", "consumable", weight=1, value=30))
    sword = make_equipment(
        "Ember Blade",
        EquipmentSlot.WEAPON,
        required_level=10,
        base_stats={"attack": 48},
        weight=8,
        value=300,
    )
    service.add_item(sword)

    hero = PartyMember(character_id="hero", name="Aria", level=12)
    service.equip(hero, sword)
    service.sort(SortKey.RARITY)
    return service.export_to_csv()


def main() -> None:
    setup_logging(settings.LOG_LEVEL, debug=settings.DEBUG)
    service = build_inventory_service()
    print(run_demo(service), end="")


if __name__ == "__main__":
    main()
