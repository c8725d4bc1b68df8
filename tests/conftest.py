"""Shared test fixtures."""

import pytest

from src.core.event_bus import EventBus
from src.core.inventory import Inventory, PartyMember


@pytest.fixture()
def inventory() -> Inventory:
    """maxWeight=100 인벤토리."""
    return Inventory(max_weight=100)


@pytest.fixture()
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def hero() -> PartyMember:
    return PartyMember(character_id="hero", name="Aria", level=10)
