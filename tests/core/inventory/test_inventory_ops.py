"""Inventory: 추가/병합/제거, 정렬/검색, 집계, CSV"""

from __future__ import annotations

import itertools

import pytest

from src.core.inventory import Inventory, InventoryError, SortKey
from src.core.inventory.models import Item, make_equipment, make_item, make_material


def _weights_consistent(inv: Inventory) -> bool:
    return inv.current_weight == sum(i.weight for i in inv.items)


# ── Capacity ──────────────────────────────────────────────────


class TestCapacity:
    def test_scenario_60_then_50(self, inventory: Inventory) -> None:
        first = inventory.add_item(make_item("Chest", "furniture", weight=60))
        assert first.success
        assert inventory.current_weight == 60

        second = inventory.add_item(make_item("Barrel", "furniture", weight=50))
        assert not second
        assert second.error == InventoryError.CAPACITY_EXCEEDED
        assert inventory.current_weight == 60
        assert inventory.item_count == 1

    def test_exact_fit(self, inventory: Inventory) -> None:
        assert inventory.add_item(make_item("Anvil", "tool", weight=100))
        assert inventory.free_weight == 0

    def test_rejected_add_leaves_sequence(self, inventory: Inventory) -> None:
        inventory.add_item(make_item("A", "tool", weight=40))
        inventory.add_item(make_item("B", "tool", weight=40))
        before = [i.item_id for i in inventory.items]
        inventory.add_item(make_item("C", "tool", weight=30))
        assert [i.item_id for i in inventory.items] == before
        assert inventory.current_weight == 80

    def test_none_is_invalid(self, inventory: Inventory) -> None:
        assert inventory.add_item(None).error == InventoryError.INVALID_ARGUMENT

    def test_same_instance_twice_rejected(self, inventory: Inventory) -> None:
        rope = make_item("Rope", "tool", weight=2)
        assert inventory.add_item(rope)
        result = inventory.add_item(rope)
        assert result.error == InventoryError.INVALID_ARGUMENT
        assert inventory.current_weight == 2

    def test_weight_invariant_over_mixed_adds(self) -> None:
        inv = Inventory(max_weight=500)
        items = [
            make_material("Iron Ore", "ore", rarity=2, value=5, weight=3),
            make_item("Rope", "tool", weight=2),
            make_material("Iron Ore", "ore", rarity=2, value=5, weight=7),
            make_item("Arrow", "ammo", weight=1, value=1, stackable=True),
            make_item("Arrow", "ammo", weight=4, value=1, stackable=True),
            make_equipment("Helm", "head", weight=6),
        ]
        for item in items:
            assert inv.add_item(item)
            assert _weights_consistent(inv)

    def test_expand_capacity(self, inventory: Inventory) -> None:
        assert inventory.expand_capacity(50)
        assert inventory.max_weight == 150
        assert inventory.expand_capacity(-1).error == InventoryError.INVALID_ARGUMENT
        assert inventory.max_weight == 150

    def test_negative_max_weight(self) -> None:
        with pytest.raises(ValueError):
            Inventory(max_weight=-1)


# ── Stacking ──────────────────────────────────────────────────


class TestStacking:
    def test_material_merge(self, inventory: Inventory) -> None:
        a = make_material("Iron Ore", "ore", rarity=2, value=10, weight=3)
        b = make_material("Iron Ore", "ore", rarity=2, value=15, weight=5)
        inventory.add_item(a)
        result = inventory.add_item(b)

        assert result.success and result.merged
        assert inventory.item_count == 1
        merged = inventory.items[0]
        assert merged.value == 25
        assert merged.weight == 5
        assert merged.stackable is True
        assert inventory.current_weight == 5

    def test_material_merge_is_new_instance_in_place(self, inventory: Inventory) -> None:
        inventory.add_item(make_item("Torch", "tool"))
        a = make_material("Iron Ore", "ore", rarity=2, value=10, weight=3)
        inventory.add_item(a)
        inventory.add_item(make_item("Rope", "tool"))
        inventory.add_item(make_material("Iron Ore", "ore", rarity=2, value=1, weight=1))

        stored = inventory.get_item(1)
        assert stored is not a
        assert stored.item_id == a.item_id
        assert a.value == 10  # 원본 불변
        assert [i.name for i in inventory.items] == ["Torch", "Iron Ore", "Rope"]

    def test_other_stackable_adds_value_in_place(self, inventory: Inventory) -> None:
        arrows = make_item("Arrow", "ammo", weight=2, value=3, stackable=True)
        inventory.add_item(arrows)
        inventory.add_item(make_item("Arrow", "ammo", weight=9, value=4, stackable=True))
        assert inventory.item_count == 1
        assert inventory.items[0] is arrows
        assert arrows.value == 7
        assert inventory.current_weight == 2

    def test_different_kind_does_not_merge(self, inventory: Inventory) -> None:
        inventory.add_item(make_material("Amber", "gem", rarity=3, value=1))
        inventory.add_item(make_item("Amber", "gem", value=1, stackable=True))
        assert inventory.item_count == 2

    def test_non_stackable_does_not_merge(self, inventory: Inventory) -> None:
        inventory.add_item(make_item("Rope", "tool"))
        inventory.add_item(make_item("Rope", "tool"))
        assert inventory.item_count == 2

    def test_merge_still_checks_capacity(self) -> None:
        inv = Inventory(max_weight=10)
        inv.add_item(make_material("Ore", "ore", rarity=1, value=1, weight=6))
        result = inv.add_item(make_material("Ore", "ore", rarity=1, value=1, weight=5))
        assert result.error == InventoryError.CAPACITY_EXCEEDED
        assert inv.items[0].value == 1


# ── Remove ────────────────────────────────────────────────────


class TestRemove:
    def test_by_id(self, inventory: Inventory) -> None:
        rope = make_item("Rope", "tool", weight=4)
        inventory.add_item(rope)
        result = inventory.remove_item(rope.item_id)
        assert result.item is rope
        assert inventory.current_weight == 0
        assert inventory.item_count == 0

    def test_by_name_first_match(self, inventory: Inventory) -> None:
        first = make_item("Rope", "tool", weight=1)
        second = make_item("Rope", "tool", weight=2)
        inventory.add_item(first)
        inventory.add_item(second)
        assert inventory.remove_item("Rope").item is first
        assert inventory.current_weight == 2

    def test_not_found(self, inventory: Inventory) -> None:
        inventory.add_item(make_item("Rope", "tool", weight=1))
        result = inventory.remove_item("Lantern")
        assert result.error == InventoryError.ITEM_NOT_FOUND
        assert result.item is None
        assert inventory.item_count == 1
        assert inventory.remove_item(987654).error == InventoryError.ITEM_NOT_FOUND

    def test_invalid_key(self, inventory: Inventory) -> None:
        assert inventory.remove_item(None).error == InventoryError.INVALID_ARGUMENT

    def test_clear(self, inventory: Inventory) -> None:
        inventory.add_item(make_item("Rope", "tool", weight=1))
        inventory.add_item(make_item("Torch", "tool", weight=1))
        assert inventory.clear() == 2
        assert inventory.current_weight == 0
        assert inventory.items == []


# ── Sort / Search ─────────────────────────────────────────────


def _stocked(items: list[Item]) -> Inventory:
    inv = Inventory(max_weight=1000)
    for item in items:
        inv.add_item(item)
    return inv


def _fixed_items() -> list[Item]:
    return [
        make_item("Torch", "tool", item_id=101),
        make_material("Silver Ore", "ore", rarity=3, item_id=102),
        make_item("Rope", "tool", item_id=103),
        make_material("Moonpetal", "herb", rarity=5, item_id=104),
        make_equipment("Iron Helm", "head", item_id=105),
    ]


class TestSortAndSearch:
    def test_sort_replaces_sequence(self) -> None:
        inv = _stocked(_fixed_items())
        ordered = inv.sort(SortKey.NAME)
        assert [i.name for i in ordered] == [i.name for i in inv.items]
        assert [i.name for i in inv.items] == [
            "Iron Helm",
            "Moonpetal",
            "Rope",
            "Silver Ore",
            "Torch",
        ]

    def test_sort_keeps_weight(self) -> None:
        inv = _stocked(_fixed_items())
        before = inv.current_weight
        inv.sort(SortKey.RARITY)
        assert inv.current_weight == before

    def test_name_sorts_agree_for_every_permutation(self) -> None:
        base = _fixed_items()[:4]
        for perm in itertools.permutations(base):
            orders = set()
            for key in (SortKey.NAME, SortKey.ADVANCED):
                inv = _stocked(list(perm))
                orders.add(tuple(i.item_id for i in inv.sort(key)))
            assert len(orders) == 1

    def test_search_after_sort_matches_remove(self) -> None:
        for name in ("Torch", "Silver Ore", "Rope", "Moonpetal", "Iron Helm"):
            inv = _stocked(_fixed_items())
            inv.sort(SortKey.NAME)
            found = inv.search(name)
            removed = inv.remove_item(name).item
            assert found is removed

    def test_search_without_sort(self) -> None:
        inv = _stocked(_fixed_items())
        assert inv.search("Rope").item_id == 103
        assert inv.search("Lantern") is None
        # 검색은 작업 시퀀스 순서를 바꾸지 않는다
        assert [i.item_id for i in inv.items] == [101, 102, 103, 104, 105]

    def test_search_sees_later_changes(self) -> None:
        inv = _stocked(_fixed_items())
        assert inv.search("Lantern") is None
        inv.add_item(make_item("Lantern", "tool", item_id=106))
        assert inv.search("Lantern").item_id == 106
        inv.remove_item(106)
        assert inv.search("Lantern") is None

    def test_search_by_type(self) -> None:
        inv = _stocked(_fixed_items())
        assert [i.item_id for i in inv.search_by_type("tool")] == [101, 103]
        assert inv.search_by_type("food") == []

    def test_recursive_search(self) -> None:
        inv = _stocked(_fixed_items())
        assert inv.recursive_search("herb").item_id == 104
        assert inv.recursive_search("Helm").item_id == 105
        assert inv.recursive_search("dragon") is None

    def test_search_from(self) -> None:
        inv = _stocked(_fixed_items())
        assert inv.search_from("tool", 1).item_id == 103
        assert inv.search_from("tool", 3) is None
        assert inv.search_from("tool", -1) is None
        assert inv.search_from("tool", 5) is None

    def test_contains(self) -> None:
        items = _fixed_items()
        inv = _stocked(items)
        assert inv.contains(items[0])
        assert not inv.contains(make_item("Torch", "tool"))
        assert not inv.contains(None)
        assert inv.contains_name("Torch")
        assert inv.get_item(99) is None


# ── Aggregates / CSV ──────────────────────────────────────────


class TestAggregates:
    def test_total_value_and_statistics(self) -> None:
        inv = _stocked(
            [
                make_item("Torch", "tool", weight=2, value=5),
                make_item("Rope", "tool", weight=3, value=7),
                make_material("Ore", "ore", rarity=1, weight=4, value=11),
            ]
        )
        assert inv.calculate_total_value() == 23
        assert inv.get_statistics() == {
            "tool": 2,
            "material": 1,
            "total_count": 3,
            "total_weight": 9,
            "total_value": 23,
        }

    def test_empty_statistics(self, inventory: Inventory) -> None:
        assert inventory.get_statistics() == {
            "total_count": 0,
            "total_weight": 0,
            "total_value": 0,
        }


class TestCsvExport:
    def test_header_only_when_empty(self, inventory: Inventory) -> None:
        assert inventory.export_to_csv() == "ID,Name,Type,Rarity,Weight,Value,Stackable\n"

    def test_rows_in_sequence_order(self) -> None:
        inv = _stocked(
            [
                make_material("Moonpetal", "herb", rarity=4, value=50, weight=1, item_id=7),
                make_equipment("Crown", "head", required_level=60, weight=3, item_id=8),
                make_equipment("Cap", "head", required_level=5, weight=2, item_id=9),
                make_item("Rope", "tool", weight=2, value=1, item_id=10),
            ]
        )
        lines = inv.export_to_csv().splitlines()
        assert lines == [
            "ID,Name,Type,Rarity,Weight,Value,Stackable",
            "7,Moonpetal,material,★★★★,1,50,true",
            "8,Crown,equipment,★★★★★,3,0,false",
            "9,Cap,equipment,★★★,2,0,false",
            "10,Rope,tool,★,2,1,false",
        ]

    def test_quotes_names_with_commas(self) -> None:
        inv = _stocked([make_item("Salt, Coarse", "food", item_id=11)])
        assert inv.export_to_csv().splitlines()[1] == '11,"Salt, Coarse",food,★,1,0,false'

    def test_export_does_not_mutate(self) -> None:
        inv = _stocked(_fixed_items())
        before = [i.item_id for i in inv.items]
        inv.export_to_csv()
        assert [i.item_id for i in inv.items] == before
