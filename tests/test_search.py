"""Tests for the name search filter."""
from pantry_tracker.core.models import InventoryItem
from pantry_tracker.services.search import filter_items


ITEMS = [
    InventoryItem(name="Apple", quantity=2),
    InventoryItem(name="banana", quantity=1),
]


class TestFilterItems:
    def test_case_insensitive_substring(self):
        """'an' matches banana only."""
        assert filter_items(ITEMS, "an") == [InventoryItem(name="banana", quantity=1)]

    def test_empty_term_returns_everything_in_order(self):
        assert filter_items(ITEMS, "") == ITEMS

    def test_upper_case_term_matches_lower_case_name(self):
        assert [item.name for item in filter_items(ITEMS, "BAN")] == ["banana"]

    def test_no_match(self):
        assert filter_items(ITEMS, "cherry") == []

    def test_preserves_relative_order(self):
        items = [
            InventoryItem(name="Pasta", quantity=1),
            InventoryItem(name="rice", quantity=4),
            InventoryItem(name="pasta sauce", quantity=2),
        ]
        assert [item.name for item in filter_items(items, "pasta")] == ["Pasta", "pasta sauce"]

    def test_returns_new_list(self):
        result = filter_items(ITEMS, "")
        result.append(InventoryItem(name="cherry", quantity=1))
        assert len(ITEMS) == 2
