"""Tests for aggregate item metrics."""

from datetime import date

import pytest

from models.category import Category
from models.item import Item
from tests.helpers import days_ago
from tools.metrics import filtered_items, total_daily_cost, total_value

TODAY = date(2025, 6, 15)


def make_item(name, price, days=0, category=None):
    return Item(
        name=name,
        purchase_date=days_ago(days, TODAY),
        price=price,
        category_id=category.id if category else None,
    )


class TestTotalValue:
    """Tests for total_value."""

    def test_empty(self):
        assert total_value([]) == 0

    def test_sums_prices(self):
        items = [make_item("a", 10.0), make_item("b", 2.5)]

        assert total_value(items) == 12.5

    def test_additive(self):
        first = [make_item("a", 10.0), make_item("b", 20.25)]
        second = [make_item("c", 0.75)]

        assert total_value(first + second) == pytest.approx(
            total_value(first) + total_value(second)
        )


class TestTotalDailyCost:
    """Tests for total_daily_cost."""

    def test_empty(self):
        assert total_daily_cost([], TODAY) == 0

    def test_sums_daily_costs(self):
        items = [
            make_item("today", 30.0, days=0),
            make_item("ten days", 100.0, days=10),
            make_item("future", 5.0, days=-3),
        ]

        assert total_daily_cost(items, TODAY) == pytest.approx(30.0 + 10.0 + 5.0)


class TestFilteredItems:
    """Tests for filtered_items."""

    def test_no_category_returns_everything(self):
        items = [make_item("a", 1.0), make_item("b", 2.0)]

        result = filtered_items(items, None)

        assert result == items
        assert result is not items

    def test_keeps_only_matching_category(self):
        books = Category(name="Books")
        tools = Category(name="Tools")
        novel = make_item("novel", 8.0, category=books)
        items = [novel, make_item("saw", 20.0, category=tools), make_item("loose", 1.0)]

        assert filtered_items(items, books) == [novel]

    def test_unmatched_category_gives_zero_aggregates(self):
        empty = Category(name="Empty")
        items = [make_item("a", 1.0), make_item("b", 2.0, days=4)]

        result = filtered_items(items, empty)

        assert result == []
        assert total_value(result) == 0
        assert total_daily_cost(result, TODAY) == 0
