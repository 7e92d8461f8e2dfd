from datetime import date

import pytest

from models.category import Category
from models.item import Item
from tests.helpers import days_ago

TODAY = date(2025, 6, 15)


class TestDailyAverageCost:
    """Tests for Item.daily_average_cost."""

    def test_purchased_today_costs_full_price(self):
        item = Item(name="Mug", purchase_date=TODAY, price=30.0)

        assert item.daily_average_cost(TODAY) == 30.0

    def test_purchased_in_future_costs_full_price(self):
        item = Item(name="Preorder", purchase_date=date(2025, 7, 1), price=59.99)

        assert item.daily_average_cost(TODAY) == 59.99

    def test_purchased_yesterday(self):
        item = Item(name="Book", purchase_date=days_ago(1, TODAY), price=42.0)

        assert item.daily_average_cost(TODAY) == 42.0

    @pytest.mark.parametrize("days", [2, 7, 30, 365])
    def test_purchased_n_days_ago(self, days):
        item = Item(name="Laptop", purchase_date=days_ago(days, TODAY), price=7300.0)

        assert item.daily_average_cost(TODAY) == pytest.approx(7300.0 / days)

    def test_counts_calendar_days_across_month_boundary(self):
        item = Item(name="Phone", purchase_date=date(2025, 2, 28), price=300.0)

        assert item.days_owned(date(2025, 3, 1)) == 1
        assert item.days_owned(date(2025, 3, 3)) == 3
        assert item.daily_average_cost(date(2025, 3, 3)) == 100.0

    def test_free_item_costs_nothing(self):
        item = Item(name="Gift", purchase_date=days_ago(10, TODAY), price=0.0)

        assert item.daily_average_cost(TODAY) == 0.0

    def test_defaults_to_current_date(self):
        item = Item(name="Chair", purchase_date=days_ago(4), price=80.0)

        assert item.daily_average_cost() == 20.0


class TestIdentity:
    """Entities compare by id, not by field values."""

    def test_ids_are_unique(self):
        a = Item(name="Same", purchase_date=TODAY, price=1.0)
        b = Item(name="Same", purchase_date=TODAY, price=1.0)

        assert a.id != b.id
        assert a != b

    def test_equal_after_mutation(self):
        item = Item(name="Desk", purchase_date=TODAY, price=100.0)
        same = item
        item.price = 120.0

        assert item == same
        assert len({item, same}) == 1

    def test_category_equality_by_id(self):
        category = Category(name="Electronics")
        copy = Category(name="Renamed", id=category.id)

        assert category == copy
        assert category != Category(name="Electronics")

    def test_item_to_dict(self):
        category = Category(name="Kitchen")
        item = Item(
            name="Kettle",
            purchase_date=date(2024, 1, 2),
            price=25.5,
            category_id=category.id,
        )

        assert item.to_dict() == {
            "id": item.id,
            "name": "Kettle",
            "purchase_date": "2024-01-02",
            "price": 25.5,
            "category_id": category.id,
        }
