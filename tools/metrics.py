"""Aggregate cost metrics over lists of items."""

from datetime import date
from typing import List, Optional, Sequence
from models.category import Category
from models.item import Item


def filtered_items(
    items: Sequence[Item], category: Optional[Category] = None
) -> List[Item]:
    """Restrict items to a single category.

    Args:
        items: Items to filter.
        category: Category to keep. None means no filtering ("All").

    Returns:
        Items whose category id matches, in their original order.
    """
    if category is None:
        return list(items)
    return [item for item in items if item.category_id == category.id]


def total_value(items: Sequence[Item]) -> float:
    """Sum of item prices. 0 for an empty list."""
    return sum((item.price for item in items), 0.0)


def total_daily_cost(items: Sequence[Item], today: Optional[date] = None) -> float:
    """Sum of each item's daily average cost.

    Args:
        items: Items to sum over.
        today: Reference date, defaults to the current date.
    """
    today = today or date.today()
    return sum((item.daily_average_cost(today) for item in items), 0.0)
