"""Item service and the add/edit form state used by the presentation layer."""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from errors import ValidationError
from models.category import Category
from models.item import Item
from tools.metrics import filtered_items
from logger import get_logger

logger = get_logger()


def parse_price(text: str) -> float:
    """Parse user-entered price text.

    Args:
        text: Price as typed, e.g. "12.50".

    Returns:
        The price as a float.

    Raises:
        ValidationError: If the text is empty, not a number (underscore
            digit grouping included), infinite/NaN, or negative.
    """
    if not text:
        raise ValidationError("Price cannot be empty")
    if "_" in text:
        raise ValidationError(f"Price '{text}' is not a number")
    try:
        price = float(text)
    except ValueError:
        raise ValidationError(f"Price '{text}' is not a number")
    if not math.isfinite(price):
        raise ValidationError(f"Price '{text}' is not a number")
    if price < 0:
        raise ValidationError("Price cannot be negative")
    # "-0" parses to -0.0
    return price + 0.0


def format_price(price: float) -> str:
    """Format a price with two decimals for redisplay in a form."""
    return f"{price:.2f}"


class ItemService:
    """Service for creating, editing and deleting items."""

    def __init__(self, store):
        """Initialize the item service.

        Args:
            store: Store holding items and categories.
        """
        self.store = store

    def find_all(self, category: Optional[Category] = None) -> List[Item]:
        """Get items, most recently purchased first.

        Args:
            category: Only return items in this category. None means all items.
        """
        return filtered_items(self.store.items(), category)

    def find(self, item_id: str) -> Optional[Item]:
        return self.store.find_item(item_id)

    def _validate(
        self, name: str, price_text: str, category: Optional[Category]
    ) -> float:
        if not name:
            raise ValidationError("Item name cannot be empty")
        price = parse_price(price_text)
        if category is not None and self.store.find_category(category.id) is None:
            raise ValidationError(f"Category '{category.name}' does not exist")
        return price

    def create(
        self,
        name: str,
        price_text: str,
        purchase_date: date,
        category: Optional[Category] = None,
    ) -> Item:
        """Create and persist a new item.

        Input is validated before anything is inserted, so a bad price
        leaves the store untouched.

        Raises:
            ValidationError: If the name is empty, the price does not parse,
                or the category is not in the store.
            StorageError: If saving fails.
        """
        price = self._validate(name, price_text, category)

        item = Item(
            name=name,
            purchase_date=purchase_date,
            price=price,
            category_id=category.id if category else None,
        )
        self.store.insert(item)
        self.store.save()
        logger.info(
            f"Created item '{name}', price {price:.2f}, "
            f"category {category.name if category else 'none'}"
        )
        return item

    def edit(
        self,
        item: Item,
        name: str,
        price_text: str,
        purchase_date: date,
        category: Optional[Category] = None,
    ) -> Item:
        """Update every field of an existing item in place and persist it.

        The item keeps its identity. On invalid input nothing is changed and
        the store is not saved.

        Raises:
            ValidationError: If the input is invalid or the item has been
                deleted.
            StorageError: If saving fails.
        """
        if self.store.find_item(item.id) is not item:
            raise ValidationError(f"Item '{item.name}' is no longer in the store")
        price = self._validate(name, price_text, category)

        item.name = name
        item.price = price
        item.purchase_date = purchase_date
        item.category_id = category.id if category else None

        self.store.save()
        logger.info(f"Updated item '{name}'")
        return item

    def delete(self, items: Iterable[Item]) -> int:
        """Delete items and persist the removal.

        Items that are not in the store, or repeated, are skipped.

        Returns:
            Number of items actually deleted.

        Raises:
            StorageError: If saving fails.
        """
        count = 0
        for item in items:
            if self.store.find_item(item.id) is None:
                continue
            self.store.delete(item)
            count += 1
        self.store.save()
        return count


@dataclass
class ItemDraft:
    """Form state for adding a new item or editing an existing one.

    Prices are kept as the text the user typed and only parsed on save.
    """

    name: str = ""
    price: str = ""
    purchase_date: date = field(default_factory=date.today)
    category: Optional[Category] = None
    item: Optional[Item] = None  # set when editing

    @classmethod
    def for_item(cls, item: Item, store) -> "ItemDraft":
        """Pre-populate a draft from an existing item."""
        return cls(
            name=item.name,
            price=format_price(item.price),
            purchase_date=item.purchase_date,
            category=store.category_of(item),
            item=item,
        )

    @property
    def can_save(self) -> bool:
        return bool(self.name) and bool(self.price)

    def add_category(self, categories, name: str) -> Category:
        """Create a category from inside the form and select it.

        Args:
            categories: CategoryService used to create the category.
            name: Name of the new category.

        Raises:
            ValidationError: If the name is empty.
            DuplicateNameError: If the name is already taken.
        """
        category = categories.create(name)
        self.category = category
        return category

    def save(self, items: ItemService) -> Item:
        """Create or update the item described by this draft."""
        if self.item is None:
            return items.create(
                self.name, self.price, self.purchase_date, self.category
            )
        return items.edit(
            self.item, self.name, self.price, self.purchase_date, self.category
        )
