"""Category service: creation rules and cascading delete."""

from typing import List, Optional

from errors import DuplicateNameError, ValidationError
from models.category import Category
from logger import get_logger

logger = get_logger()


class CategoryService:
    """Service for managing categories."""

    def __init__(self, store):
        """Initialize the category service.

        Args:
            store: Store holding items and categories.
        """
        self.store = store

    def find_all(self) -> List[Category]:
        """Get all categories.

        Returns:
            List of Category objects, in the order they were created.
        """
        return self.store.categories()

    def find(self, category_id: str) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        return self.store.find_category(category_id)

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get a single category by exact, case-sensitive name.

        Args:
            name: The category name to find.

        Returns:
            Category object if found, None otherwise.
        """
        return self.store.find_category_by_name(name)

    def validate_name(self, name: str) -> None:
        """Check a candidate category name without creating anything.

        Only the empty string is rejected; names are not trimmed, so
        whitespace-only names and names differing only in case or
        surrounding spaces are all allowed.

        Raises:
            ValidationError: If the name is empty.
            DuplicateNameError: If a category with this exact name exists.
        """
        if not name:
            raise ValidationError("Category name cannot be empty")
        if self.find_by_name(name) is not None:
            raise DuplicateNameError(name)

    def create(self, name: str) -> Category:
        """Create and persist a new category.

        Args:
            name: Category name.

        Returns:
            The created Category.

        Raises:
            ValidationError: If the name is empty.
            DuplicateNameError: If the name is already taken.
            StorageError: If saving fails.
        """
        self.validate_name(name)

        category = Category(name=name)
        self.store.insert(category)
        self.store.save()
        logger.info(f"Created category '{name}'")
        return category

    def count_items(self, category: Category) -> int:
        """Number of items currently in the category."""
        return len(self.store.items_in(category))

    def delete(self, category: Category) -> int:
        """Delete a category together with all of its items.

        Args:
            category: The category to delete.

        Returns:
            Number of items deleted along with the category.

        Raises:
            StorageError: If saving fails.
        """
        item_count = self.count_items(category)
        self.store.delete(category)
        self.store.save()
        logger.info(f"Deleted category '{category.name}' ({item_count} item(s))")
        return item_count
