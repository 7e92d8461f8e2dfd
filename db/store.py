"""Persistence context for items and categories.

The store keeps every loaded entity in memory, stages inserts and deletes,
and writes all pending work to SQLite in a single transaction on save().
Listeners registered with subscribe() are told about every change so views
can recompute from the latest snapshot.
"""

import sqlite3
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional, Set, Tuple, Union

from errors import StorageError, ValidationError
from models.category import Category
from models.item import Item
from logger import get_logger

logger = get_logger()

Entity = Union[Category, Item]


@dataclass(frozen=True)
class ChangeEvent:
    """Notification sent to store listeners.

    Attributes:
        action: One of "insert", "delete" or "save".
        entities: Entities affected by the change (empty for "save").
    """

    action: str
    entities: Tuple[Entity, ...] = ()


class Store:
    """In-memory identity map over the SQLite database.

    Relationships are tracked by a two-sided index: category id to the set
    of item ids in it, and item id to its category id. Deleting a category
    fans out through the index and deletes its items in the same unit of
    work.

    Args:
        db_manager: Database manager used for loading and saving.
    """

    def __init__(self, db_manager):
        self.db_manager = db_manager
        self._categories: Dict[str, Category] = {}
        self._items: Dict[str, Item] = {}
        self._category_items: Dict[str, Set[str]] = {}
        self._item_category: Dict[str, Optional[str]] = {}
        # Row snapshots as of the last load/save, keyed by entity id
        self._persisted: Dict[str, dict] = {}
        self._deleted: Dict[str, Entity] = {}
        self._listeners: List[Callable[[ChangeEvent], None]] = []

    def load(self) -> None:
        """Read all categories and items from the database.

        Discards anything staged but not yet saved.

        Raises:
            StorageError: If the database cannot be read.
        """
        try:
            with self.db_manager.connect() as conn:
                category_rows = conn.execute(
                    "SELECT id, name FROM categories ORDER BY rowid"
                ).fetchall()
                item_rows = conn.execute(
                    "SELECT id, name, purchase_date, price, category_id FROM items"
                ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Failed to load store: {e}")
            raise StorageError(f"Failed to load store: {e}") from e

        self._categories = {}
        self._items = {}
        self._category_items = {}
        self._item_category = {}
        self._persisted = {}
        self._deleted = {}

        for row in category_rows:
            category = Category(id=row[0], name=row[1])
            self._categories[category.id] = category
            self._category_items[category.id] = set()
            self._persisted[category.id] = category.to_dict()

        for row in item_rows:
            item = Item(
                id=row[0],
                name=row[1],
                purchase_date=date.fromisoformat(row[2]),
                price=float(row[3]),
                category_id=row[4],
            )
            self._items[item.id] = item
            self._index_add(item)
            self._persisted[item.id] = item.to_dict()

        logger.debug(
            f"Loaded {len(self._categories)} categories and {len(self._items)} items"
        )

    # -- listeners -----------------------------------------------------------

    def subscribe(self, listener: Callable[[ChangeEvent], None]) -> Callable[[], None]:
        """Register a listener for change notifications.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, action: str, entities: Tuple[Entity, ...] = ()) -> None:
        event = ChangeEvent(action=action, entities=entities)
        for listener in list(self._listeners):
            listener(event)

    # -- mutations -----------------------------------------------------------

    def insert(self, entity: Entity) -> None:
        """Stage a new category or item.

        Inserting an entity that is already live is a no-op.

        Raises:
            ValidationError: If an item points at a category not in the store.
            TypeError: If entity is not a Category or Item.
        """
        if isinstance(entity, Category):
            if entity.id in self._categories:
                return
            self._categories[entity.id] = entity
            self._category_items[entity.id] = set()
        elif isinstance(entity, Item):
            if entity.id in self._items:
                return
            self._check_category(entity)
            self._items[entity.id] = entity
            self._index_add(entity)
        else:
            raise TypeError(f"Cannot insert {type(entity).__name__} into store")

        self._deleted.pop(entity.id, None)
        logger.debug(f"Inserted {type(entity).__name__.lower()} '{entity.name}'")
        self._emit("insert", (entity,))

    def delete(self, entity: Entity) -> None:
        """Stage removal of a category or item.

        Deleting a category also deletes every item assigned to it.
        Deleting an entity that is not live is a no-op.
        """
        self._sync_index()

        removed: List[Entity] = []
        if isinstance(entity, Category):
            if entity.id not in self._categories:
                return
            for item_id in sorted(self._category_items.pop(entity.id, set())):
                removed.append(self._remove_item(item_id))
            removed.append(self._categories.pop(entity.id))
            logger.info(
                f"Deleting category '{entity.name}' and {len(removed) - 1} item(s)"
            )
        elif isinstance(entity, Item):
            if entity.id not in self._items:
                return
            removed.append(self._remove_item(entity.id))
            logger.info(f"Deleting item '{entity.name}'")
        else:
            raise TypeError(f"Cannot delete {type(entity).__name__} from store")

        for gone in removed:
            if gone.id in self._persisted:
                self._deleted[gone.id] = gone

        self._emit("delete", tuple(removed))

    def save(self) -> None:
        """Write all pending changes in one transaction.

        Pending work stays staged when the write fails, so save() can be
        retried. In-memory edits are not rolled back.

        Raises:
            ValidationError: If an item references a category that is gone.
            StorageError: If the database write fails.
        """
        self._sync_index()
        for item in self._items.values():
            self._check_category(item)

        category_rows = [
            c.to_dict()
            for c in self._categories.values()
            if self._persisted.get(c.id) != c.to_dict()
        ]
        item_rows = [
            i.to_dict()
            for i in self._items.values()
            if self._persisted.get(i.id) != i.to_dict()
        ]
        deleted_items = [e.id for e in self._deleted.values() if isinstance(e, Item)]
        deleted_categories = [
            e.id for e in self._deleted.values() if isinstance(e, Category)
        ]

        if category_rows or item_rows or self._deleted:
            try:
                with self.db_manager.connect() as conn:
                    try:
                        self._write(
                            conn,
                            category_rows,
                            item_rows,
                            deleted_items,
                            deleted_categories,
                        )
                        conn.commit()
                    except sqlite3.Error:
                        conn.rollback()
                        raise
            except sqlite3.Error as e:
                logger.error(f"Failed to save changes: {e}")
                raise StorageError(f"Failed to save changes: {e}") from e

            for row in category_rows + item_rows:
                self._persisted[row["id"]] = row
            for entity_id in self._deleted:
                self._persisted.pop(entity_id, None)
            self._deleted = {}

            logger.info(
                f"Saved {len(category_rows)} category(ies), {len(item_rows)} item(s), "
                f"deleted {len(deleted_categories)} category(ies) and "
                f"{len(deleted_items)} item(s)"
            )

        self._emit("save")

    @property
    def has_changes(self) -> bool:
        """Whether anything is waiting to be saved."""
        if self._deleted:
            return True
        for entity in list(self._categories.values()) + list(self._items.values()):
            if self._persisted.get(entity.id) != entity.to_dict():
                return True
        return False

    # -- queries -------------------------------------------------------------

    def items(self) -> List[Item]:
        """All items, most recently purchased first."""
        return sorted(
            self._items.values(), key=lambda item: item.purchase_date, reverse=True
        )

    def categories(self) -> List[Category]:
        """All categories in the order they were created."""
        return list(self._categories.values())

    def find_item(self, item_id: str) -> Optional[Item]:
        return self._items.get(item_id)

    def find_category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def find_category_by_name(self, name: str) -> Optional[Category]:
        """Exact, case-sensitive lookup by name."""
        for category in self._categories.values():
            if category.name == name:
                return category
        return None

    def items_in(self, category: Category) -> List[Item]:
        """Items assigned to a category, most recently purchased first."""
        self._sync_index()
        ids = self._category_items.get(category.id, set())
        return [item for item in self.items() if item.id in ids]

    def category_of(self, item: Item) -> Optional[Category]:
        if item.category_id is None:
            return None
        return self._categories.get(item.category_id)

    # -- internals -----------------------------------------------------------

    def _check_category(self, item: Item) -> None:
        if item.category_id is not None and item.category_id not in self._categories:
            raise ValidationError(
                f"Item '{item.name}' refers to a category that is not in the store"
            )

    def _index_add(self, item: Item) -> None:
        self._item_category[item.id] = item.category_id
        if item.category_id is not None:
            self._category_items.setdefault(item.category_id, set()).add(item.id)

    def _index_remove(self, item_id: str) -> None:
        category_id = self._item_category.pop(item_id, None)
        if category_id is not None:
            self._category_items.get(category_id, set()).discard(item_id)

    def _sync_index(self) -> None:
        """Pick up category reassignments made by editing items in place."""
        for item in self._items.values():
            if self._item_category.get(item.id) != item.category_id:
                self._index_remove(item.id)
                self._index_add(item)

    def _remove_item(self, item_id: str) -> Item:
        self._index_remove(item_id)
        return self._items.pop(item_id)

    @staticmethod
    def _write(conn, category_rows, item_rows, deleted_items, deleted_categories):
        # Upserts first so items moved out of a deleted category survive its
        # ON DELETE CASCADE
        conn.executemany(
            """
            INSERT INTO categories (id, name) VALUES (:id, :name)
            ON CONFLICT(id) DO UPDATE SET name = excluded.name
            """,
            category_rows,
        )
        conn.executemany(
            """
            INSERT INTO items (id, name, purchase_date, price, category_id)
            VALUES (:id, :name, :purchase_date, :price, :category_id)
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                purchase_date = excluded.purchase_date,
                price = excluded.price,
                category_id = excluded.category_id
            """,
            item_rows,
        )
        conn.executemany(
            "DELETE FROM items WHERE id = ?", [(i,) for i in deleted_items]
        )
        conn.executemany(
            "DELETE FROM categories WHERE id = ?", [(c,) for c in deleted_categories]
        )
