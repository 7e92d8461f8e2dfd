"""Live summary of the item list for the presentation layer."""

from datetime import date
from typing import Callable, List, Optional

from models.category import Category
from models.item import Item
from tools.metrics import filtered_items, total_daily_cost, total_value

ALL_TITLE = "All"


class Overview:
    """Filtered item list plus its aggregates, kept current with the store.

    The overview subscribes to the store and recomputes from the latest
    snapshot whenever the store reports an insert, delete or save.

    Args:
        store: Store to observe.
        today: Optional callable returning the reference date; defaults to
            date.today.
    """

    def __init__(self, store, today: Optional[Callable[[], date]] = None):
        self.store = store
        self._today = today or date.today
        self.selected_category_id: Optional[str] = None
        self.items: List[Item] = []
        self.total_value = 0.0
        self.total_daily_cost = 0.0
        self.title = ALL_TITLE
        self._listeners: List[Callable[["Overview"], None]] = []
        self._unsubscribe = store.subscribe(lambda event: self.refresh())
        self.refresh()

    @property
    def selected_category(self) -> Optional[Category]:
        if self.selected_category_id is None:
            return None
        return self.store.find_category(self.selected_category_id)

    def select(self, category: Optional[Category]) -> None:
        """Show only one category, or everything when category is None."""
        self.selected_category_id = category.id if category else None
        self.refresh()

    def is_selected(self, category: Optional[Category]) -> bool:
        if category is None:
            return self.selected_category_id is None
        return category.id == self.selected_category_id

    def on_change(self, listener: Callable[["Overview"], None]) -> None:
        """Call listener with this overview after every recompute."""
        self._listeners.append(listener)

    def refresh(self) -> None:
        category = self.selected_category
        if category is None:
            # The selected category may have been deleted
            self.selected_category_id = None

        self.items = filtered_items(self.store.items(), category)
        today = self._today()
        self.total_value = total_value(self.items)
        self.total_daily_cost = total_daily_cost(self.items, today)
        self.title = category.name if category else ALL_TITLE

        for listener in list(self._listeners):
            listener(self)

    def close(self) -> None:
        """Stop observing the store."""
        self._unsubscribe()
