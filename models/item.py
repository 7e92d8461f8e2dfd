import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(eq=False)
class Item:
    name: str
    purchase_date: date
    price: float  # never negative
    category_id: Optional[str] = None  # None means uncategorized
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def days_owned(self, today: Optional[date] = None) -> int:
        """Whole calendar days since purchase, never less than 1."""
        today = today or date.today()
        return max((today - self.purchase_date).days, 1)

    def daily_average_cost(self, today: Optional[date] = None) -> float:
        """Price spread over the days the item has been owned.

        Recomputed on every call, so the value drops as time passes.
        Items bought today or dated in the future count as one day.
        """
        return self.price / self.days_owned(today)

    def to_dict(self) -> dict:
        """Convert item to dictionary for database storage."""
        return {
            "id": self.id,
            "name": self.name,
            "purchase_date": self.purchase_date.isoformat(),
            "price": float(self.price),
            "category_id": self.category_id,
        }
