"""Category model for grouping items."""

import uuid
from dataclasses import dataclass, field


@dataclass(eq=False)
class Category:
    """Represents a user-defined category of belongings.

    Attributes:
        name: Category name (unique by convention, checked by the service).
        id: Stable identifier, generated when the category is constructed.
    """

    name: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> dict:
        """Convert category to dictionary for database storage."""
        return {"id": self.id, "name": self.name}
