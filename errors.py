"""Exception types raised by MyStuff services and the store."""


class MyStuffError(Exception):
    """Base class for all MyStuff errors."""


class ValidationError(MyStuffError):
    """User input was empty or could not be parsed.

    Raised before any store mutation happens, so the caller can simply
    re-prompt.
    """


class DuplicateNameError(ValidationError):
    """A category with exactly this name already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Category '{name}' already exists")


class StorageError(MyStuffError):
    """The persistence layer failed to load or save."""
