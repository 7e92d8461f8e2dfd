"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager
from db.store import Store


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject a test database.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is ignored.
    """

    def __init__(self, config: Config, db_manager=None):
        """Initialize services with configuration.

        The store is loaded immediately; a failure here is not recoverable.

        Args:
            config: Config object containing application configuration.
            db_manager: Optional database manager for dependency injection (testing).
                       If None, creates DatabaseManager from config.

        Raises:
            StorageError: If the store cannot be loaded.
        """
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)
        self.store = Store(self.db_manager)
        self.store.load()

        # Lazy import to avoid circular dependencies
        from services.categories import CategoryService
        from services.items import ItemService

        self.categories = CategoryService(self.store)
        self.items = ItemService(self.store)
