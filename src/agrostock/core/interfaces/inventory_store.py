"""Abstract interfaces for inventory storage."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime

from agrostock.core.entities.catalog import LegacyInventoryRecord, ProductCatalogEntry
from agrostock.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementModule,
    StockSnapshot,
)


class IInventoryRepository(ABC):
    """
    Inventory operations bound to one storage transaction.

    Obtained from IInventoryStore.transaction(). Everything done through one
    repository commits or rolls back together.
    """

    @abstractmethod
    async def get_item(self, user_id: str, item_id: int) -> InventoryItem | None:
        """Get an inventory item by ID, active or not."""
        pass

    @abstractmethod
    async def get_item_by_product(
        self, user_id: str, product_id: str
    ) -> InventoryItem | None:
        """Get the active inventory item linked to a catalog product."""
        pass

    @abstractmethod
    async def get_item_by_name(
        self, user_id: str, product_name: str
    ) -> InventoryItem | None:
        """Get an active item with this product name not yet linked to any product id."""
        pass

    @abstractmethod
    async def get_product(
        self, user_id: str, product_id: str
    ) -> ProductCatalogEntry | None:
        """Get a catalog entry by ID."""
        pass

    @abstractmethod
    async def get_legacy_record(
        self, user_id: str, name: str
    ) -> LegacyInventoryRecord | None:
        """Get a pre-catalog inventory record by name."""
        pass

    @abstractmethod
    async def create_item(self, item: InventoryItem) -> InventoryItem:
        """Insert a new inventory item."""
        pass

    @abstractmethod
    async def update_item(self, item: InventoryItem) -> InventoryItem:
        """Update descriptive fields and thresholds. Never touches current_stock."""
        pass

    @abstractmethod
    async def increment_stock(
        self, user_id: str, item_id: int, amount: float
    ) -> InventoryItem | None:
        """
        Atomically add to an active item's stock.

        Returns the updated item, or None if no active item matched.
        """
        pass

    @abstractmethod
    async def decrement_stock(
        self, user_id: str, item_id: int, amount: float
    ) -> InventoryItem | None:
        """
        Atomically subtract from an active item's stock if enough is available.

        The availability check and the write happen in one conditional
        update. Returns the updated item, or None if the condition failed.
        """
        pass

    @abstractmethod
    async def add_movement(self, movement: InventoryMovement) -> InventoryMovement:
        """Append a movement record."""
        pass


class IInventoryStore(ABC):
    """Interface for inventory persistence."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[IInventoryRepository]:
        """
        Open a transactional repository.

        Commits when the block exits normally, rolls back on exception.
        Storage failures surface as TransactionFailedError.
        """
        pass

    @abstractmethod
    async def get_item(self, user_id: str, item_id: int) -> InventoryItem | None:
        """Get an inventory item by ID."""
        pass

    @abstractmethod
    async def list_items(
        self, user_id: str, limit: int = 100, offset: int = 0
    ) -> list[InventoryItem]:
        """List active inventory items with pagination."""
        pass

    @abstractmethod
    async def get_stock_by_products(
        self, user_id: str, product_ids: list[str]
    ) -> dict[str, StockSnapshot]:
        """Read current stock for several products. Advisory, not transactional."""
        pass

    @abstractmethod
    async def deactivate_item(self, user_id: str, item_id: int) -> bool:
        """Soft-delete an item. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def list_movements(
        self,
        user_id: str,
        product_id: str | None = None,
        activity_id: str | None = None,
        module: MovementModule | None = None,
        created_from: datetime | None = None,
        created_to: datetime | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InventoryMovement]:
        """Query the movement log, newest first."""
        pass
