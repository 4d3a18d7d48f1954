"""SQLite storage implementations."""

from agrostock.infrastructure.storage.sqlite.alert_store import SQLiteAlertStore
from agrostock.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore
from agrostock.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from agrostock.infrastructure.storage.sqlite.inventory_store import (
    SQLiteInventoryRepository,
    SQLiteInventoryStore,
)

# Singleton instances
_inventory_store: SQLiteInventoryStore | None = None
_alert_store: SQLiteAlertStore | None = None
_catalog_store: SQLiteCatalogStore | None = None


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_alert_store() -> SQLiteAlertStore:
    """Get singleton alert store instance."""
    global _alert_store
    if _alert_store is None:
        _alert_store = SQLiteAlertStore()
    return _alert_store


async def get_catalog_store() -> SQLiteCatalogStore:
    """Get singleton catalog store instance."""
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = SQLiteCatalogStore()
    return _catalog_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteInventoryRepository",
    "SQLiteInventoryStore",
    "SQLiteAlertStore",
    "SQLiteCatalogStore",
    # Factory functions
    "get_inventory_store",
    "get_alert_store",
    "get_catalog_store",
]
