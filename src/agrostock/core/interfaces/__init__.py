"""Core interfaces (ports) for dependency injection."""

from agrostock.core.interfaces.alert_store import AlertDeriver, IAlertStore
from agrostock.core.interfaces.catalog_store import ICatalogStore
from agrostock.core.interfaces.inventory_store import IInventoryRepository, IInventoryStore

__all__ = [
    "IInventoryStore",
    "IInventoryRepository",
    "AlertDeriver",
    "IAlertStore",
    "ICatalogStore",
]
