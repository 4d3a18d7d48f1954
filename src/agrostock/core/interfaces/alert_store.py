"""Abstract interface for inventory alert storage."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from agrostock.core.entities.alert import InventoryAlert
from agrostock.core.entities.inventory import InventoryItem

AlertDeriver = Callable[[InventoryItem], list[InventoryAlert]]


class IAlertStore(ABC):
    """Interface for the derived alert working set."""

    @abstractmethod
    async def refresh_item_alerts(
        self, user_id: str, item_id: int, derive: AlertDeriver
    ) -> list[InventoryAlert]:
        """
        Replace an item's alerts with derive(item), atomically.

        The item is read inside the same write transaction that replaces its
        alerts, so the stored set always matches the latest committed stock.
        A missing item ends up with no alerts.
        """
        pass

    @abstractmethod
    async def list_alerts(
        self, user_id: str, unread_only: bool = True, limit: int = 100
    ) -> list[InventoryAlert]:
        """List alerts, newest first."""
        pass

    @abstractmethod
    async def list_item_alerts(self, user_id: str, item_id: int) -> list[InventoryAlert]:
        """List all alerts of one item."""
        pass

    @abstractmethod
    async def mark_read(self, user_id: str, alert_id: int) -> InventoryAlert | None:
        """Mark an alert as read. Returns None if it does not exist."""
        pass
