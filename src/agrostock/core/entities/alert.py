"""Inventory alert entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class AlertType(str, Enum):
    """Kinds of inventory alerts."""

    LOW_STOCK = "low_stock"
    CRITICAL_STOCK = "critical_stock"
    EXPIRY_WARNING = "expiry_warning"


class AlertSeverity(str, Enum):
    """Alert severity levels."""

    WARNING = "warning"
    CRITICAL = "critical"


class InventoryAlert(BaseModel):
    """Derived alert for an inventory item; regenerated on every stock change."""

    id: int | None = None
    user_id: str
    item_id: int
    product_name: str
    type: AlertType
    message: str
    severity: AlertSeverity
    read: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
