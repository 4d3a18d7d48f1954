"""Domain entities."""

from agrostock.core.entities.alert import AlertSeverity, AlertType, InventoryAlert
from agrostock.core.entities.catalog import (
    LegacyInventoryRecord,
    ProductCatalogEntry,
    ProductType,
)
from agrostock.core.entities.costs import (
    DailyLineItem,
    DayRecord,
    DayTotal,
    LineCost,
    LineKind,
    OtherExpense,
    WaterUsage,
)
from agrostock.core.entities.inventory import (
    AdjustDetail,
    AdjustErrorCode,
    AdjustmentContext,
    AdjustResult,
    InventoryItem,
    InventoryMovement,
    MovementModule,
    MovementOperation,
    StockOperation,
    StockSnapshot,
)

__all__ = [
    # Catalog
    "ProductCatalogEntry",
    "ProductType",
    "LegacyInventoryRecord",
    # Inventory
    "InventoryItem",
    "InventoryMovement",
    "MovementOperation",
    "MovementModule",
    "StockSnapshot",
    "StockOperation",
    "AdjustmentContext",
    "AdjustErrorCode",
    "AdjustDetail",
    "AdjustResult",
    # Alerts
    "InventoryAlert",
    "AlertType",
    "AlertSeverity",
    # Costs
    "DailyLineItem",
    "WaterUsage",
    "OtherExpense",
    "DayRecord",
    "LineCost",
    "LineKind",
    "DayTotal",
]
