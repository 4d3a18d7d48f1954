"""Application use cases."""

from agrostock.application.use_cases.adjust_stock import AdjustStockUseCase
from agrostock.application.use_cases.compute_day_total import ComputeDayTotalUseCase
from agrostock.application.use_cases.manage_alerts import (
    ListAlertsUseCase,
    MarkAlertReadUseCase,
)
from agrostock.application.use_cases.manage_inventory_item import (
    CreateInventoryItemUseCase,
    DeleteInventoryItemUseCase,
    GetInventoryItemUseCase,
    ListInventoryItemsUseCase,
    UpdateInventoryItemUseCase,
)
from agrostock.application.use_cases.query_inventory import (
    GetStockByProductsUseCase,
    ListMovementsUseCase,
)
from agrostock.application.use_cases.resolve_inventory_item import (
    ResolveInventoryItemUseCase,
)

__all__ = [
    "AdjustStockUseCase",
    "ComputeDayTotalUseCase",
    "CreateInventoryItemUseCase",
    "UpdateInventoryItemUseCase",
    "DeleteInventoryItemUseCase",
    "GetInventoryItemUseCase",
    "ListInventoryItemsUseCase",
    "ResolveInventoryItemUseCase",
    "GetStockByProductsUseCase",
    "ListMovementsUseCase",
    "ListAlertsUseCase",
    "MarkAlertReadUseCase",
]
