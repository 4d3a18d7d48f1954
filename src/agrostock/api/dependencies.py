"""
Dependency injection container for FastAPI.

Provides use case instances and the calling user to route handlers.
"""

from fastapi import Header, HTTPException, status

from agrostock.application.use_cases import (
    AdjustStockUseCase,
    ComputeDayTotalUseCase,
    CreateInventoryItemUseCase,
    DeleteInventoryItemUseCase,
    GetInventoryItemUseCase,
    GetStockByProductsUseCase,
    ListAlertsUseCase,
    ListInventoryItemsUseCase,
    ListMovementsUseCase,
    MarkAlertReadUseCase,
    ResolveInventoryItemUseCase,
    UpdateInventoryItemUseCase,
)


def get_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Caller identity; every inventory operation is scoped to it."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return x_user_id.strip()


# Use case dependencies
def get_list_items_use_case() -> ListInventoryItemsUseCase:
    return ListInventoryItemsUseCase()


def get_get_item_use_case() -> GetInventoryItemUseCase:
    return GetInventoryItemUseCase()


def get_create_item_use_case() -> CreateInventoryItemUseCase:
    return CreateInventoryItemUseCase()


def get_update_item_use_case() -> UpdateInventoryItemUseCase:
    return UpdateInventoryItemUseCase()


def get_delete_item_use_case() -> DeleteInventoryItemUseCase:
    return DeleteInventoryItemUseCase()


def get_resolve_item_use_case() -> ResolveInventoryItemUseCase:
    return ResolveInventoryItemUseCase()


def get_adjust_stock_use_case() -> AdjustStockUseCase:
    return AdjustStockUseCase()


def get_stock_by_products_use_case() -> GetStockByProductsUseCase:
    return GetStockByProductsUseCase()


def get_list_movements_use_case() -> ListMovementsUseCase:
    return ListMovementsUseCase()


def get_list_alerts_use_case() -> ListAlertsUseCase:
    return ListAlertsUseCase()


def get_mark_alert_read_use_case() -> MarkAlertReadUseCase:
    return MarkAlertReadUseCase()


def get_day_total_use_case() -> ComputeDayTotalUseCase:
    return ComputeDayTotalUseCase()
