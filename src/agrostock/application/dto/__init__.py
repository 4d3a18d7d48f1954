"""Request and response DTOs."""

from agrostock.application.dto.requests import (
    AdjustStockRequest,
    CreateInventoryItemRequest,
    DayTotalRequest,
    UpdateInventoryItemRequest,
)
from agrostock.application.dto.responses import (
    AdjustDetailResponse,
    AdjustStockResponse,
    AlertListResponse,
    DayTotalResponse,
    ErrorResponse,
    HealthResponse,
    InventoryAlertResponse,
    InventoryItemResponse,
    InventoryListResponse,
    InventoryMovementResponse,
    LineCostResponse,
    MovementListResponse,
    StockSnapshotResponse,
)

__all__ = [
    # Requests
    "AdjustStockRequest",
    "CreateInventoryItemRequest",
    "UpdateInventoryItemRequest",
    "DayTotalRequest",
    # Responses
    "AdjustDetailResponse",
    "AdjustStockResponse",
    "AlertListResponse",
    "DayTotalResponse",
    "ErrorResponse",
    "HealthResponse",
    "InventoryAlertResponse",
    "InventoryItemResponse",
    "InventoryListResponse",
    "InventoryMovementResponse",
    "LineCostResponse",
    "MovementListResponse",
    "StockSnapshotResponse",
]
