"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


class InventoryItemResponse(BaseModel):
    """Inventory item response DTO."""

    id: int = Field(..., description="Inventory item ID")
    product_id: str | None = Field(default=None, description="Linked catalog product")
    product_name: str
    product_type: str
    current_stock: float
    min_stock: float
    critical_stock: float
    unit: str
    location: str
    expiry_date: date | None = None
    active: bool = True
    is_low: bool = Field(default=False, description="Stock at or below min_stock")
    is_critical: bool = Field(default=False, description="Stock at or below critical_stock")
    last_updated: datetime
    created_at: datetime
    updated_at: datetime


class InventoryListResponse(BaseModel):
    """List of active inventory items."""

    items: list[InventoryItemResponse] = Field(default_factory=list)
    total: int = 0


class InventoryMovementResponse(BaseModel):
    """Stock movement response DTO."""

    id: int
    inventory_item_id: int
    product_id: str | None = None
    product_name: str | None = None
    operation: str
    amount: float = Field(..., description="Amount as requested")
    unit: str = Field(..., description="Unit of the requested amount")
    amount_in_item_unit: float
    balance_after: float
    reason: str | None = None
    activity_id: str | None = None
    module: str | None = None
    day_index: int | None = None
    created_at: datetime


class MovementListResponse(BaseModel):
    movements: list[InventoryMovementResponse] = Field(default_factory=list)
    total: int = 0


class InventoryAlertResponse(BaseModel):
    """Inventory alert response DTO."""

    id: int
    item_id: int
    product_name: str
    type: str
    message: str
    severity: str
    read: bool
    created_at: datetime


class AlertListResponse(BaseModel):
    alerts: list[InventoryAlertResponse] = Field(default_factory=list)
    total: int = 0


class StockSnapshotResponse(BaseModel):
    """Advisory stock reading for one product."""

    item_id: int
    product_id: str
    current_stock: float
    unit: str


class AdjustDetailResponse(BaseModel):
    product_id: str
    available: float | None = None
    requested: float
    unit: str


class AdjustStockResponse(BaseModel):
    """Structured outcome of a stock adjustment batch."""

    ok: bool
    error: str | None = Field(
        default=None,
        description="inventory_item_not_found | insufficient_stock | transaction_failed",
    )
    details: list[AdjustDetailResponse] | None = None
    balances: dict[str, float] | None = Field(
        default=None, description="New balance per product, in the item's unit"
    )


class LineCostResponse(BaseModel):
    kind: str
    product_id: str | None = None
    amount: float
    unit: str | None = None
    quantity: float
    quantity_unit: str | None = None
    unit_price: float
    cost: float
    priced_from_catalog: bool


class DayTotalResponse(BaseModel):
    """Cost breakdown of an activity day."""

    total: float
    fertilizers_cost: float
    phytosanitaries_cost: float
    water_cost: float
    other_expenses_cost: float
    per_line_cost: list[LineCostResponse] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status: healthy | degraded")
    version: str
    database: str = Field(..., description="ok | error")
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INVENTORY_ITEM_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
