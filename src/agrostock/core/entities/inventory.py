"""Inventory domain entities."""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from agrostock.core.entities.catalog import ProductType


def _utcnow() -> datetime:
    return datetime.now(UTC)


class MovementOperation(str, Enum):
    """Direction of a stock movement."""

    ADD = "add"
    SUBTRACT = "subtract"


class MovementModule(str, Enum):
    """Activity module that triggered a movement."""

    FERTIGATION = "fertigation"
    PHYTOSANITARY = "phytosanitary"
    WATER = "water"


class InventoryItem(BaseModel):
    """Tracks the stock level of one product for one user."""

    id: int | None = None
    user_id: str
    product_id: str | None = None
    product_name: str
    product_type: ProductType = ProductType.OTHER
    current_stock: float = Field(default=0.0, ge=0)
    min_stock: float = Field(default=0.0, ge=0)
    critical_stock: float = Field(default=0.0, ge=0)
    unit: str = "kg"
    location: str = "almacén"
    expiry_date: date | None = None
    active: bool = True
    last_updated: datetime = Field(default_factory=_utcnow)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_low(self) -> bool:
        """Stock at or below the minimum threshold."""
        return self.current_stock <= self.min_stock

    @property
    def is_critical(self) -> bool:
        """Stock at or below the critical threshold."""
        return self.current_stock <= self.critical_stock


class InventoryMovement(BaseModel):
    """Immutable audit record of one applied stock operation."""

    id: int | None = None
    user_id: str
    inventory_item_id: int
    product_id: str | None = None
    product_name: str | None = None
    operation: MovementOperation
    amount: float = Field(ge=0)  # as requested
    unit: str  # unit of the requested amount
    amount_in_item_unit: float = Field(ge=0)
    balance_after: float = Field(ge=0)
    reason: str | None = None
    activity_id: str | None = None
    module: MovementModule | None = None
    day_index: int | None = Field(default=None, ge=0)
    created_at: datetime = Field(default_factory=_utcnow)


class StockSnapshot(BaseModel):
    """Advisory stock reading for client-side warnings."""

    item_id: int
    product_id: str
    current_stock: float
    unit: str


class AdjustmentContext(BaseModel):
    """Provenance of an adjustment, linking it to an activity day."""

    activity_id: str | None = None
    module: MovementModule | None = None
    day_index: int | None = Field(default=None, ge=0)


class StockOperation(BaseModel):
    """One line of a stock adjustment batch."""

    product_id: str
    amount: float = Field(ge=0)
    amount_unit: str | None = None  # defaults to the item's unit
    operation: MovementOperation = MovementOperation.SUBTRACT
    reason: str | None = None
    context: AdjustmentContext | None = None


class AdjustErrorCode(str, Enum):
    """Reasons an adjustment batch was rejected."""

    INVENTORY_ITEM_NOT_FOUND = "inventory_item_not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    TRANSACTION_FAILED = "transaction_failed"


class AdjustDetail(BaseModel):
    """Per-line detail of a rejected batch, in the item's unit where known."""

    product_id: str
    available: float | None = None
    requested: float
    unit: str


class AdjustResult(BaseModel):
    """Structured outcome of an adjustment batch."""

    ok: bool
    error: AdjustErrorCode | None = None
    details: list[AdjustDetail] | None = None
    balances: dict[str, float] | None = None

    @classmethod
    def success(cls, balances: dict[str, float]) -> "AdjustResult":
        return cls(ok=True, balances=balances)

    @classmethod
    def failure(
        cls,
        error: AdjustErrorCode,
        details: list[AdjustDetail] | None = None,
    ) -> "AdjustResult":
        return cls(ok=False, error=error, details=details)
