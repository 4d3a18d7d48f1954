"""Request DTOs for API endpoints.

Pydantic v2 models for request validation.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from agrostock.core.entities.catalog import ProductCatalogEntry, ProductType
from agrostock.core.entities.costs import DayRecord, OtherExpense
from agrostock.core.entities.inventory import StockOperation


class AdjustStockRequest(BaseModel):
    """Batch of stock operations applied all-or-nothing."""

    operations: list[StockOperation] = Field(
        default_factory=list,
        description="Operations; adds are applied before subtracts",
    )


class CreateInventoryItemRequest(BaseModel):
    """Request to start tracking a product."""

    product_id: str | None = Field(default=None, description="Catalog product ID")
    product_name: str = Field(..., min_length=1, description="Product name")
    product_type: ProductType = Field(default=ProductType.OTHER)
    current_stock: float = Field(default=0.0, ge=0, description="Opening stock")
    min_stock: float = Field(default=0.0, ge=0, description="Low-stock threshold")
    critical_stock: float = Field(default=0.0, ge=0, description="Critical threshold")
    unit: str | None = Field(default=None, description="Stock unit (default from settings)")
    location: str | None = Field(default=None, description="Storage location")
    expiry_date: date | None = Field(default=None)


class UpdateInventoryItemRequest(BaseModel):
    """
    Partial update of an item's descriptive fields and thresholds.

    Stock levels change only through adjustments, so current_stock is rejected.
    """

    model_config = ConfigDict(extra="forbid")

    product_name: str | None = Field(default=None, min_length=1)
    product_type: ProductType | None = None
    min_stock: float | None = Field(default=None, ge=0)
    critical_stock: float | None = Field(default=None, ge=0)
    unit: str | None = Field(default=None, description="Respelling of the current unit only")
    location: str | None = None
    expiry_date: date | None = None


class DayTotalRequest(BaseModel):
    """Cost one activity day."""

    day: DayRecord
    other_expenses: list[OtherExpense] = Field(default_factory=list)
    catalog: list[ProductCatalogEntry] | None = Field(
        default=None,
        description="Catalog snapshot; the stored catalog is used when omitted",
    )
