"""Product catalog and legacy inventory entities."""

from datetime import date
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ProductType(str, Enum):
    """Kinds of catalog products."""

    FERTILIZER = "fertilizer"
    WATER = "water"
    PHYTOSANITARY = "phytosanitary"
    OTHER = "other"


class ProductCatalogEntry(BaseModel):
    """
    Priced product owned by the product-management side.

    Records arriving with `pricePerUnit` or `price`, or with `_id`, are
    normalized here so the core only ever sees one shape.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id", "product_id"))
    name: str
    type: ProductType = ProductType.OTHER
    price_per_unit: float = Field(
        default=0.0,
        ge=0,
        validation_alias=AliasChoices("price_per_unit", "pricePerUnit", "price"),
    )
    unit: str = "kg"
    brand: str | None = None
    supplier: str | None = None
    active: bool = True


class LegacyInventoryRecord(BaseModel):
    """Inventory row from before products were linked to the catalog."""

    id: int | None = None
    user_id: str
    name: str
    category: str = "otros"
    quantity: float = 0.0
    unit: str | None = None
    min_stock: float = 0.0
    price: float = 0.0
    location: str | None = None
    expiry_date: date | None = None
