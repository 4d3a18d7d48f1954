"""Daily activity line items and cost breakdown entities."""

from datetime import date
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field


class LineKind(str, Enum):
    """Source of a costed line."""

    FERTILIZER = "fertilizer"
    PHYTOSANITARY = "phytosanitary"
    WATER = "water"
    OTHER = "other"


class DailyLineItem(BaseModel):
    """Fertilizer or phytosanitary application entered for one day."""

    product_id: str | None = Field(
        default=None, validation_alias=AliasChoices("product_id", "productId")
    )
    amount: float = 0.0
    unit: str | None = None
    price: float | None = None  # stored fallback when not linked to the catalog


class WaterUsage(BaseModel):
    """Water consumed on one day."""

    amount: float = 0.0
    unit: str | None = None
    price: float | None = None


class OtherExpense(BaseModel):
    """Free-form expense (labour, machinery hire, ...). Never unit-converted."""

    description: str | None = None
    amount: float = 0.0
    unit: str | None = None
    price: float = 0.0


class DayRecord(BaseModel):
    """One activity day as entered by the farmer."""

    activity_date: date | None = Field(
        default=None, validation_alias=AliasChoices("activity_date", "date")
    )
    fertilizers: list[DailyLineItem] = Field(default_factory=list)
    phytosanitaries: list[DailyLineItem] = Field(default_factory=list)
    water: WaterUsage | None = None


class LineCost(BaseModel):
    """Cost of one line after unit resolution."""

    kind: LineKind
    product_id: str | None = None
    amount: float  # as entered
    unit: str | None = None  # as entered
    quantity: float  # in the priced unit
    quantity_unit: str | None = None
    unit_price: float
    cost: float
    priced_from_catalog: bool = False


class DayTotal(BaseModel):
    """Cost breakdown of an activity day."""

    total: float
    per_line_cost: list[LineCost] = Field(default_factory=list)
    fertilizers_cost: float = 0.0
    phytosanitaries_cost: float = 0.0
    water_cost: float = 0.0
    other_expenses_cost: float = 0.0
