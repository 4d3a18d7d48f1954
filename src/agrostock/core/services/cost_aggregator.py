"""
Daily cost aggregation.

Prices every line of an activity day against the product catalog and sums
them. Pure and synchronous: callers recompute whenever a line, a quantity,
a unit or the catalog changes.
"""

from collections.abc import Iterable, Mapping, Sequence

from agrostock.core.entities.catalog import ProductCatalogEntry, ProductType
from agrostock.core.entities.costs import (
    DailyLineItem,
    DayRecord,
    DayTotal,
    LineCost,
    LineKind,
    OtherExpense,
    WaterUsage,
)
from agrostock.core.units import convert

DEFAULT_PRODUCT_UNIT = "kg"
DEFAULT_WATER_UNIT = "L"

Catalog = Mapping[str, ProductCatalogEntry] | Sequence[ProductCatalogEntry]


def index_catalog(catalog: Catalog | None) -> dict[str, ProductCatalogEntry]:
    """Build an id → entry map from either catalog shape."""
    if catalog is None:
        return {}
    if isinstance(catalog, Mapping):
        return dict(catalog)
    return {entry.id: entry for entry in catalog}


def find_water_entry(
    catalog: Mapping[str, ProductCatalogEntry],
) -> ProductCatalogEntry | None:
    """First active water entry of the catalog, if any."""
    return next(
        (
            entry
            for entry in catalog.values()
            if entry.type is ProductType.WATER and entry.active
        ),
        None,
    )


def cost_application_line(
    line: DailyLineItem,
    kind: LineKind,
    catalog: Mapping[str, ProductCatalogEntry],
) -> LineCost:
    """
    Cost of a fertilizer or phytosanitary line.

    The catalog entry, when linked, supplies both the unit price and the
    priced unit; the entered amount is converted into that unit. Unlinked
    lines fall back to their stored price and their own unit.
    """
    entry = catalog.get(line.product_id) if line.product_id else None

    if entry is not None:
        unit_price = entry.price_per_unit
        priced_unit = entry.unit
    else:
        unit_price = line.price or 0.0
        priced_unit = line.unit or DEFAULT_PRODUCT_UNIT

    quantity = convert(line.amount, line.unit or priced_unit, priced_unit)

    return LineCost(
        kind=kind,
        product_id=line.product_id,
        amount=line.amount,
        unit=line.unit,
        quantity=quantity,
        quantity_unit=priced_unit,
        unit_price=unit_price,
        cost=quantity * unit_price,
        priced_from_catalog=entry is not None,
    )


def cost_water(
    water: WaterUsage,
    catalog: Mapping[str, ProductCatalogEntry],
) -> LineCost:
    """Cost of the day's water, priced by the catalog's water entry."""
    entered_unit = water.unit or DEFAULT_WATER_UNIT
    entry = find_water_entry(catalog)

    if entry is not None:
        unit_price = entry.price_per_unit
        priced_unit = entry.unit or entered_unit
    else:
        unit_price = water.price or 0.0
        priced_unit = entered_unit

    quantity = convert(water.amount, entered_unit, priced_unit)

    return LineCost(
        kind=LineKind.WATER,
        product_id=entry.id if entry else None,
        amount=water.amount,
        unit=water.unit,
        quantity=quantity,
        quantity_unit=priced_unit,
        unit_price=unit_price,
        cost=quantity * unit_price,
        priced_from_catalog=entry is not None,
    )


def cost_other_expense(expense: OtherExpense) -> LineCost:
    """Cost of a free-form expense: amount × price, no conversion."""
    return LineCost(
        kind=LineKind.OTHER,
        amount=expense.amount,
        unit=expense.unit,
        quantity=expense.amount,
        quantity_unit=expense.unit,
        unit_price=expense.price,
        cost=expense.amount * expense.price,
    )


def _sum_costs(lines: Iterable[LineCost]) -> float:
    return sum((line.cost for line in lines), 0.0)


def compute_day_total(
    day: DayRecord,
    catalog: Catalog | None = None,
    other_expenses: Sequence[OtherExpense] | None = None,
) -> DayTotal:
    """
    Price every line of a day and return the breakdown and total.

    Args:
        day: Fertilizer, phytosanitary and water lines of the day
        catalog: Catalog entries, as a sequence or an id → entry mapping
        other_expenses: Free-form expenses attached to the day

    Returns:
        DayTotal with per-line costs, per-kind subtotals and the total
    """
    by_id = index_catalog(catalog)

    fertilizer_lines = [
        cost_application_line(line, LineKind.FERTILIZER, by_id)
        for line in day.fertilizers
    ]
    phyto_lines = [
        cost_application_line(line, LineKind.PHYTOSANITARY, by_id)
        for line in day.phytosanitaries
    ]
    water_lines = [cost_water(day.water, by_id)] if day.water is not None else []
    other_lines = [cost_other_expense(e) for e in other_expenses or []]

    fertilizers_cost = _sum_costs(fertilizer_lines)
    phytosanitaries_cost = _sum_costs(phyto_lines)
    water_cost = _sum_costs(water_lines)
    other_expenses_cost = _sum_costs(other_lines)

    return DayTotal(
        total=fertilizers_cost + phytosanitaries_cost + water_cost + other_expenses_cost,
        per_line_cost=fertilizer_lines + phyto_lines + water_lines + other_lines,
        fertilizers_cost=fertilizers_cost,
        phytosanitaries_cost=phytosanitaries_cost,
        water_cost=water_cost,
        other_expenses_cost=other_expenses_cost,
    )
