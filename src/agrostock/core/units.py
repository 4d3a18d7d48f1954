"""
Unit normalization and conversion for mass and volume quantities.

Mass converts through grams and volume through millilitres. Conversions
between groups, or involving free-form units ("unidad", "día", ...), are
defined no-ops that return the amount unchanged.
"""

from enum import Enum


class Unit(str, Enum):
    """Canonical measurement units."""

    KG = "kg"
    G = "g"
    L = "L"
    ML = "ml"
    M3 = "m3"


class UnitGroup(str, Enum):
    """Groups of mutually convertible units."""

    MASS = "mass"
    VOLUME = "volume"
    OTHER = "other"


_SYNONYMS: dict[str, Unit] = {
    # mass
    "kg": Unit.KG,
    "kgs": Unit.KG,
    "kilo": Unit.KG,
    "kilos": Unit.KG,
    "kilogramo": Unit.KG,
    "kilogramos": Unit.KG,
    "kilogram": Unit.KG,
    "kilograms": Unit.KG,
    "g": Unit.G,
    "gr": Unit.G,
    "grs": Unit.G,
    "gramo": Unit.G,
    "gramos": Unit.G,
    "gram": Unit.G,
    "grams": Unit.G,
    # volume
    "l": Unit.L,
    "lt": Unit.L,
    "lts": Unit.L,
    "litro": Unit.L,
    "litros": Unit.L,
    "liter": Unit.L,
    "liters": Unit.L,
    "litre": Unit.L,
    "litres": Unit.L,
    "ml": Unit.ML,
    "mililitro": Unit.ML,
    "mililitros": Unit.ML,
    "millilitre": Unit.ML,
    "milliliter": Unit.ML,
    "m3": Unit.M3,
    "m^3": Unit.M3,
    "m³": Unit.M3,
    "metro cubico": Unit.M3,
    "metros cubicos": Unit.M3,
    "metro cúbico": Unit.M3,
    "metros cúbicos": Unit.M3,
}

_GROUPS: dict[Unit, UnitGroup] = {
    Unit.KG: UnitGroup.MASS,
    Unit.G: UnitGroup.MASS,
    Unit.L: UnitGroup.VOLUME,
    Unit.ML: UnitGroup.VOLUME,
    Unit.M3: UnitGroup.VOLUME,
}

# Size of one unit expressed in its group's base (g for mass, ml for volume)
_BASE_FACTORS: dict[Unit, float] = {
    Unit.KG: 1000.0,
    Unit.G: 1.0,
    Unit.L: 1000.0,
    Unit.ML: 1.0,
    Unit.M3: 1_000_000.0,
}


def normalize_unit(unit: str | Unit | None) -> Unit | None:
    """
    Map a unit spelling to its canonical Unit.

    Matching is case-insensitive and accepts common Spanish and English
    synonyms. Returns None for empty or unrecognized units.
    """
    if unit is None:
        return None
    if isinstance(unit, Unit):
        return unit
    key = " ".join(unit.strip().lower().split())
    if not key:
        return None
    return _SYNONYMS.get(key)


def unit_group(unit: str | Unit | None) -> UnitGroup:
    """Get the conversion group of a unit (OTHER when unrecognized)."""
    normalized = normalize_unit(unit)
    if normalized is None:
        return UnitGroup.OTHER
    return _GROUPS[normalized]


def are_compatible(from_unit: str | Unit | None, to_unit: str | Unit | None) -> bool:
    """True when both units are recognized and share a conversion group."""
    group = unit_group(from_unit)
    return group is not UnitGroup.OTHER and group is unit_group(to_unit)


def convert(amount: float, from_unit: str | Unit | None, to_unit: str | Unit | None) -> float:
    """
    Convert an amount between units of the same group.

    Returns the amount unchanged when either unit is unrecognized, when both
    normalize to the same unit, or when the units belong to different groups.
    """
    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)
    if source is None or target is None or source is target:
        return amount
    if _GROUPS[source] is not _GROUPS[target]:
        return amount
    return amount * _BASE_FACTORS[source] / _BASE_FACTORS[target]


def canonical_unit(unit: str | None, default: str | None = None) -> str | None:
    """Canonical spelling for known units, the stripped input otherwise."""
    normalized = normalize_unit(unit)
    if normalized is not None:
        return normalized.value
    if unit is None or not unit.strip():
        return default
    return unit.strip()
