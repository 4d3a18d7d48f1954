"""AgroStock: farm inventory, unit conversion and daily cost engine."""

__version__ = "1.0.0"
