"""Tests for logging helpers."""

from agrostock.config.logging import add_app_context, enum_values
from agrostock.core.entities.inventory import AdjustErrorCode, MovementModule


def test_enum_values_are_rendered_by_value():
    event = enum_values(
        None,
        "info",
        {"event": "insufficient_stock", "error": AdjustErrorCode.INSUFFICIENT_STOCK, "module": MovementModule.WATER, "qty": 4},
    )
    assert event == {"event": "insufficient_stock", "error": "insufficient_stock", "module": "water", "qty": 4}


def test_app_context_does_not_overwrite():
    event = add_app_context(None, "info", {"event": "x", "environment": "custom"})
    assert event["app"] == "AgroStock"
    assert event["environment"] == "custom"
