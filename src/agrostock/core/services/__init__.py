"""
Core business logic services.

Layer-pure services that depend only on:
- agrostock/core/entities/*
- agrostock/core/interfaces/*
- agrostock/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from agrostock.core.services.alert_service import AlertService, derive_alerts
from agrostock.core.services.cost_aggregator import compute_day_total
from agrostock.core.services.inventory_resolver import InventoryResolver
from agrostock.core.services.stock_adjustment import StockAdjustmentService

__all__ = [
    # Alerts
    "AlertService",
    "derive_alerts",
    # Costs
    "compute_day_total",
    # Inventory
    "InventoryResolver",
    "StockAdjustmentService",
]
