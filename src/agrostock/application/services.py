"""
Service factory functions for dependency injection.

Wires the SQLite stores and inventory settings into the core services.
Use cases and API dependencies import from here.
"""

from typing import TYPE_CHECKING

from agrostock.config import get_settings
from agrostock.config.settings import InventorySettings
from agrostock.core.exceptions import ConfigurationError
from agrostock.core.services import AlertService, InventoryResolver, StockAdjustmentService
from agrostock.core.units import normalize_unit

if TYPE_CHECKING:
    from agrostock.core.interfaces import IAlertStore, IInventoryStore


# Singleton service instances
_alert_service: AlertService | None = None
_inventory_resolver: InventoryResolver | None = None
_stock_adjustment_service: StockAdjustmentService | None = None


def inventory_settings() -> InventorySettings:
    """Inventory rules from settings, rejecting a default unit nothing can convert."""
    settings = get_settings().inventory
    if normalize_unit(settings.default_unit) is None:
        raise ConfigurationError(
            "INVENTORY_DEFAULT_UNIT",
            f"{settings.default_unit!r} is not a known mass or volume unit",
        )
    return settings


async def get_alert_service(
    alert_store: "IAlertStore | None" = None,
) -> AlertService:
    """
    Get or create AlertService instance.

    Args:
        alert_store: Optional alert store override

    Returns:
        Configured AlertService
    """
    global _alert_service

    if _alert_service is not None and alert_store is None:
        return _alert_service

    # Lazy import infrastructure
    from agrostock.infrastructure.storage.sqlite import get_alert_store

    service = AlertService(
        alert_store=alert_store or await get_alert_store(),
        expiry_warning_days=inventory_settings().expiry_warning_days,
    )

    if alert_store is None:
        _alert_service = service

    return service


async def get_inventory_resolver(
    inventory_store: "IInventoryStore | None" = None,
) -> InventoryResolver:
    """Get or create InventoryResolver instance."""
    global _inventory_resolver

    if _inventory_resolver is not None and inventory_store is None:
        return _inventory_resolver

    from agrostock.infrastructure.storage.sqlite import get_inventory_store

    settings = inventory_settings()
    resolver = InventoryResolver(
        inventory_store=inventory_store or await get_inventory_store(),
        default_unit=settings.default_unit,
        default_location=settings.default_location,
        legacy_critical_divisor=settings.legacy_critical_divisor,
    )

    if inventory_store is None:
        _inventory_resolver = resolver

    return resolver


async def get_stock_adjustment_service(
    inventory_store: "IInventoryStore | None" = None,
    alert_store: "IAlertStore | None" = None,
) -> StockAdjustmentService:
    """
    Get or create StockAdjustmentService instance.

    The resolver and the adjuster share one inventory store so that
    resolution runs inside the adjustment transaction.

    Args:
        inventory_store: Optional inventory store override
        alert_store: Optional alert store override

    Returns:
        Configured StockAdjustmentService
    """
    global _stock_adjustment_service

    overridden = inventory_store is not None or alert_store is not None
    if _stock_adjustment_service is not None and not overridden:
        return _stock_adjustment_service

    from agrostock.infrastructure.storage.sqlite import get_inventory_store

    inv_store = inventory_store or await get_inventory_store()
    service = StockAdjustmentService(
        inventory_store=inv_store,
        resolver=await get_inventory_resolver(inventory_store),
        alert_service=await get_alert_service(alert_store),
    )

    if not overridden:
        _stock_adjustment_service = service

    return service


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _alert_service
    global _inventory_resolver
    global _stock_adjustment_service

    _alert_service = None
    _inventory_resolver = None
    _stock_adjustment_service = None


__all__ = [
    "inventory_settings",
    "get_alert_service",
    "get_inventory_resolver",
    "get_stock_adjustment_service",
    "reset_services",
]
