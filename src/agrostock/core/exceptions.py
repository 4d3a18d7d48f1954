"""
Domain exceptions for the AgroStock application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class AgroStockError(Exception):
    """Base exception for all AgroStock errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(AgroStockError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class TransactionFailedError(StorageError):
    """A storage transaction could not be committed."""

    def __init__(self, reason: str):
        super().__init__(
            f"Transaction failed: {reason}",
            code="TRANSACTION_FAILED",
            details={"reason": reason},
        )


# Inventory Exceptions
class InventoryError(AgroStockError):
    """Base exception for inventory operations."""

    pass


class InventoryItemNotFoundError(InventoryError):
    """No inventory record could be found or resolved."""

    def __init__(
        self,
        item_id: int | None = None,
        product_id: str | None = None,
        requested: float | None = None,
        unit: str | None = None,
    ):
        target = f"product {product_id}" if product_id else f"item {item_id}"
        super().__init__(
            f"Inventory item not found for {target}",
            code="INVENTORY_ITEM_NOT_FOUND",
            details={
                "item_id": item_id,
                "product_id": product_id,
                "requested": requested,
                "unit": unit,
            },
        )
        self.item_id = item_id
        self.product_id = product_id
        self.requested = requested
        self.unit = unit


class InsufficientStockError(InventoryError):
    """A subtraction would drive stock below zero."""

    def __init__(
        self,
        product_id: str,
        requested: float,
        available: float,
        unit: str,
    ):
        super().__init__(
            f"Insufficient stock for {product_id}: "
            f"requested {requested} {unit}, available {available} {unit}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "requested": requested,
                "available": available,
                "unit": unit,
            },
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available
        self.unit = unit


class AlertNotFoundError(InventoryError):
    """Inventory alert not found."""

    def __init__(self, alert_id: int):
        super().__init__(
            f"Alert not found: {alert_id}",
            code="ALERT_NOT_FOUND",
            details={"alert_id": alert_id},
        )


# Validation Exceptions
class ValidationError(AgroStockError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class ConfigurationError(AgroStockError):
    """Settings that the inventory rules cannot work with."""

    def __init__(self, setting: str, message: str):
        super().__init__(
            f"Invalid setting {setting}: {message}",
            code="CONFIGURATION_ERROR",
            details={"setting": setting},
        )
