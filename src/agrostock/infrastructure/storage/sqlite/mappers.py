"""Row <-> entity conversion shared by the SQLite stores."""

from datetime import UTC, date, datetime

import aiosqlite

from agrostock.core.entities.alert import AlertSeverity, AlertType, InventoryAlert
from agrostock.core.entities.catalog import (
    LegacyInventoryRecord,
    ProductCatalogEntry,
    ProductType,
)
from agrostock.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementModule,
    MovementOperation,
)


def to_db_datetime(value: datetime) -> str:
    """Serialize as a UTC ISO-8601 string so text ordering matches time ordering."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


def parse_datetime(value: str | None) -> datetime:
    if value:
        try:
            parsed = datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
        else:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return datetime.now(UTC)


def parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def row_to_product(row: aiosqlite.Row) -> ProductCatalogEntry:
    return ProductCatalogEntry(
        id=row["id"],
        name=row["name"],
        type=ProductType(row["type"]),
        price_per_unit=float(row["price_per_unit"]),
        unit=row["unit"],
        brand=row["brand"],
        supplier=row["supplier"],
        active=bool(row["active"]),
    )


def row_to_legacy_record(row: aiosqlite.Row) -> LegacyInventoryRecord:
    return LegacyInventoryRecord(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        category=row["category"],
        quantity=float(row["quantity"]),
        unit=row["unit"],
        min_stock=float(row["min_stock"]),
        price=float(row["price"]),
        location=row["location"],
        expiry_date=parse_date(row["expiry_date"]),
    )


def row_to_item(row: aiosqlite.Row) -> InventoryItem:
    return InventoryItem(
        id=row["id"],
        user_id=row["user_id"],
        product_id=row["product_id"],
        product_name=row["product_name"],
        product_type=ProductType(row["product_type"]),
        current_stock=float(row["current_stock"]),
        min_stock=float(row["min_stock"]),
        critical_stock=float(row["critical_stock"]),
        unit=row["unit"],
        location=row["location"],
        expiry_date=parse_date(row["expiry_date"]),
        active=bool(row["active"]),
        last_updated=parse_datetime(row["last_updated"]),
        created_at=parse_datetime(row["created_at"]),
        updated_at=parse_datetime(row["updated_at"]),
    )


def row_to_movement(row: aiosqlite.Row) -> InventoryMovement:
    return InventoryMovement(
        id=row["id"],
        user_id=row["user_id"],
        inventory_item_id=row["inventory_item_id"],
        product_id=row["product_id"],
        product_name=row["product_name"],
        operation=MovementOperation(row["operation"]),
        amount=float(row["amount"]),
        unit=row["unit"],
        amount_in_item_unit=float(row["amount_in_item_unit"]),
        balance_after=float(row["balance_after"]),
        reason=row["reason"],
        activity_id=row["activity_id"],
        module=MovementModule(row["module"]) if row["module"] else None,
        day_index=row["day_index"],
        created_at=parse_datetime(row["created_at"]),
    )


def row_to_alert(row: aiosqlite.Row) -> InventoryAlert:
    return InventoryAlert(
        id=row["id"],
        user_id=row["user_id"],
        item_id=row["item_id"],
        product_name=row["product_name"],
        type=AlertType(row["type"]),
        message=row["message"],
        severity=AlertSeverity(row["severity"]),
        read=bool(row["read"]),
        created_at=parse_datetime(row["created_at"]),
    )
