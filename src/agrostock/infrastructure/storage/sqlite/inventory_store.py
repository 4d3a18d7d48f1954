"""SQLite implementation of inventory storage."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import aiosqlite

from agrostock.config import get_logger
from agrostock.core.entities.catalog import LegacyInventoryRecord, ProductCatalogEntry
from agrostock.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementModule,
    StockSnapshot,
)
from agrostock.core.exceptions import TransactionFailedError
from agrostock.core.interfaces.inventory_store import IInventoryRepository, IInventoryStore
from agrostock.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from agrostock.infrastructure.storage.sqlite.mappers import (
    row_to_item,
    row_to_legacy_record,
    row_to_movement,
    row_to_product,
    to_db_datetime,
)

logger = get_logger(__name__)


class SQLiteInventoryRepository(IInventoryRepository):
    """Inventory operations on one open connection inside a transaction."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def _fetch_item(self, sql: str, params: tuple) -> InventoryItem | None:
        cursor = await self._conn.execute(sql, params)
        row = await cursor.fetchone()
        if row is None:
            return None
        return row_to_item(row)

    async def get_item(self, user_id: str, item_id: int) -> InventoryItem | None:
        return await self._fetch_item(
            "SELECT * FROM inventory_items WHERE id = ? AND user_id = ?",
            (item_id, user_id),
        )

    async def get_item_by_product(
        self, user_id: str, product_id: str
    ) -> InventoryItem | None:
        return await self._fetch_item(
            """
            SELECT * FROM inventory_items
            WHERE user_id = ? AND product_id = ? AND active = 1
            ORDER BY id LIMIT 1
            """,
            (user_id, product_id),
        )

    async def get_item_by_name(
        self, user_id: str, product_name: str
    ) -> InventoryItem | None:
        return await self._fetch_item(
            """
            SELECT * FROM inventory_items
            WHERE user_id = ? AND product_name = ? AND product_id IS NULL AND active = 1
            ORDER BY id LIMIT 1
            """,
            (user_id, product_name),
        )

    async def get_product(
        self, user_id: str, product_id: str
    ) -> ProductCatalogEntry | None:
        cursor = await self._conn.execute(
            "SELECT * FROM product_prices WHERE user_id = ? AND id = ?",
            (user_id, product_id),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return row_to_product(row)

    async def get_legacy_record(
        self, user_id: str, name: str
    ) -> LegacyInventoryRecord | None:
        cursor = await self._conn.execute(
            """
            SELECT * FROM legacy_inventory_products
            WHERE user_id = ? AND name = ?
            ORDER BY id LIMIT 1
            """,
            (user_id, name),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return row_to_legacy_record(row)

    async def create_item(self, item: InventoryItem) -> InventoryItem:
        now = datetime.now(UTC)
        item.created_at = now
        item.updated_at = now
        item.last_updated = now
        cursor = await self._conn.execute(
            """
            INSERT INTO inventory_items (
                user_id, product_id, product_name, product_type,
                current_stock, min_stock, critical_stock, unit, location,
                expiry_date, active, last_updated, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                item.user_id,
                item.product_id,
                item.product_name,
                item.product_type.value,
                item.current_stock,
                item.min_stock,
                item.critical_stock,
                item.unit,
                item.location,
                item.expiry_date.isoformat() if item.expiry_date else None,
                int(item.active),
                to_db_datetime(item.last_updated),
                to_db_datetime(item.created_at),
                to_db_datetime(item.updated_at),
            ),
        )
        item.id = cursor.lastrowid
        logger.info(
            "inventory_item_created",
            item_id=item.id,
            product_id=item.product_id,
            user_id=item.user_id,
        )
        return item

    async def update_item(self, item: InventoryItem) -> InventoryItem:
        item.updated_at = datetime.now(UTC)
        await self._conn.execute(
            """
            UPDATE inventory_items SET
                product_id = ?,
                product_name = ?,
                product_type = ?,
                min_stock = ?,
                critical_stock = ?,
                unit = ?,
                location = ?,
                expiry_date = ?,
                last_updated = ?,
                updated_at = ?
            WHERE id = ? AND user_id = ?
            """,
            (
                item.product_id,
                item.product_name,
                item.product_type.value,
                item.min_stock,
                item.critical_stock,
                item.unit,
                item.location,
                item.expiry_date.isoformat() if item.expiry_date else None,
                to_db_datetime(item.last_updated),
                to_db_datetime(item.updated_at),
                item.id,
                item.user_id,
            ),
        )
        logger.info("inventory_item_updated", item_id=item.id)
        # current_stock is owned by increment/decrement; return the stored value
        stored = await self.get_item(item.user_id, item.id)  # type: ignore[arg-type]
        return stored or item

    async def increment_stock(
        self, user_id: str, item_id: int, amount: float
    ) -> InventoryItem | None:
        now = to_db_datetime(datetime.now(UTC))
        cursor = await self._conn.execute(
            """
            UPDATE inventory_items
            SET current_stock = current_stock + ?, last_updated = ?, updated_at = ?
            WHERE id = ? AND user_id = ? AND active = 1
            """,
            (amount, now, now, item_id, user_id),
        )
        if cursor.rowcount == 0:
            return None
        return await self.get_item(user_id, item_id)

    async def decrement_stock(
        self, user_id: str, item_id: int, amount: float
    ) -> InventoryItem | None:
        now = to_db_datetime(datetime.now(UTC))
        cursor = await self._conn.execute(
            """
            UPDATE inventory_items
            SET current_stock = current_stock - ?, last_updated = ?, updated_at = ?
            WHERE id = ? AND user_id = ? AND active = 1 AND current_stock >= ?
            """,
            (amount, now, now, item_id, user_id, amount),
        )
        if cursor.rowcount == 0:
            return None
        return await self.get_item(user_id, item_id)

    async def add_movement(self, movement: InventoryMovement) -> InventoryMovement:
        cursor = await self._conn.execute(
            """
            INSERT INTO inventory_movements (
                user_id, inventory_item_id, product_id, product_name,
                operation, amount, unit, amount_in_item_unit, balance_after,
                reason, activity_id, module, day_index, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                movement.user_id,
                movement.inventory_item_id,
                movement.product_id,
                movement.product_name,
                movement.operation.value,
                movement.amount,
                movement.unit,
                movement.amount_in_item_unit,
                movement.balance_after,
                movement.reason,
                movement.activity_id,
                movement.module.value if movement.module else None,
                movement.day_index,
                to_db_datetime(movement.created_at),
            ),
        )
        movement.id = cursor.lastrowid
        logger.info(
            "stock_movement_recorded",
            movement_id=movement.id,
            item_id=movement.inventory_item_id,
            operation=movement.operation.value,
            qty=movement.amount_in_item_unit,
        )
        return movement


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of inventory items and the movement log."""

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SQLiteInventoryRepository]:
        try:
            async with get_transaction(immediate=True) as conn:
                yield SQLiteInventoryRepository(conn)
        except aiosqlite.Error as e:
            logger.error("inventory_transaction_failed", error=str(e))
            raise TransactionFailedError(str(e)) from e

    async def get_item(self, user_id: str, item_id: int) -> InventoryItem | None:
        async with get_connection() as conn:
            return await SQLiteInventoryRepository(conn).get_item(user_id, item_id)

    async def list_items(
        self, user_id: str, limit: int = 100, offset: int = 0
    ) -> list[InventoryItem]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_items
                WHERE user_id = ? AND active = 1
                ORDER BY product_name, id
                LIMIT ? OFFSET ?
                """,
                (user_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [row_to_item(row) for row in rows]

    async def get_stock_by_products(
        self, user_id: str, product_ids: list[str]
    ) -> dict[str, StockSnapshot]:
        if not product_ids:
            return {}

        placeholders = ", ".join("?" for _ in product_ids)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT id, product_id, current_stock, unit FROM inventory_items
                WHERE user_id = ? AND active = 1 AND product_id IN ({placeholders})
                ORDER BY id
                """,
                (user_id, *product_ids),
            )
            rows = await cursor.fetchall()

        snapshots: dict[str, StockSnapshot] = {}
        for row in rows:
            snapshots.setdefault(
                row["product_id"],
                StockSnapshot(
                    item_id=row["id"],
                    product_id=row["product_id"],
                    current_stock=float(row["current_stock"]),
                    unit=row["unit"],
                ),
            )
        return snapshots

    async def deactivate_item(self, user_id: str, item_id: int) -> bool:
        now = to_db_datetime(datetime.now(UTC))
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE inventory_items SET active = 0, updated_at = ?
                WHERE id = ? AND user_id = ? AND active = 1
                """,
                (now, item_id, user_id),
            )
            deactivated = cursor.rowcount > 0
        if deactivated:
            logger.info("inventory_item_deactivated", item_id=item_id, user_id=user_id)
        return deactivated

    async def list_movements(
        self,
        user_id: str,
        product_id: str | None = None,
        activity_id: str | None = None,
        module: MovementModule | None = None,
        created_from: datetime | None = None,
        created_to: datetime | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InventoryMovement]:
        clauses = ["user_id = ?"]
        params: list = [user_id]
        if product_id is not None:
            clauses.append("product_id = ?")
            params.append(product_id)
        if activity_id is not None:
            clauses.append("activity_id = ?")
            params.append(activity_id)
        if module is not None:
            clauses.append("module = ?")
            params.append(module.value)
        if created_from is not None:
            clauses.append("created_at >= ?")
            params.append(to_db_datetime(created_from))
        if created_to is not None:
            clauses.append("created_at <= ?")
            params.append(to_db_datetime(created_to))
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM inventory_movements
                WHERE {" AND ".join(clauses)}
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [row_to_movement(row) for row in rows]
