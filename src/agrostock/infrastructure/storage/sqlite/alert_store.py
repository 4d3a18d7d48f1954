"""SQLite implementation of inventory alert storage."""

from datetime import UTC, datetime

import aiosqlite

from agrostock.config import get_logger
from agrostock.core.entities.alert import InventoryAlert
from agrostock.core.exceptions import DatabaseError
from agrostock.core.interfaces.alert_store import AlertDeriver, IAlertStore
from agrostock.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from agrostock.infrastructure.storage.sqlite.mappers import (
    row_to_alert,
    row_to_item,
    to_db_datetime,
)

logger = get_logger(__name__)


class SQLiteAlertStore(IAlertStore):
    """Alerts are replaced per item, never edited, apart from the read flag."""

    async def refresh_item_alerts(
        self, user_id: str, item_id: int, derive: AlertDeriver
    ) -> list[InventoryAlert]:
        try:
            return await self._refresh(user_id, item_id, derive)
        except aiosqlite.Error as e:
            raise DatabaseError("refresh_item_alerts", str(e)) from e

    async def _refresh(
        self, user_id: str, item_id: int, derive: AlertDeriver
    ) -> list[InventoryAlert]:
        # IMMEDIATE takes the write lock before the read, so no stock change
        # can commit between reading the item and replacing its alerts
        async with get_transaction(immediate=True) as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory_items WHERE id = ? AND user_id = ?",
                (item_id, user_id),
            )
            row = await cursor.fetchone()
            alerts = derive(row_to_item(row)) if row is not None else []

            await conn.execute(
                "DELETE FROM inventory_alerts WHERE user_id = ? AND item_id = ?",
                (user_id, item_id),
            )
            now = datetime.now(UTC)
            for alert in alerts:
                alert.created_at = now
                cursor = await conn.execute(
                    """
                    INSERT INTO inventory_alerts (
                        user_id, item_id, product_name, type, message,
                        severity, read, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        user_id,
                        item_id,
                        alert.product_name,
                        alert.type.value,
                        alert.message,
                        alert.severity.value,
                        int(alert.read),
                        to_db_datetime(alert.created_at),
                    ),
                )
                alert.id = cursor.lastrowid
        return alerts

    async def list_alerts(
        self, user_id: str, unread_only: bool = True, limit: int = 100
    ) -> list[InventoryAlert]:
        sql = "SELECT * FROM inventory_alerts WHERE user_id = ?"
        if unread_only:
            sql += " AND read = 0"
        sql += " ORDER BY created_at DESC, id DESC LIMIT ?"
        async with get_connection() as conn:
            cursor = await conn.execute(sql, (user_id, limit))
            rows = await cursor.fetchall()
            return [row_to_alert(row) for row in rows]

    async def list_item_alerts(self, user_id: str, item_id: int) -> list[InventoryAlert]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_alerts
                WHERE user_id = ? AND item_id = ?
                ORDER BY id
                """,
                (user_id, item_id),
            )
            rows = await cursor.fetchall()
            return [row_to_alert(row) for row in rows]

    async def mark_read(self, user_id: str, alert_id: int) -> InventoryAlert | None:
        async with get_transaction() as conn:
            await conn.execute(
                "UPDATE inventory_alerts SET read = 1 WHERE id = ? AND user_id = ?",
                (alert_id, user_id),
            )
            cursor = await conn.execute(
                "SELECT * FROM inventory_alerts WHERE id = ? AND user_id = ?",
                (alert_id, user_id),
            )
            row = await cursor.fetchone()
        if row is None:
            return None
        logger.info("alert_marked_read", alert_id=alert_id)
        return row_to_alert(row)
