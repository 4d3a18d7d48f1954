"""SQLite implementation of the product price catalog."""

from datetime import UTC, datetime

from agrostock.config import get_logger
from agrostock.core.entities.catalog import ProductCatalogEntry
from agrostock.core.interfaces.catalog_store import ICatalogStore
from agrostock.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from agrostock.infrastructure.storage.sqlite.mappers import row_to_product, to_db_datetime

logger = get_logger(__name__)


class SQLiteCatalogStore(ICatalogStore):
    """Catalog entries keyed by (user_id, id)."""

    async def get_product(
        self, user_id: str, product_id: str
    ) -> ProductCatalogEntry | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM product_prices WHERE user_id = ? AND id = ?",
                (user_id, product_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return row_to_product(row)

    async def list_products(
        self, user_id: str, active_only: bool = True
    ) -> list[ProductCatalogEntry]:
        sql = "SELECT * FROM product_prices WHERE user_id = ?"
        if active_only:
            sql += " AND active = 1"
        # rowid order keeps "first water entry" stable
        sql += " ORDER BY rowid"
        async with get_connection() as conn:
            cursor = await conn.execute(sql, (user_id,))
            rows = await cursor.fetchall()
            return [row_to_product(row) for row in rows]

    async def upsert_product(
        self, user_id: str, product: ProductCatalogEntry
    ) -> ProductCatalogEntry:
        now = to_db_datetime(datetime.now(UTC))
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO product_prices (
                    id, user_id, name, type, price_per_unit, unit,
                    brand, supplier, active, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(user_id, id) DO UPDATE SET
                    name = excluded.name,
                    type = excluded.type,
                    price_per_unit = excluded.price_per_unit,
                    unit = excluded.unit,
                    brand = excluded.brand,
                    supplier = excluded.supplier,
                    active = excluded.active,
                    updated_at = excluded.updated_at
                """,
                (
                    product.id,
                    user_id,
                    product.name,
                    product.type.value,
                    product.price_per_unit,
                    product.unit,
                    product.brand,
                    product.supplier,
                    int(product.active),
                    now,
                    now,
                ),
            )
        logger.info("catalog_product_upserted", product_id=product.id, user_id=user_id)
        return product
