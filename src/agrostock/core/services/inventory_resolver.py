"""
Inventory resolution.

Finds the canonical inventory item for a catalog product, linking items
created before they had a product id and migrating legacy records on first
reference.
"""

from datetime import UTC, datetime

from agrostock.config import get_logger
from agrostock.core.entities.inventory import InventoryItem
from agrostock.core.interfaces.inventory_store import IInventoryRepository, IInventoryStore

logger = get_logger(__name__)


class InventoryResolver:
    """Resolves product ids to inventory items for one user."""

    def __init__(
        self,
        inventory_store: IInventoryStore,
        default_unit: str = "kg",
        default_location: str = "almacén",
        legacy_critical_divisor: int = 2,
    ) -> None:
        self._inventory_store = inventory_store
        self._default_unit = default_unit
        self._default_location = default_location
        self._legacy_critical_divisor = legacy_critical_divisor

    async def resolve(self, user_id: str, product_id: str) -> InventoryItem | None:
        """Resolve in a transaction of its own."""
        async with self._inventory_store.transaction() as repo:
            return await self.resolve_in(repo, user_id, product_id)

    async def resolve_in(
        self,
        repo: IInventoryRepository,
        user_id: str,
        product_id: str,
    ) -> InventoryItem | None:
        """
        Resolve using the caller's transactional repository.

        Order: linked item, then an unlinked item with the catalog name
        (backfilled), then a legacy record (migrated). Returns None when all
        three miss.
        """
        item = await repo.get_item_by_product(user_id, product_id)
        if item is not None:
            return item

        product = await repo.get_product(user_id, product_id)
        if product is None:
            logger.info("inventory_unresolved", product_id=product_id, reason="no_product")
            return None

        by_name = await repo.get_item_by_name(user_id, product.name)
        if by_name is not None:
            by_name.product_id = product_id
            by_name.product_type = product.type
            by_name.unit = by_name.unit or product.unit or self._default_unit
            by_name.last_updated = datetime.now(UTC)
            linked = await repo.update_item(by_name)
            logger.info(
                "inventory_item_linked",
                item_id=linked.id,
                product_id=product_id,
            )
            return linked

        legacy = await repo.get_legacy_record(user_id, product.name)
        if legacy is not None:
            migrated = InventoryItem(
                user_id=user_id,
                product_id=product_id,
                product_name=product.name,
                product_type=product.type,
                current_stock=max(legacy.quantity, 0.0),
                min_stock=max(legacy.min_stock, 0.0),
                critical_stock=self.legacy_critical_stock(legacy.min_stock),
                unit=legacy.unit or product.unit or self._default_unit,
                location=self._default_location,
                expiry_date=legacy.expiry_date,
            )
            migrated = await repo.create_item(migrated)
            logger.info(
                "inventory_item_migrated",
                item_id=migrated.id,
                product_id=product_id,
                legacy_id=legacy.id,
            )
            return migrated

        logger.info("inventory_unresolved", product_id=product_id, reason="no_item")
        return None

    def legacy_critical_stock(self, min_stock: float) -> float:
        """floor(min_stock / divisor), never negative."""
        return float(max(int(min_stock // self._legacy_critical_divisor), 0))
