"""Resolve Inventory Item Use Case: product id to canonical inventory item."""

from agrostock.config import get_logger
from agrostock.core.entities.inventory import InventoryItem
from agrostock.core.exceptions import InventoryItemNotFoundError
from agrostock.core.services.inventory_resolver import InventoryResolver

logger = get_logger(__name__)


class ResolveInventoryItemUseCase:
    """
    Resolve a catalog product to its inventory item.

    May link an unlinked item or migrate a legacy record as a side effect.
    """

    def __init__(self, resolver: InventoryResolver | None = None):
        self._resolver = resolver

    async def _get_resolver(self) -> InventoryResolver:
        if self._resolver is None:
            from agrostock.application.services import get_inventory_resolver

            self._resolver = await get_inventory_resolver()
        return self._resolver

    async def execute(self, user_id: str, product_id: str) -> InventoryItem:
        resolver = await self._get_resolver()
        item = await resolver.resolve(user_id, product_id)
        if item is None:
            raise InventoryItemNotFoundError(product_id=product_id)
        return item
