"""Inventory Item Use Cases: create, read, update and soft-delete items."""

from agrostock.application.dto.requests import (
    CreateInventoryItemRequest,
    UpdateInventoryItemRequest,
)
from agrostock.application.dto.responses import InventoryItemResponse, InventoryListResponse
from agrostock.application.services import inventory_settings
from agrostock.config import get_logger
from agrostock.core.entities.inventory import InventoryItem
from agrostock.core.exceptions import InventoryItemNotFoundError, ValidationError
from agrostock.core.interfaces.inventory_store import IInventoryStore
from agrostock.core.services.alert_service import AlertService
from agrostock.core.units import canonical_unit

logger = get_logger(__name__)


def to_item_response(item: InventoryItem) -> InventoryItemResponse:
    """Convert an inventory item entity to its API response."""
    return InventoryItemResponse(
        id=item.id,  # type: ignore[arg-type]
        product_id=item.product_id,
        product_name=item.product_name,
        product_type=item.product_type.value,
        current_stock=item.current_stock,
        min_stock=item.min_stock,
        critical_stock=item.critical_stock,
        unit=item.unit,
        location=item.location,
        expiry_date=item.expiry_date,
        active=item.active,
        is_low=item.is_low,
        is_critical=item.is_critical,
        last_updated=item.last_updated,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


class _InventoryUseCase:
    """Lazy store and alert-service lookup shared by the item use cases."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        alert_service: AlertService | None = None,
    ):
        self._inventory_store = inventory_store
        self._alert_service = alert_service

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from agrostock.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_alert_service(self) -> AlertService:
        if self._alert_service is None:
            from agrostock.application.services import get_alert_service

            self._alert_service = await get_alert_service()
        return self._alert_service

    async def _get_active_item(self, user_id: str, item_id: int) -> InventoryItem:
        inv_store = await self._get_inventory_store()
        item = await inv_store.get_item(user_id, item_id)
        if item is None or not item.active:
            raise InventoryItemNotFoundError(item_id=item_id)
        return item


class CreateInventoryItemUseCase(_InventoryUseCase):
    """Start tracking a product and derive its initial alerts."""

    async def execute(
        self, user_id: str, request: CreateInventoryItemRequest
    ) -> InventoryItem:
        inv_store = await self._get_inventory_store()
        settings = inventory_settings()

        async with inv_store.transaction() as repo:
            if request.product_id:
                existing = await repo.get_item_by_product(user_id, request.product_id)
                if existing is not None:
                    raise ValidationError(
                        "product_id",
                        f"already tracked by item {existing.id}",
                        request.product_id,
                    )

            item = await repo.create_item(
                InventoryItem(
                    user_id=user_id,
                    product_id=request.product_id,
                    product_name=request.product_name,
                    product_type=request.product_type,
                    current_stock=request.current_stock,
                    min_stock=request.min_stock,
                    critical_stock=request.critical_stock,
                    unit=canonical_unit(request.unit, default=settings.default_unit),
                    location=request.location or settings.default_location,
                    expiry_date=request.expiry_date,
                )
            )

        alert_service = await self._get_alert_service()
        await alert_service.recompute_alerts(item)
        return item


class UpdateInventoryItemUseCase(_InventoryUseCase):
    """
    Edit thresholds and descriptive fields; stock is never touched here.

    Stock and thresholds are stored in the item's unit, so the unit may only
    be respelled ('Kg' -> 'kg'), never switched to another unit.
    """

    async def execute(
        self, user_id: str, item_id: int, request: UpdateInventoryItemRequest
    ) -> InventoryItem:
        item = await self._get_active_item(user_id, item_id)

        changes = request.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and field != "expiry_date":
                continue
            if field == "unit":
                value = canonical_unit(value, default=item.unit)
                if value != item.unit:
                    raise ValidationError(
                        "unit",
                        f"stock is kept in {item.unit}; track {value} as a new item",
                        value,
                    )
            setattr(item, field, value)

        inv_store = await self._get_inventory_store()
        async with inv_store.transaction() as repo:
            item = await repo.update_item(item)

        logger.info("inventory_item_edited", item_id=item_id, fields=sorted(changes))

        alert_service = await self._get_alert_service()
        await alert_service.recompute_alerts(item)
        return item


class DeleteInventoryItemUseCase(_InventoryUseCase):
    """Soft-delete an item and clear its alerts."""

    async def execute(self, user_id: str, item_id: int) -> None:
        inv_store = await self._get_inventory_store()
        if not await inv_store.deactivate_item(user_id, item_id):
            raise InventoryItemNotFoundError(item_id=item_id)

        item = await inv_store.get_item(user_id, item_id)
        if item is not None:
            # inactive items derive no alerts, so this clears them
            alert_service = await self._get_alert_service()
            await alert_service.recompute_alerts(item)


class GetInventoryItemUseCase(_InventoryUseCase):
    """Fetch one active item."""

    async def execute(self, user_id: str, item_id: int) -> InventoryItem:
        return await self._get_active_item(user_id, item_id)


class ListInventoryItemsUseCase(_InventoryUseCase):
    """List a user's active items."""

    async def execute(
        self, user_id: str, limit: int = 100, offset: int = 0
    ) -> list[InventoryItem]:
        inv_store = await self._get_inventory_store()
        return await inv_store.list_items(user_id, limit=limit, offset=offset)

    def to_response(self, items: list[InventoryItem]) -> InventoryListResponse:
        return InventoryListResponse(
            items=[to_item_response(item) for item in items],
            total=len(items),
        )
