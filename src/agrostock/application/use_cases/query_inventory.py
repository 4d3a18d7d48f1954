"""Read-only inventory queries: batch stock lookup and the movement log."""

from datetime import datetime

from agrostock.application.dto.responses import (
    InventoryMovementResponse,
    MovementListResponse,
    StockSnapshotResponse,
)
from agrostock.core.entities.inventory import InventoryMovement, MovementModule, StockSnapshot
from agrostock.core.interfaces.inventory_store import IInventoryStore


class _QueryUseCase:
    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from agrostock.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store


class GetStockByProductsUseCase(_QueryUseCase):
    """
    Advisory stock lookup for several products.

    Used by clients to warn before submitting an activity; the adjustment
    itself re-checks availability transactionally.
    """

    async def execute(
        self, user_id: str, product_ids: list[str]
    ) -> dict[str, StockSnapshot]:
        inv_store = await self._get_inventory_store()
        unique_ids = list(dict.fromkeys(pid for pid in product_ids if pid))
        return await inv_store.get_stock_by_products(user_id, unique_ids)

    def to_response(
        self, snapshots: dict[str, StockSnapshot]
    ) -> dict[str, StockSnapshotResponse]:
        return {
            product_id: StockSnapshotResponse(**snapshot.model_dump())
            for product_id, snapshot in snapshots.items()
        }


class ListMovementsUseCase(_QueryUseCase):
    """Query the movement log."""

    async def execute(
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
        inv_store = await self._get_inventory_store()
        return await inv_store.list_movements(
            user_id,
            product_id=product_id,
            activity_id=activity_id,
            module=module,
            created_from=created_from,
            created_to=created_to,
            limit=limit,
            offset=offset,
        )

    def to_response(self, movements: list[InventoryMovement]) -> MovementListResponse:
        return MovementListResponse(
            movements=[
                InventoryMovementResponse(
                    id=m.id,  # type: ignore[arg-type]
                    inventory_item_id=m.inventory_item_id,
                    product_id=m.product_id,
                    product_name=m.product_name,
                    operation=m.operation.value,
                    amount=m.amount,
                    unit=m.unit,
                    amount_in_item_unit=m.amount_in_item_unit,
                    balance_after=m.balance_after,
                    reason=m.reason,
                    activity_id=m.activity_id,
                    module=m.module.value if m.module else None,
                    day_index=m.day_index,
                    created_at=m.created_at,
                )
                for m in movements
            ],
            total=len(movements),
        )
