"""
Atomic Stock Adjustment Service.

Applies a batch of add/subtract operations for one user as a single
transaction. Every subtraction is a conditional update evaluated by the
store, so concurrent batches on the same item can never drive stock below
zero. A batch either commits every stock change and movement record or
none of them.
"""

from collections.abc import Sequence

from agrostock.config import get_logger
from agrostock.core.entities.inventory import (
    AdjustDetail,
    AdjustErrorCode,
    AdjustResult,
    InventoryItem,
    InventoryMovement,
    MovementOperation,
    StockOperation,
)
from agrostock.core.exceptions import (
    InsufficientStockError,
    InventoryItemNotFoundError,
    TransactionFailedError,
)
from agrostock.core.interfaces.inventory_store import IInventoryRepository, IInventoryStore
from agrostock.core.services.alert_service import AlertService
from agrostock.core.services.inventory_resolver import InventoryResolver
from agrostock.core.units import canonical_unit, convert

logger = get_logger(__name__)


class StockAdjustmentService:
    """
    Layer-pure service for transactional stock changes.

    Resolution, stock updates and movement records all go through one
    repository transaction. Alerts are recomputed after commit and never
    affect the outcome.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore,
        resolver: InventoryResolver,
        alert_service: AlertService | None = None,
    ) -> None:
        self._inventory_store = inventory_store
        self._resolver = resolver
        self._alert_service = alert_service

    async def adjust_stock(
        self,
        user_id: str,
        operations: Sequence[StockOperation],
    ) -> AdjustResult:
        """
        Apply a batch of stock operations all-or-nothing.

        Adds are applied before subtracts. Failures are returned as a
        structured result, never raised.

        Args:
            user_id: Owner of the inventory
            operations: Batch to apply

        Returns:
            AdjustResult with balances keyed by product id on success, or an
            error code and per-line details on failure
        """
        if not operations:
            return AdjustResult.success({})

        logger.info("stock_adjustment_started", user_id=user_id, operations=len(operations))

        balances: dict[str, float] = {}
        touched: dict[int, InventoryItem] = {}

        try:
            async with self._inventory_store.transaction() as repo:
                resolved = await self._resolve_all(repo, user_id, operations)

                adds = [op for op in operations if op.operation is MovementOperation.ADD]
                subtracts = [
                    op for op in operations if op.operation is MovementOperation.SUBTRACT
                ]
                for op in adds + subtracts:
                    updated = await self._apply(repo, user_id, op, resolved[op.product_id])
                    balances[op.product_id] = updated.current_stock
                    touched[updated.id] = updated  # type: ignore[index]

        except InventoryItemNotFoundError as e:
            logger.warning("stock_adjustment_unresolved", user_id=user_id, product_id=e.product_id)
            return AdjustResult.failure(
                AdjustErrorCode.INVENTORY_ITEM_NOT_FOUND,
                [
                    AdjustDetail(
                        product_id=e.product_id or "",
                        requested=e.requested or 0.0,
                        unit=e.unit or "",
                    )
                ],
            )
        except InsufficientStockError as e:
            logger.warning(
                "insufficient_stock",
                user_id=user_id,
                product_id=e.product_id,
                available=e.available,
                requested=e.requested,
                unit=e.unit,
            )
            return AdjustResult.failure(
                AdjustErrorCode.INSUFFICIENT_STOCK,
                [
                    AdjustDetail(
                        product_id=e.product_id,
                        available=e.available,
                        requested=e.requested,
                        unit=e.unit,
                    )
                ],
            )
        except TransactionFailedError as e:
            logger.error("stock_adjustment_transaction_failed", user_id=user_id, error=e.message)
            return AdjustResult.failure(AdjustErrorCode.TRANSACTION_FAILED)
        except Exception as e:
            logger.error(
                "stock_adjustment_transaction_failed",
                user_id=user_id,
                error=str(e),
                exc_info=True,
            )
            return AdjustResult.failure(AdjustErrorCode.TRANSACTION_FAILED)

        logger.info("stock_adjusted", user_id=user_id, balances=balances)

        if self._alert_service is not None:
            for item in touched.values():
                await self._alert_service.recompute_alerts(item)

        return AdjustResult.success(balances)

    async def _resolve_all(
        self,
        repo: IInventoryRepository,
        user_id: str,
        operations: Sequence[StockOperation],
    ) -> dict[str, InventoryItem]:
        """Resolve every distinct product up front; raise on the first miss."""
        resolved: dict[str, InventoryItem] = {}
        for op in operations:
            if op.product_id in resolved:
                continue
            item = await self._resolver.resolve_in(repo, user_id, op.product_id)
            if item is None:
                raise InventoryItemNotFoundError(
                    product_id=op.product_id,
                    requested=op.amount,
                    unit=canonical_unit(op.amount_unit, default="kg"),
                )
            resolved[op.product_id] = item
        return resolved

    async def _apply(
        self,
        repo: IInventoryRepository,
        user_id: str,
        op: StockOperation,
        item: InventoryItem,
    ) -> InventoryItem:
        """Apply one operation and record its movement."""
        assert item.id is not None
        requested_unit = op.amount_unit or item.unit
        amount_in_item_unit = convert(op.amount, requested_unit, item.unit)

        if op.operation is MovementOperation.ADD:
            updated = await repo.increment_stock(user_id, item.id, amount_in_item_unit)
            if updated is None:
                raise InventoryItemNotFoundError(
                    item_id=item.id,
                    product_id=op.product_id,
                    requested=op.amount,
                    unit=requested_unit,
                )
        else:
            updated = await repo.decrement_stock(user_id, item.id, amount_in_item_unit)
            if updated is None:
                current = await repo.get_item(user_id, item.id)
                if current is None or not current.active:
                    raise InventoryItemNotFoundError(
                        item_id=item.id,
                        product_id=op.product_id,
                        requested=op.amount,
                        unit=requested_unit,
                    )
                raise InsufficientStockError(
                    product_id=op.product_id,
                    requested=amount_in_item_unit,
                    available=current.current_stock,
                    unit=item.unit,
                )

        context = op.context
        await repo.add_movement(
            InventoryMovement(
                user_id=user_id,
                inventory_item_id=item.id,
                product_id=item.product_id or op.product_id,
                product_name=item.product_name,
                operation=op.operation,
                amount=op.amount,
                unit=requested_unit,
                amount_in_item_unit=amount_in_item_unit,
                balance_after=updated.current_stock,
                reason=op.reason,
                activity_id=context.activity_id if context else None,
                module=context.module if context else None,
                day_index=context.day_index if context else None,
            )
        )
        return updated
