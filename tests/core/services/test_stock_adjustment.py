"""Tests for StockAdjustmentService against the in-memory store."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest

from agrostock.core.entities.alert import AlertType
from agrostock.core.entities.inventory import (
    AdjustErrorCode,
    AdjustmentContext,
    InventoryItem,
    MovementModule,
    MovementOperation,
    StockOperation,
)
from agrostock.core.services.alert_service import AlertService
from agrostock.core.services.inventory_resolver import InventoryResolver
from agrostock.core.services.stock_adjustment import StockAdjustmentService


@pytest.fixture
def service(inventory_store, alert_store) -> StockAdjustmentService:
    return StockAdjustmentService(
        inventory_store=inventory_store,
        resolver=InventoryResolver(inventory_store),
        alert_service=AlertService(alert_store),
    )


@pytest.fixture
def fertilizer(inventory_store, user_id) -> InventoryItem:
    return inventory_store.add_item(
        InventoryItem(
            user_id=user_id,
            product_id="fert",
            product_name="Nitrato",
            current_stock=10,
            min_stock=5,
            critical_stock=2,
            unit="kg",
        )
    )


def subtract(product_id: str, amount: float, unit: str | None = None, **kwargs) -> StockOperation:
    return StockOperation(product_id=product_id, amount=amount, amount_unit=unit, **kwargs)


def add(product_id: str, amount: float, unit: str | None = None) -> StockOperation:
    return StockOperation(
        product_id=product_id, amount=amount, amount_unit=unit, operation=MovementOperation.ADD
    )


class TestAdjustStock:
    async def test_subtract_then_low_stock_alert(
        self, service, inventory_store, alert_store, fertilizer, user_id
    ):
        first = await service.adjust_stock(user_id, [subtract("fert", 3)])
        assert first.ok
        assert first.balances == {"fert": 7}
        assert alert_store.alerts == []

        second = await service.adjust_stock(user_id, [subtract("fert", 3)])
        assert second.balances == {"fert": 4}
        assert [a.type for a in alert_store.alerts] == [AlertType.LOW_STOCK]

    async def test_insufficient_stock(self, service, inventory_store, fertilizer, user_id):
        await service.adjust_stock(user_id, [subtract("fert", 6)])

        result = await service.adjust_stock(user_id, [subtract("fert", 6)])

        assert not result.ok
        assert result.error is AdjustErrorCode.INSUFFICIENT_STOCK
        detail = result.details[0]
        assert (detail.product_id, detail.available, detail.requested, detail.unit) == (
            "fert",
            4,
            6,
            "kg",
        )
        assert inventory_store.items[fertilizer.id].current_stock == 4

    async def test_batch_is_all_or_nothing(self, service, inventory_store, user_id):
        a = inventory_store.add_item(
            InventoryItem(user_id=user_id, product_id="A", product_name="A", current_stock=1)
        )
        b = inventory_store.add_item(
            InventoryItem(user_id=user_id, product_id="B", product_name="B", current_stock=50)
        )

        result = await service.adjust_stock(user_id, [add("A", 5), subtract("B", 100)])

        assert result.error is AdjustErrorCode.INSUFFICIENT_STOCK
        assert inventory_store.items[a.id].current_stock == 1
        assert inventory_store.items[b.id].current_stock == 50
        assert inventory_store.movements == []

    async def test_unresolvable_product_aborts_batch(
        self, service, inventory_store, fertilizer, user_id
    ):
        result = await service.adjust_stock(
            user_id, [subtract("fert", 1), subtract("ghost", 2, "L")]
        )

        assert result.error is AdjustErrorCode.INVENTORY_ITEM_NOT_FOUND
        assert result.details[0].product_id == "ghost"
        assert result.details[0].requested == 2
        assert result.details[0].unit == "L"
        assert inventory_store.items[fertilizer.id].current_stock == 10

    async def test_converts_into_item_unit(self, service, inventory_store, fertilizer, user_id):
        result = await service.adjust_stock(user_id, [subtract("fert", 500, "g")])

        assert result.balances == {"fert": pytest.approx(9.5)}
        movement = inventory_store.movements[0]
        assert movement.amount == 500
        assert movement.unit == "g"
        assert movement.amount_in_item_unit == pytest.approx(0.5)
        assert movement.balance_after == pytest.approx(9.5)

    async def test_adds_apply_before_subtracts(self, service, inventory_store, user_id):
        inventory_store.add_item(
            InventoryItem(user_id=user_id, product_id="A", product_name="A", current_stock=2)
        )

        result = await service.adjust_stock(user_id, [subtract("A", 5), add("A", 4)])

        assert result.ok
        assert result.balances == {"A": 1}
        ops = [m.operation for m in inventory_store.movements]
        assert ops == [MovementOperation.ADD, MovementOperation.SUBTRACT]

    async def test_movement_records_provenance(
        self, service, inventory_store, fertilizer, user_id
    ):
        context = AdjustmentContext(
            activity_id="act-7", module=MovementModule.FERTIGATION, day_index=3
        )
        await service.adjust_stock(
            user_id, [subtract("fert", 1, reason="riego semana 2", context=context)]
        )

        movement = inventory_store.movements[0]
        assert movement.activity_id == "act-7"
        assert movement.module is MovementModule.FERTIGATION
        assert movement.day_index == 3
        assert movement.reason == "riego semana 2"
        assert movement.product_name == "Nitrato"

    async def test_empty_batch(self, service, user_id):
        result = await service.adjust_stock(user_id, [])
        assert result.ok
        assert result.balances == {}

    async def test_exact_stock_can_be_consumed(self, service, fertilizer, user_id):
        result = await service.adjust_stock(user_id, [subtract("fert", 10)])
        assert result.balances == {"fert": 0}

    async def test_storage_failure_is_transaction_failed(
        self, inventory_store, fertilizer, user_id, monkeypatch
    ):
        service = StockAdjustmentService(inventory_store, InventoryResolver(inventory_store))

        original = inventory_store.transaction

        @asynccontextmanager
        async def failing_transaction():
            async with original() as repo:
                repo.add_movement = AsyncMock(side_effect=RuntimeError("disk I/O error"))
                yield repo

        monkeypatch.setattr(inventory_store, "transaction", failing_transaction)

        result = await service.adjust_stock(user_id, [subtract("fert", 1)])

        assert result.error is AdjustErrorCode.TRANSACTION_FAILED
        assert inventory_store.items[fertilizer.id].current_stock == 10

    async def test_alert_failure_does_not_undo_adjustment(
        self, inventory_store, fertilizer, user_id
    ):
        failing_alerts = AsyncMock()
        failing_alerts.refresh_item_alerts.side_effect = RuntimeError("locked")
        service = StockAdjustmentService(
            inventory_store,
            InventoryResolver(inventory_store),
            AlertService(failing_alerts),
        )

        result = await service.adjust_stock(user_id, [subtract("fert", 9)])

        assert result.ok
        assert inventory_store.items[fertilizer.id].current_stock == 1
