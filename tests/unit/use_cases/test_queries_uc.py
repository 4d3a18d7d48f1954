"""Tests for read-side use cases: stock lookup, movements, alerts and costs."""

from unittest.mock import AsyncMock

import pytest

from agrostock.application.dto.requests import DayTotalRequest
from agrostock.application.use_cases.compute_day_total import ComputeDayTotalUseCase
from agrostock.application.use_cases.manage_alerts import (
    ListAlertsUseCase,
    MarkAlertReadUseCase,
)
from agrostock.application.use_cases.query_inventory import (
    GetStockByProductsUseCase,
    ListMovementsUseCase,
)
from agrostock.core.entities.catalog import ProductCatalogEntry, ProductType
from agrostock.core.entities.inventory import InventoryItem, MovementModule
from agrostock.core.exceptions import AlertNotFoundError


class TestGetStockByProducts:
    async def test_returns_only_tracked_products(self, inventory_store, user_id):
        inventory_store.add_item(
            InventoryItem(user_id=user_id, product_id="a", product_name="A", current_stock=3)
        )
        use_case = GetStockByProductsUseCase(inventory_store)

        snapshots = await use_case.execute(user_id, ["a", "b", "a", ""])

        assert list(snapshots) == ["a"]
        assert use_case.to_response(snapshots)["a"].current_stock == 3


class TestListMovements:
    async def test_forwards_filters(self):
        store = AsyncMock()
        store.list_movements.return_value = []

        await ListMovementsUseCase(store).execute(
            "u1", activity_id="act", module=MovementModule.WATER
        )

        kwargs = store.list_movements.call_args.kwargs
        assert kwargs["activity_id"] == "act"
        assert kwargs["module"] is MovementModule.WATER
        assert kwargs["product_id"] is None


class TestAlerts:
    async def test_mark_unknown_alert(self, alert_store):
        with pytest.raises(AlertNotFoundError):
            await MarkAlertReadUseCase(alert_store).execute("u1", 99)

    async def test_list_uses_unread_default(self):
        store = AsyncMock()
        store.list_alerts.return_value = []

        use_case = ListAlertsUseCase(store)
        response = use_case.to_response(await use_case.execute("u1"))

        store.list_alerts.assert_awaited_once_with("u1", unread_only=True, limit=100)
        assert response.total == 0


class TestComputeDayTotal:
    async def test_loads_stored_catalog_when_missing(self):
        catalog_store = AsyncMock()
        catalog_store.list_products.return_value = [
            ProductCatalogEntry(id="f", name="F", type=ProductType.FERTILIZER, price_per_unit=2)
        ]
        use_case = ComputeDayTotalUseCase(catalog_store)
        request = DayTotalRequest.model_validate(
            {"day": {"fertilizers": [{"productId": "f", "amount": 500, "unit": "g"}]}}
        )

        result = await use_case.execute("u1", request)

        catalog_store.list_products.assert_awaited_once_with("u1")
        assert result.total == pytest.approx(1.0)

    async def test_request_catalog_skips_store(self):
        catalog_store = AsyncMock()
        use_case = ComputeDayTotalUseCase(catalog_store)
        request = DayTotalRequest.model_validate(
            {
                "day": {"water": {"amount": 2, "unit": "m3"}},
                "catalog": [{"_id": "w", "name": "Agua", "type": "water", "pricePerUnit": 0.3, "unit": "m3"}],
                "other_expenses": [{"description": "Jornal", "amount": 1, "price": 15}],
            }
        )

        result = await use_case.execute("u1", request)

        catalog_store.list_products.assert_not_awaited()
        assert result.total == pytest.approx(15.6)
        assert use_case.to_response(result).per_line_cost[0].kind == "water"
