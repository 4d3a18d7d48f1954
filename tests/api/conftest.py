"""Fixtures for API tests: the app wired to in-memory stores."""

import pytest
from httpx import ASGITransport, AsyncClient

from agrostock.api import dependencies as deps
from agrostock.api.main import app
from agrostock.application.use_cases import (
    AdjustStockUseCase,
    ComputeDayTotalUseCase,
    CreateInventoryItemUseCase,
    DeleteInventoryItemUseCase,
    GetInventoryItemUseCase,
    GetStockByProductsUseCase,
    ListAlertsUseCase,
    ListInventoryItemsUseCase,
    ListMovementsUseCase,
    MarkAlertReadUseCase,
    ResolveInventoryItemUseCase,
    UpdateInventoryItemUseCase,
)
from agrostock.core.services import AlertService, InventoryResolver, StockAdjustmentService


@pytest.fixture
def overrides(inventory_store, alert_store):
    alert_service = AlertService(alert_store)
    resolver = InventoryResolver(inventory_store)
    adjuster = StockAdjustmentService(inventory_store, resolver, alert_service)
    item_kwargs = {"inventory_store": inventory_store, "alert_service": alert_service}

    return {
        deps.get_list_items_use_case: lambda: ListInventoryItemsUseCase(**item_kwargs),
        deps.get_get_item_use_case: lambda: GetInventoryItemUseCase(**item_kwargs),
        deps.get_create_item_use_case: lambda: CreateInventoryItemUseCase(**item_kwargs),
        deps.get_update_item_use_case: lambda: UpdateInventoryItemUseCase(**item_kwargs),
        deps.get_delete_item_use_case: lambda: DeleteInventoryItemUseCase(**item_kwargs),
        deps.get_resolve_item_use_case: lambda: ResolveInventoryItemUseCase(resolver),
        deps.get_adjust_stock_use_case: lambda: AdjustStockUseCase(adjuster),
        deps.get_stock_by_products_use_case: lambda: GetStockByProductsUseCase(inventory_store),
        deps.get_list_movements_use_case: lambda: ListMovementsUseCase(inventory_store),
        deps.get_list_alerts_use_case: lambda: ListAlertsUseCase(alert_store),
        deps.get_mark_alert_read_use_case: lambda: MarkAlertReadUseCase(alert_store),
        deps.get_day_total_use_case: lambda: ComputeDayTotalUseCase(),
    }


@pytest.fixture
async def client(overrides, user_id):
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"X-User-Id": user_id},
    ) as ac:
        yield ac
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)


@pytest.fixture
async def anonymous_client(overrides):
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)
