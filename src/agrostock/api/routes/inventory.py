"""Inventory management endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from agrostock.api.dependencies import (
    get_adjust_stock_use_case,
    get_create_item_use_case,
    get_delete_item_use_case,
    get_get_item_use_case,
    get_list_alerts_use_case,
    get_list_items_use_case,
    get_list_movements_use_case,
    get_mark_alert_read_use_case,
    get_resolve_item_use_case,
    get_stock_by_products_use_case,
    get_update_item_use_case,
    get_user_id,
)
from agrostock.application.dto.requests import (
    AdjustStockRequest,
    CreateInventoryItemRequest,
    UpdateInventoryItemRequest,
)
from agrostock.application.dto.responses import (
    AdjustStockResponse,
    AlertListResponse,
    ErrorResponse,
    InventoryAlertResponse,
    InventoryItemResponse,
    InventoryListResponse,
    MovementListResponse,
    StockSnapshotResponse,
)
from agrostock.application.use_cases import (
    AdjustStockUseCase,
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
from agrostock.application.use_cases.manage_alerts import to_alert_response
from agrostock.application.use_cases.manage_inventory_item import to_item_response
from agrostock.core.entities.inventory import AdjustErrorCode, MovementModule

router = APIRouter(prefix="/api/inventory", tags=["inventory"])

ADJUST_STATUS_MAP: dict[AdjustErrorCode, int] = {
    AdjustErrorCode.INVENTORY_ITEM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    AdjustErrorCode.INSUFFICIENT_STOCK: status.HTTP_409_CONFLICT,
    AdjustErrorCode.TRANSACTION_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@router.get("", response_model=InventoryListResponse)
async def list_items(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    user_id: str = Depends(get_user_id),
    use_case: ListInventoryItemsUseCase = Depends(get_list_items_use_case),
) -> InventoryListResponse:
    """List active inventory items."""
    items = await use_case.execute(user_id, limit=limit, offset=offset)
    return use_case.to_response(items)


@router.post(
    "",
    response_model=InventoryItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_item(
    request: CreateInventoryItemRequest,
    user_id: str = Depends(get_user_id),
    use_case: CreateInventoryItemUseCase = Depends(get_create_item_use_case),
) -> InventoryItemResponse:
    """Start tracking a product."""
    item = await use_case.execute(user_id, request)
    return to_item_response(item)


@router.get("/alerts", response_model=AlertListResponse)
async def list_alerts(
    unread_only: bool = True,
    limit: int = Query(default=100, ge=1, le=1000),
    user_id: str = Depends(get_user_id),
    use_case: ListAlertsUseCase = Depends(get_list_alerts_use_case),
) -> AlertListResponse:
    """List alerts, unread only by default."""
    alerts = await use_case.execute(user_id, unread_only=unread_only, limit=limit)
    return use_case.to_response(alerts)


@router.post(
    "/alerts/{alert_id}/read",
    response_model=InventoryAlertResponse,
    responses={404: {"model": ErrorResponse}},
)
async def mark_alert_read(
    alert_id: int,
    user_id: str = Depends(get_user_id),
    use_case: MarkAlertReadUseCase = Depends(get_mark_alert_read_use_case),
) -> InventoryAlertResponse:
    """Mark an alert as read."""
    alert = await use_case.execute(user_id, alert_id)
    return to_alert_response(alert)


@router.get("/by-products", response_model=dict[str, StockSnapshotResponse])
async def stock_by_products(
    ids: str = Query(default="", description="Comma-separated product IDs"),
    user_id: str = Depends(get_user_id),
    use_case: GetStockByProductsUseCase = Depends(get_stock_by_products_use_case),
) -> dict[str, StockSnapshotResponse]:
    """Advisory stock lookup; products without an active item are omitted."""
    product_ids = [pid.strip() for pid in ids.split(",") if pid.strip()]
    snapshots = await use_case.execute(user_id, product_ids)
    return use_case.to_response(snapshots)


@router.get("/movements", response_model=MovementListResponse)
async def list_movements(
    product_id: str | None = None,
    activity_id: str | None = None,
    module: MovementModule | None = None,
    created_from: datetime | None = Query(default=None, alias="from"),
    created_to: datetime | None = Query(default=None, alias="to"),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    user_id: str = Depends(get_user_id),
    use_case: ListMovementsUseCase = Depends(get_list_movements_use_case),
) -> MovementListResponse:
    """Query the movement log, newest first."""
    movements = await use_case.execute(
        user_id,
        product_id=product_id,
        activity_id=activity_id,
        module=module,
        created_from=created_from,
        created_to=created_to,
        limit=limit,
        offset=offset,
    )
    return use_case.to_response(movements)


@router.get(
    "/product/{product_id}",
    response_model=InventoryItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def resolve_product(
    product_id: str,
    user_id: str = Depends(get_user_id),
    use_case: ResolveInventoryItemUseCase = Depends(get_resolve_item_use_case),
) -> InventoryItemResponse:
    """Resolve a catalog product to its inventory item."""
    item = await use_case.execute(user_id, product_id)
    return to_item_response(item)


@router.post(
    "/adjust",
    response_model=AdjustStockResponse,
    responses={
        404: {"model": AdjustStockResponse},
        409: {"model": AdjustStockResponse},
        503: {"model": AdjustStockResponse},
    },
)
async def adjust_stock(
    request: AdjustStockRequest,
    user_id: str = Depends(get_user_id),
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> AdjustStockResponse | JSONResponse:
    """Apply a batch of stock operations all-or-nothing."""
    result = await use_case.execute(user_id, request)
    response = use_case.to_response(result)
    if result.ok or result.error is None:
        return response
    return JSONResponse(
        status_code=ADJUST_STATUS_MAP[result.error],
        content=response.model_dump(mode="json"),
    )


@router.get(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_item(
    item_id: int,
    user_id: str = Depends(get_user_id),
    use_case: GetInventoryItemUseCase = Depends(get_get_item_use_case),
) -> InventoryItemResponse:
    """Get one active inventory item."""
    item = await use_case.execute(user_id, item_id)
    return to_item_response(item)


@router.put(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_item(
    item_id: int,
    request: UpdateInventoryItemRequest,
    user_id: str = Depends(get_user_id),
    use_case: UpdateInventoryItemUseCase = Depends(get_update_item_use_case),
) -> InventoryItemResponse:
    """Edit thresholds and descriptive fields. Stock is changed via /adjust."""
    item = await use_case.execute(user_id, item_id, request)
    return to_item_response(item)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
)
async def delete_item(
    item_id: int,
    user_id: str = Depends(get_user_id),
    use_case: DeleteInventoryItemUseCase = Depends(get_delete_item_use_case),
) -> Response:
    """Soft-delete an item and clear its alerts."""
    await use_case.execute(user_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
