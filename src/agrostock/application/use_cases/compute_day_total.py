"""Compute Day Total Use Case: price an activity day against the catalog."""

from agrostock.application.dto.requests import DayTotalRequest
from agrostock.application.dto.responses import DayTotalResponse, LineCostResponse
from agrostock.config import get_logger
from agrostock.core.entities.costs import DayTotal
from agrostock.core.interfaces.catalog_store import ICatalogStore
from agrostock.core.services.cost_aggregator import compute_day_total

logger = get_logger(__name__)


class ComputeDayTotalUseCase:
    """Cost a day using the request's catalog, or the user's stored catalog."""

    def __init__(self, catalog_store: ICatalogStore | None = None):
        self._catalog_store = catalog_store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from agrostock.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def execute(self, user_id: str, request: DayTotalRequest) -> DayTotal:
        catalog = request.catalog
        if catalog is None:
            catalog_store = await self._get_catalog_store()
            catalog = await catalog_store.list_products(user_id)

        result = compute_day_total(request.day, catalog, request.other_expenses)
        logger.debug("day_total_computed", user_id=user_id, total=result.total)
        return result

    def to_response(self, result: DayTotal) -> DayTotalResponse:
        return DayTotalResponse(
            total=result.total,
            fertilizers_cost=result.fertilizers_cost,
            phytosanitaries_cost=result.phytosanitaries_cost,
            water_cost=result.water_cost,
            other_expenses_cost=result.other_expenses_cost,
            per_line_cost=[
                LineCostResponse(
                    kind=line.kind.value,
                    product_id=line.product_id,
                    amount=line.amount,
                    unit=line.unit,
                    quantity=line.quantity,
                    quantity_unit=line.quantity_unit,
                    unit_price=line.unit_price,
                    cost=line.cost,
                    priced_from_catalog=line.priced_from_catalog,
                )
                for line in result.per_line_cost
            ],
        )
