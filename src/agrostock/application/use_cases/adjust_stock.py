"""Adjust Stock Use Case: atomic batch of add/subtract operations."""

from agrostock.application.dto.requests import AdjustStockRequest
from agrostock.application.dto.responses import AdjustDetailResponse, AdjustStockResponse
from agrostock.config import get_logger
from agrostock.core.entities.inventory import AdjustResult
from agrostock.core.services.stock_adjustment import StockAdjustmentService

logger = get_logger(__name__)


class AdjustStockUseCase:
    """Apply a stock adjustment batch and report a structured result."""

    def __init__(self, adjustment_service: StockAdjustmentService | None = None):
        self._adjustment_service = adjustment_service

    async def _get_adjustment_service(self) -> StockAdjustmentService:
        if self._adjustment_service is None:
            from agrostock.application.services import get_stock_adjustment_service

            self._adjustment_service = await get_stock_adjustment_service()
        return self._adjustment_service

    async def execute(self, user_id: str, request: AdjustStockRequest) -> AdjustResult:
        """Execute the batch. Never raises for domain failures."""
        service = await self._get_adjustment_service()
        result = await service.adjust_stock(user_id, request.operations)
        logger.info(
            "adjust_stock_complete",
            user_id=user_id,
            ok=result.ok,
            error=result.error.value if result.error else None,
        )
        return result

    def to_response(self, result: AdjustResult) -> AdjustStockResponse:
        """Convert result to API response."""
        return AdjustStockResponse(
            ok=result.ok,
            error=result.error.value if result.error else None,
            details=(
                [
                    AdjustDetailResponse(
                        product_id=d.product_id,
                        available=d.available,
                        requested=d.requested,
                        unit=d.unit,
                    )
                    for d in result.details
                ]
                if result.details is not None
                else None
            ),
            balances=result.balances,
        )
