"""Cost aggregation endpoints."""

from fastapi import APIRouter, Depends

from agrostock.api.dependencies import get_day_total_use_case, get_user_id
from agrostock.application.dto.requests import DayTotalRequest
from agrostock.application.dto.responses import DayTotalResponse
from agrostock.application.use_cases import ComputeDayTotalUseCase

router = APIRouter(prefix="/api/costs", tags=["costs"])


@router.post("/day-total", response_model=DayTotalResponse)
async def day_total(
    request: DayTotalRequest,
    user_id: str = Depends(get_user_id),
    use_case: ComputeDayTotalUseCase = Depends(get_day_total_use_case),
) -> DayTotalResponse:
    """Price one activity day against the catalog."""
    result = await use_case.execute(user_id, request)
    return use_case.to_response(result)
