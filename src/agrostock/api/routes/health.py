"""
Health check endpoints.
"""

from fastapi import APIRouter

from agrostock import __version__
from agrostock.application.dto.responses import HealthResponse
from agrostock.config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def root_health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "healthy", "version": __version__}


@router.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Readiness check.

    Runs a trivial query to confirm the database is reachable.
    """
    from agrostock.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        database = "ok" if await pool.ping() else "error"
    except Exception as e:
        logger.warning("health_db_check_failed", error=str(e))
        database = "error"

    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        version=__version__,
        database=database,
    )
