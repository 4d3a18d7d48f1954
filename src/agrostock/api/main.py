"""
FastAPI application for the AgroStock inventory core.

Startup refuses to serve with unusable inventory settings, brings the schema
up to date and opens the connection pool; shutdown closes the pool.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agrostock import __version__
from agrostock.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from agrostock.api.middleware.error_handler import setup_exception_handlers
from agrostock.api.routes import costs_router, health_router, inventory_router
from agrostock.application.services import inventory_settings
from agrostock.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    from agrostock.infrastructure.storage.sqlite import close_pool, get_pool
    from agrostock.infrastructure.storage.sqlite.migrations import run_migrations

    configure_logging()
    settings = get_settings()
    inventory = inventory_settings()
    logger.info(
        "agrostock_starting",
        version=__version__,
        db_path=str(settings.storage.db_path),
        default_unit=inventory.default_unit,
        expiry_warning_days=inventory.expiry_warning_days,
    )

    results = await run_migrations()
    failed = [r for r in results if not r.success]
    if failed:
        logger.error("startup_migration_failed", version=failed[0].version, error=failed[0].error)
        raise RuntimeError(f"Migration v{failed[0].version} failed: {failed[0].error}")

    await get_pool()
    logger.info("agrostock_ready", migrations_applied=len(results))

    try:
        yield
    finally:
        await close_pool()
        logger.info("agrostock_stopped")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="AgroStock Inventory API",
        description="Farm input stock, atomic adjustments, alerts and daily costs",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    # Added last runs first: errors are logged with the request context bound
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(LoggingMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["*"],
        )
    setup_exception_handlers(app)

    for router in (health_router, inventory_router, costs_router):
        app.include_router(router)

    return app


app = create_app()


def run() -> None:
    """agrostock-api: serve the app with uvicorn."""
    import uvicorn

    api = get_settings().api
    uvicorn.run(
        "agrostock.api.main:app",
        host=api.host,
        port=api.port,
        reload=api.debug,
        log_config=None,
    )


if __name__ == "__main__":
    run()
