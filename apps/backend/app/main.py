"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from packages.db.pool import DatabaseConnectionError

from app.api.orders.routes import router as orders_router
from app.core.config import Settings, get_settings
from app.core.logging import configure_logging
from app.services.order_entry import OrderEntryService

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application. The database is pinged before serving."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        service = OrderEntryService.from_settings(settings)
        try:
            await service.start()
        except DatabaseConnectionError:
            logger.error("Failed to start server - unable to ping database.")
            await service.close()
            raise
        app.state.order_entry = service
        logger.info("Application started on port %s", settings.app_port)
        yield
        # Shutdown
        await service.close()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        description="Order entry over a relational product catalog",
        lifespan=lifespan,
    )

    @app.get("/healthz")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "ok", "environment": settings.environment}

    app.include_router(orders_router, tags=["Orders"])
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.api_route(
        "/{path:path}",
        methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        include_in_schema=False,
    )
    async def fallback(path: str) -> RedirectResponse:
        """Send any unknown path back to the product list."""
        return RedirectResponse(url="/", status_code=302)

    return app


app = create_app()
