"""
FastAPI Application for the deal insights backend.

Main entry point for the API server.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from deal_insights import __version__
from deal_insights.core.config import get_settings
from deal_insights.insights.factory import initialize_registry
from deal_insights.api.exceptions import register_exception_handlers
from deal_insights.api.routes import deals, health, insights

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    The insight registry is initialized here; routes may only use it once
    start-up has completed.
    """
    settings = get_settings()
    logger.info(f"Starting Deal Insights API v{__version__} (deals_dir={settings.deals_dir})")

    initialize_registry()
    logger.info("Application startup complete")

    yield

    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Deal Insights API",
        version=__version__,
        description="Insight execution over trading deal records",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(insights.router, prefix="/api/v1")
    app.include_router(deals.router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    uvicorn.run(
        "deal_insights.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
