"""
app.py - FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the upstream clients and the schedule service, registers routers,
and logs the resolved configuration on startup.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.controllers.proxy_controller import router as proxy_router
from backend.controllers.schedule_controller import router as schedule_router
from backend.repository.upstream_repository import BookingSourceClient, CapacitySourceClient
from backend.services.schedule_service import ScheduleWorkflowService
from backend.utils.config import get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def create_app() -> FastAPI:
    """
    Build and wire the FastAPI application.

    Every dependency lives on app.state so tests can swap the upstream
    clients without touching module globals.
    """
    settings = get_settings()

    # --- Upstream sources ---
    booking_client = BookingSourceClient(settings=settings)
    capacity_client = CapacitySourceClient(settings=settings)

    # --- Services ---
    schedule_service = ScheduleWorkflowService(
        booking_client=booking_client,
        capacity_client=capacity_client,
        settings=settings,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Log the effective upstream configuration before serving."""
        _startup(app)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # --- Routers ---
    app.include_router(proxy_router)
    app.include_router(schedule_router)

    # --- Inject services into app.state for dependency resolution ---
    app.state.booking_client = booking_client
    app.state.capacity_client = capacity_client
    app.state.schedule_service = schedule_service

    return app


def _startup(app: FastAPI) -> None:
    settings = get_settings()
    logger.info("Startup: booking endpoint %s", settings.booking_endpoint_url)
    if settings.capacity_account_api_key:
        logger.info("Startup: capacity endpoint %s", settings.capacity_endpoint_url)
    else:
        logger.warning("Startup: CAPACITY_ACCOUNT_API_KEY not set; occupancy bands disabled")
    logger.info("Startup complete - schedule board ready")


# Module-level app object for uvicorn
app = create_app()
