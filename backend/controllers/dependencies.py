"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from backend.repository.upstream_repository import BookingSourceClient
from backend.services.schedule_service import ScheduleWorkflowService
from backend.utils.config import get_settings


def get_schedule_service(request: Request) -> ScheduleWorkflowService:
    service = getattr(request.app.state, "schedule_service", None)
    if service is None:
        booking_client = getattr(request.app.state, "booking_client", None)
        capacity_client = getattr(request.app.state, "capacity_client", None)
        if booking_client is not None and capacity_client is not None:
            service = ScheduleWorkflowService(
                booking_client=booking_client,
                capacity_client=capacity_client,
                settings=get_settings(),
            )
            request.app.state.schedule_service = service
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Schedule service is not initialized",
        )
    return service


def get_booking_client(request: Request) -> BookingSourceClient:
    client = getattr(request.app.state, "booking_client", None)
    if client is None:
        client = BookingSourceClient(settings=get_settings())
        request.app.state.booking_client = client
    return client
