"""Same-origin relay to the upstream booking service."""

from __future__ import annotations

import requests
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from backend.controllers.dependencies import get_booking_client
from backend.repository.upstream_repository import BookingSourceClient
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["proxy"])


@router.post("/api/proxy")
async def relay_booking_query(
    request: Request,
    booking_client: BookingSourceClient = Depends(get_booking_client),
) -> JSONResponse:
    """Forward the browse query as-is and hand back the ``{"d": ...}`` envelope."""
    body = await request.body()
    try:
        upstream = await run_in_threadpool(booking_client.forward, body)
    except requests.exceptions.RequestException as exc:
        logger.error("Proxy error: %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=500)

    if not upstream.ok:
        error_text = upstream.text
        logger.error("Error from booking service (%s): %s", upstream.status_code, error_text)
        return JSONResponse(
            {"error": error_text or "External API error"},
            status_code=upstream.status_code,
        )

    try:
        envelope = upstream.json()
    except ValueError as exc:
        logger.error("Booking service returned a non-JSON body: %s", exc)
        return JSONResponse({"error": "Upstream returned invalid JSON"}, status_code=500)
    return JSONResponse(envelope)
