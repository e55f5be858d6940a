"""Controller layer for the render model and occupancy endpoints."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from backend.controllers.dependencies import get_schedule_service
from backend.domain.models import (
    CapacityBand,
    CapacityReading,
    LabelMode,
    RenderModel,
    ViewportMeasurement,
)
from backend.repository.upstream_repository import (
    CapacitySourceNotConfiguredError,
    TransportFailure,
    UpstreamError,
)
from backend.services.schedule_service import ScheduleValidationError, ScheduleWorkflowService
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["schedule"])


class WindowResponse(BaseModel):
    start: datetime
    end: datetime


class ViewportResponse(BaseModel):
    width_px: float = Field(ge=0.0)
    height_px: float = Field(ge=0.0)


class EventBlockResponse(BaseModel):
    name: str
    raw_room_id: str
    start: datetime
    end: datetime
    top_px: float = Field(ge=0.0)
    height_px: float = Field(ge=0.0)
    continues_from_earlier: bool
    label_mode: LabelMode
    label_lines: list[str]
    tone: str


class CapacityResponse(BaseModel):
    location_name: str
    count: int = Field(ge=0)
    capacity: int = Field(gt=0)
    updated_at: datetime
    band: CapacityBand
    fill_ratio: float = Field(ge=0.0, le=1.0)


class ColumnResponse(BaseModel):
    column_id: str
    display_name: str
    blocks: list[EventBlockResponse]
    capacity: CapacityResponse | None = None


class NowMarkerResponse(BaseModel):
    top_px: float = Field(ge=0.0)
    visible: bool
    badge_left_px: float
    badge_diameter_px: float = Field(gt=0.0)


class TimeAxisTickResponse(BaseModel):
    label: str
    top_px: float = Field(ge=0.0)


class ScheduleResponse(BaseModel):
    schedule_date: date
    window: WindowResponse
    viewport: ViewportResponse
    column_width_px: float = Field(ge=0.0)
    columns: list[ColumnResponse]
    now_marker: NowMarkerResponse
    time_axis: list[TimeAxisTickResponse]


class CapacitiesResponse(BaseModel):
    columns: dict[str, CapacityResponse | None]


def _capacity_response(reading: Optional[CapacityReading]) -> CapacityResponse | None:
    if reading is None:
        return None
    return CapacityResponse(
        location_name=reading.record.location_name,
        count=reading.record.count,
        capacity=reading.record.capacity,
        updated_at=reading.record.updated_at,
        band=reading.band,
        fill_ratio=reading.fill_ratio,
    )


def to_schedule_response(day: date, model: RenderModel) -> ScheduleResponse:
    columns = [
        ColumnResponse(
            column_id=column.column.column_id,
            display_name=column.column.display_name,
            blocks=[
                EventBlockResponse(
                    name=block.event.name,
                    raw_room_id=block.event.raw_room_id,
                    start=block.event.start,
                    end=block.event.end,
                    top_px=block.geometry.top_px,
                    height_px=block.geometry.height_px,
                    continues_from_earlier=block.geometry.continues_from_earlier,
                    label_mode=block.label_mode,
                    label_lines=list(block.label_lines),
                    tone=block.tone,
                )
                for block in column.blocks
            ],
            capacity=_capacity_response(column.capacity),
        )
        for column in model.columns
    ]
    return ScheduleResponse(
        schedule_date=day,
        window=WindowResponse(start=model.window.start, end=model.window.end),
        viewport=ViewportResponse(
            width_px=model.viewport.width_px,
            height_px=model.viewport.height_px,
        ),
        column_width_px=model.column_width_px,
        columns=columns,
        now_marker=NowMarkerResponse(
            top_px=model.now_marker.top_px,
            visible=model.now_marker.visible,
            badge_left_px=model.now_marker.badge_left_px,
            badge_diameter_px=model.now_marker.badge_diameter_px,
        ),
        time_axis=[
            TimeAxisTickResponse(label=tick.label, top_px=tick.top_px)
            for tick in model.time_axis
        ],
    )


@router.get("/health", include_in_schema=False)
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/schedule", response_model=ScheduleResponse, status_code=status.HTTP_200_OK)
def get_schedule(
    day: Optional[date] = Query(default=None, alias="date"),
    width: float = Query(default=0.0, ge=0.0),
    height: float = Query(default=0.0, ge=0.0),
    now: Optional[datetime] = Query(default=None),
    schedule_service: ScheduleWorkflowService = Depends(get_schedule_service),
) -> ScheduleResponse:
    target_day = day or date.today()
    try:
        model = schedule_service.get_render_model(
            day=target_day,
            viewport=ViewportMeasurement(width_px=width, height_px=height),
            now=now.replace(tzinfo=None) if now is not None else None,
        )
        return to_schedule_response(target_day, model)
    except ScheduleValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except TransportFailure as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected schedule failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build schedule",
        ) from exc


@router.get("/capacities", response_model=CapacitiesResponse, status_code=status.HTTP_200_OK)
def get_capacities(
    schedule_service: ScheduleWorkflowService = Depends(get_schedule_service),
) -> CapacitiesResponse:
    try:
        readings = schedule_service.get_capacity_readings()
        return CapacitiesResponse(
            columns={column_id: _capacity_response(reading) for column_id, reading in readings.items()}
        )
    except CapacitySourceNotConfiguredError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc
    except UpstreamError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected capacity failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load capacities",
        ) from exc
