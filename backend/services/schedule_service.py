"""Schedule orchestration: upstream fetch -> render model."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from backend.domain.aliases import LOCATION_ALIASES
from backend.domain.constraints import LayoutConfig, layout_config_from_settings
from backend.domain.models import CapacityReading, CapacityRecord, RenderModel, ViewportMeasurement
from backend.repository.upstream_repository import (
    BookingSourceClient,
    CapacitySourceClient,
    UpstreamError,
)
from backend.services.binding_service import bind_capacities, filter_events_for_date
from backend.services.capacity_service import capacity_reading
from backend.services.layout_service import build_render_model
from backend.services.text_fit_service import TextWidthMeasurer
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class ScheduleValidationError(Exception):
    """Raised when schedule request inputs are invalid."""


class ScheduleWorkflowService:
    """Fetches the day's bookings and occupancy and lays them out."""

    def __init__(
        self,
        booking_client: Optional[BookingSourceClient] = None,
        capacity_client: Optional[CapacitySourceClient] = None,
        settings: Optional[Settings] = None,
        measurer: Optional[TextWidthMeasurer] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._booking_client = booking_client or BookingSourceClient(self._settings)
        self._capacity_client = capacity_client or CapacitySourceClient(self._settings)
        self._config: LayoutConfig = layout_config_from_settings(self._settings)
        self._measurer = measurer

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def _load_capacities(self) -> list[CapacityRecord]:
        try:
            return self._capacity_client.fetch_capacities()
        except UpstreamError as exc:
            logger.warning("Capacity feed unavailable, rendering without it: %s", exc)
            return []

    def get_render_model(
        self,
        *,
        day: date,
        viewport: ViewportMeasurement,
        now: Optional[datetime] = None,
    ) -> RenderModel:
        if viewport.width_px < 0 or viewport.height_px < 0:
            raise ScheduleValidationError("viewport dimensions must be >= 0")

        # TransportFailure from the booking feed propagates to the caller.
        events = filter_events_for_date(self._booking_client.fetch_events(day), day)
        capacities = self._load_capacities()
        return build_render_model(
            events,
            capacities,
            viewport,
            now or datetime.now(),
            config=self._config,
            reference_day=day,
            measurer=self._measurer,
        )

    def get_capacity_readings(self) -> dict[str, Optional[CapacityReading]]:
        """Raises ``UpstreamError`` when the capacity feed cannot be read."""
        bound = bind_capacities(self._capacity_client.fetch_capacities(), LOCATION_ALIASES)
        return {column_id: capacity_reading(record) for column_id, record in bound.items()}
