"""Proportional time-to-pixel mapping for event blocks."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime

from backend.domain.constraints import LayoutConfig
from backend.domain.models import Event, EventGeometry, TimeWindow


def _clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


@dataclass(frozen=True)
class GeometryMapper:
    """Maps timestamps inside ``window`` onto ``[0, viewport_height]``."""

    window: TimeWindow
    viewport_height: float
    config: LayoutConfig

    def offset(self, moment: datetime) -> float:
        span = self.window.span_minutes
        if span <= 0:
            return 0.0
        elapsed = (moment - self.window.start).total_seconds() / 60.0
        return _clamp01(elapsed / span) * self.viewport_height

    def event_geometry(self, event: Event, column_id: str) -> EventGeometry:
        height_limit = max(0.0, self.viewport_height)
        if event.start < self.window.start:
            # Already running when the window opens.
            return EventGeometry(
                column_id=column_id,
                top_px=0.0,
                height_px=self.offset(event.end),
                continues_from_earlier=True,
            )

        inset = self.config.block_inset_px
        start_offset = self.offset(event.start)
        end_offset = self.offset(event.end)
        top = min(start_offset + inset, height_limit)
        height = end_offset - start_offset - inset - (inset - 1)
        height = max(0.0, min(height, height_limit - top))
        return EventGeometry(column_id=column_id, top_px=top, height_px=height)


def map_column_geometry(
    binned_events: Mapping[str, Sequence[Event]],
    mapper: GeometryMapper,
) -> dict[str, list[EventGeometry]]:
    return {
        column_id: [mapper.event_geometry(event, column_id) for event in events]
        for column_id, events in binned_events.items()
    }
