"""Domain models for the single-day resource timeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Event:
    start: datetime
    end: datetime
    name: str
    raw_room_id: str


@dataclass(frozen=True)
class CanonicalColumn:
    column_id: str
    display_name: str


@dataclass(frozen=True)
class CapacityRecord:
    location_name: str
    count: int
    capacity: int
    updated_at: datetime


@dataclass(frozen=True)
class ViewportMeasurement:
    width_px: float = 0.0
    height_px: float = 0.0

    @property
    def measured(self) -> bool:
        return self.width_px > 0


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: datetime

    @property
    def span_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60.0

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


class LabelMode(str, Enum):
    TWO_LINE = "two_line"
    NAME_WITH_RANGE = "name_with_range"
    NAME_WITH_START = "name_with_start"
    NAME_ONLY = "name_only"


class CapacityBand(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class EventGeometry:
    """Pixel placement of one event block inside its column."""

    column_id: str
    top_px: float
    height_px: float
    continues_from_earlier: bool = False


@dataclass(frozen=True)
class EventBlock:
    event: Event
    geometry: EventGeometry
    label_mode: LabelMode
    label_lines: tuple[str, ...]
    tone: str


@dataclass(frozen=True)
class NowMarker:
    top_px: float
    visible: bool
    badge_left_px: float
    badge_diameter_px: float


@dataclass(frozen=True)
class CapacityReading:
    record: CapacityRecord
    band: CapacityBand
    fill_ratio: float


@dataclass(frozen=True)
class ColumnRender:
    column: CanonicalColumn
    blocks: list[EventBlock]
    capacity: Optional[CapacityReading]


@dataclass(frozen=True)
class TimeAxisTick:
    label: str
    top_px: float


@dataclass(frozen=True)
class RenderModel:
    window: TimeWindow
    viewport: ViewportMeasurement
    column_width_px: float
    columns: list[ColumnRender]
    now_marker: NowMarker
    time_axis: list[TimeAxisTick]
