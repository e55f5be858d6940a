"""Occupancy banding and event label tone classification."""

from __future__ import annotations

from typing import Optional

from backend.domain.models import CapacityBand, CapacityReading, CapacityRecord


_BAND_THRESHOLDS: tuple[tuple[float, CapacityBand], ...] = (
    (0.4, CapacityBand.LOW),
    (0.6, CapacityBand.MODERATE),
    (0.85, CapacityBand.HIGH),
)

# First match wins, so "Club Open Gym" is a club event.
EVENT_TONE_PATTERNS: tuple[tuple[str, str], ...] = (
    ("Club", "club"),
    ("Open", "open"),
    ("Varsity", "varsity"),
    ("Intramural", "intramural"),
    ("Fitness", "fitness"),
    ("Yoga", "fitness"),
    ("Cycle", "fitness"),
    ("Closed", "closed"),
)

DEFAULT_EVENT_TONE = "default"


def occupancy_ratio(record: CapacityRecord) -> float:
    if record.capacity <= 0:
        raise ValueError("capacity must be > 0")
    return record.count / record.capacity


def fill_ratio(record: CapacityRecord) -> float:
    return min(1.0, max(0.0, occupancy_ratio(record)))


def classify_band(record: Optional[CapacityRecord]) -> Optional[CapacityBand]:
    if record is None:
        return None
    ratio = occupancy_ratio(record)
    for upper_bound, band in _BAND_THRESHOLDS:
        if ratio < upper_bound:
            return band
    return CapacityBand.CRITICAL


def capacity_reading(record: Optional[CapacityRecord]) -> Optional[CapacityReading]:
    band = classify_band(record)
    if record is None or band is None:
        return None
    return CapacityReading(record=record, band=band, fill_ratio=fill_ratio(record))


def classify_event_tone(name: str) -> str:
    for pattern, tone in EVENT_TONE_PATTERNS:
        if pattern in name:
            return tone
    return DEFAULT_EVENT_TONE
