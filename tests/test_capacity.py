from __future__ import annotations

from datetime import datetime

import pytest

from backend.domain.models import CapacityBand, CapacityRecord
from backend.services.capacity_service import (
    DEFAULT_EVENT_TONE,
    capacity_reading,
    classify_band,
    classify_event_tone,
    fill_ratio,
)


def _record(count: int, capacity: int = 50) -> CapacityRecord:
    return CapacityRecord("Gymnasium", count, capacity, datetime(2025, 2, 6, 12, 0))


def test_band_examples():
    assert classify_band(_record(40)) is CapacityBand.HIGH
    assert classify_band(_record(45)) is CapacityBand.CRITICAL


@pytest.mark.parametrize(
    ("count", "expected"),
    [
        (0, CapacityBand.LOW),
        (19, CapacityBand.LOW),
        (20, CapacityBand.MODERATE),
        (29, CapacityBand.MODERATE),
        (30, CapacityBand.HIGH),
        (42, CapacityBand.HIGH),
        (43, CapacityBand.CRITICAL),
        (50, CapacityBand.CRITICAL),
    ],
)
def test_band_thresholds_are_upper_exclusive(count, expected):
    assert classify_band(_record(count)) is expected


def test_missing_record_has_no_band():
    assert classify_band(None) is None
    assert capacity_reading(None) is None


def test_over_capacity_is_critical_and_fill_is_clamped():
    record = _record(65)

    reading = capacity_reading(record)

    assert reading is not None
    assert reading.band is CapacityBand.CRITICAL
    assert reading.fill_ratio == 1.0
    assert reading.record is record


def test_fill_ratio_matches_ratio_inside_bounds():
    assert fill_ratio(_record(10)) == pytest.approx(0.2)


def test_zero_capacity_is_rejected():
    with pytest.raises(ValueError):
        classify_band(_record(1, capacity=0))


def test_tone_follows_declared_pattern_order():
    # "Club" is declared before "Open", whichever comes first in the name.
    assert classify_event_tone("Club Open Gym") == "club"
    assert classify_event_tone("Open Club Night") == "club"
    assert classify_event_tone("Open Basketball") == "open"


def test_tone_matches_substrings_case_sensitively():
    assert classify_event_tone("Varsity Field Hockey") == "varsity"
    assert classify_event_tone("Sunrise Yoga") == "fitness"
    assert classify_event_tone("open basketball") == DEFAULT_EVENT_TONE
    assert classify_event_tone("Staff Meeting") == DEFAULT_EVENT_TONE
