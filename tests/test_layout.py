from __future__ import annotations

from datetime import date, datetime

import pytest

from backend.domain.constraints import LayoutConfig
from backend.domain.models import (
    CapacityBand,
    CapacityRecord,
    Event,
    LabelMode,
    TimeWindow,
    ViewportMeasurement,
)
from backend.services.columns_service import select_active_columns
from backend.services.layout_service import build_render_model
from backend.services.now_indicator_service import compute_now_marker


CONFIG = LayoutConfig()
DAY = date(2025, 2, 6)


class CharWidthMeasurer:
    def name_width(self, text: str) -> float:
        return 7.0 * len(text)

    def detail_width(self, text: str) -> float:
        return 6.0 * len(text)


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 2, 6, hour, minute)


def _sample_events() -> list[Event]:
    return [
        Event(_at(5, 30), _at(10, 0), "Open Basketball", "BB Court #1"),
        Event(_at(5, 30), _at(17, 0), "Open Basketball", "BB Court #3"),
        Event(_at(5, 30), datetime(2025, 2, 7, 0, 0), "Open Basketball", "BB Court #2"),
        Event(_at(7, 0), _at(8, 0), "Group Fitness", "Studio A - wood floor"),
        Event(_at(7, 0), _at(8, 0), "Group Fitness", "Studio C - Revolutionz"),
        Event(_at(8, 0), _at(9, 0), "Group Fitness", "Studio A - wood floor"),
        Event(_at(8, 0), _at(9, 0), "Group Fitness", "Studio C - Revolutionz"),
        Event(_at(9, 15), _at(10, 15), "Group Fitness", "Studio C - Revolutionz"),
        Event(_at(10, 0), _at(11, 0), "Varsity Field Hockey", "BB Court #1"),
        Event(_at(11, 0), _at(18, 0), "Open Basketball", "BB Court #1"),
        Event(_at(12, 0), _at(13, 0), "Pickup Squash", "Squash Court 2"),
    ]


def _capacities() -> list[CapacityRecord]:
    return [
        CapacityRecord("Gymnasium", 40, 50, _at(12, 0)),
        CapacityRecord("Studio A", 5, 30, _at(12, 0)),
    ]


def _build(width: float = 1280, height: float = 1080, now: datetime | None = None, events=None):
    return build_render_model(
        _sample_events() if events is None else events,
        _capacities(),
        ViewportMeasurement(width_px=width, height_px=height),
        now or _at(12, 0),
        config=CONFIG,
        reference_day=DAY,
        measurer=CharWidthMeasurer(),
    )


# --- Responsive column selection ---

def test_narrow_viewport_keeps_courts_in_order():
    columns = select_active_columns(500, CONFIG)

    assert [column.column_id for column in columns] == ["Court #1", "Court #2", "Court #3"]


@pytest.mark.parametrize("width", [0, 640, 800, 1920])
def test_unmeasured_or_wide_viewport_keeps_all_columns(width):
    assert len(select_active_columns(width, CONFIG)) == 6


# --- Render model ---

def test_render_model_window_and_columns():
    model = _build()

    assert model.window == TimeWindow(_at(6, 0), datetime(2025, 2, 7, 0, 0))
    assert [column.column.column_id for column in model.columns] == [
        "Court #1",
        "Court #2",
        "Court #3",
        "Studio A",
        "Studio B",
        "Studio C",
    ]
    assert model.column_width_px == pytest.approx(200)


def test_render_model_geometry_and_labels():
    model = _build()
    court_1 = model.columns[0]

    assert [block.event.name for block in court_1.blocks] == [
        "Open Basketball",
        "Varsity Field Hockey",
        "Open Basketball",
    ]
    in_progress = court_1.blocks[0]
    assert in_progress.geometry.top_px == 0
    assert in_progress.geometry.height_px == pytest.approx(240)
    assert in_progress.geometry.continues_from_earlier is True
    assert in_progress.tone == "open"

    varsity = court_1.blocks[1]
    assert varsity.geometry.top_px == pytest.approx(243)
    assert varsity.geometry.height_px == pytest.approx(55)
    assert varsity.label_mode is LabelMode.TWO_LINE
    assert varsity.label_lines == ("Varsity Field Hockey", "10:00 AM – 11:00 AM")
    assert varsity.tone == "varsity"


def test_short_blocks_get_compact_labels():
    events = [
        Event(_at(9, 0), _at(9, 30), "Yoga", "Studio A - wood floor"),
        Event(_at(17, 0), _at(18, 0), "Varsity Field Hockey", "BB Court #1"),
    ]

    # (1316 - 80) / 6 - 18 = 188px of label width per column.
    model = _build(width=1316, height=300, events=events)
    by_name = {
        block.event.name: block
        for column in model.columns
        for block in column.blocks
    }

    # 08:00-18:00 over 300px: half an hour is 15px, an hour 30px; both are short.
    # "Varsity Field Hockey" (140px) plus " 5:00 PM" (48px) fills the column exactly.
    assert by_name["Yoga"].label_mode is LabelMode.NAME_WITH_RANGE
    assert by_name["Varsity Field Hockey"].label_mode is LabelMode.NAME_WITH_START


def test_unmapped_rooms_produce_no_blocks():
    model = _build()

    names = [block.event.raw_room_id for column in model.columns for block in column.blocks]
    assert "Squash Court 2" not in names
    assert len(names) == 10


def test_capacity_bands_attach_to_columns():
    model = _build()
    readings = {column.column.column_id: column.capacity for column in model.columns}

    assert readings["Court #1"].band is CapacityBand.HIGH
    assert readings["Court #3"].band is CapacityBand.HIGH
    assert readings["Studio A"].band is CapacityBand.LOW
    assert readings["Studio B"] is None


def test_narrow_viewport_drops_studio_events_but_keeps_window():
    wide = _build(width=1280)
    narrow = _build(width=500)

    assert len(narrow.columns) == 3
    assert all(block.geometry.column_id.startswith("Court") for column in narrow.columns for block in column.blocks)
    assert narrow.window == wide.window
    assert narrow.column_width_px == pytest.approx(140)


def test_unmeasured_viewport_renders_all_columns():
    model = _build(width=0, height=0)

    assert len(model.columns) == 6
    assert all(
        block.geometry.top_px == 0 and block.geometry.height_px == 0
        for column in model.columns
        for block in column.blocks
    )


def test_render_model_is_idempotent():
    assert _build() == _build()


def test_empty_schedule_uses_default_window():
    model = _build(events=[])

    assert model.window == TimeWindow(_at(5, 0), datetime(2025, 2, 7, 0, 0))
    assert all(column.blocks == [] for column in model.columns)


def test_time_axis_has_hourly_ticks():
    model = _build()

    assert len(model.time_axis) == 19
    assert model.time_axis[0].label == "6:00 AM"
    assert model.time_axis[0].top_px == 0
    assert model.time_axis[-1].label == "12:00 AM"
    assert model.time_axis[-1].top_px == pytest.approx(1080)


def test_explicit_window_is_used_as_given():
    window = TimeWindow(_at(8, 0), _at(18, 0))

    model = build_render_model(
        _sample_events(),
        [],
        ViewportMeasurement(1280, 600),
        _at(12, 0),
        config=CONFIG,
        window=window,
        measurer=CharWidthMeasurer(),
    )

    assert model.window == window
    assert model.now_marker.top_px == pytest.approx(240)


# --- Now marker ---

def test_now_marker_inside_window():
    window = TimeWindow(_at(6, 0), datetime(2025, 2, 7, 0, 0))

    marker = compute_now_marker(_at(12, 0), window, 1080, CONFIG)

    assert marker.visible is True
    assert marker.top_px == pytest.approx(360)
    assert marker.badge_diameter_px == 10
    assert marker.badge_left_px == pytest.approx(75)


def test_now_marker_boundaries_are_inclusive():
    window = TimeWindow(_at(8, 0), _at(18, 0))

    assert compute_now_marker(_at(8, 0), window, 600, CONFIG).visible is True
    end_marker = compute_now_marker(_at(18, 0), window, 600, CONFIG)
    assert end_marker.visible is True
    assert end_marker.top_px == pytest.approx(600)


def test_now_marker_hidden_outside_window():
    window = TimeWindow(_at(8, 0), _at(18, 0))

    before = compute_now_marker(_at(7, 59), window, 600, CONFIG)
    after = compute_now_marker(_at(18, 1), window, 600, CONFIG)

    assert before.visible is False
    assert after.visible is False
    assert after.top_px == 0
