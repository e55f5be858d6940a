from __future__ import annotations

from datetime import date, datetime

from backend.domain.constraints import LayoutConfig
from backend.domain.models import Event
from backend.services.window_service import ceil_to_hour, compute_time_window, floor_to_hour


DAY = date(2025, 2, 6)
CONFIG = LayoutConfig()


def _at(hour: int, minute: int = 0, day: date = DAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


def _event(start: datetime, end: datetime, name: str = "Yoga", room: str = "Studio A - wood floor") -> Event:
    return Event(start=start, end=end, name=name, raw_room_id=room)


def test_sentinel_is_ignored_for_window_start():
    events = [
        _event(_at(9, 15), _at(10, 15), "Yoga"),
        _event(_at(5, 30), _at(18, 0), "Open Basketball", "BB Court #1"),
    ]

    window = compute_time_window(events, DAY, CONFIG)

    assert window.start == _at(8, 0)
    assert window.end == _at(18, 0)


def test_empty_events_use_default_day_window():
    window = compute_time_window([], DAY, CONFIG)

    assert window.start == _at(5, 0)
    assert window.end == datetime(2025, 2, 7, 0, 0)


def test_sentinel_only_uses_floored_start_without_buffer():
    events = [_event(_at(5, 30), _at(17, 0), "Open Basketball", "BB Court #2")]

    window = compute_time_window(events, DAY, CONFIG)

    assert window.start == _at(5, 0)
    assert window.end == _at(17, 0)


def test_buffer_can_cross_into_previous_hour():
    on_half_hour = compute_time_window([_event(_at(9, 30), _at(10, 0))], DAY, CONFIG)
    just_before = compute_time_window([_event(_at(9, 29), _at(10, 0))], DAY, CONFIG)

    assert on_half_hour.start == _at(9, 0)
    assert just_before.start == _at(8, 0)


def test_end_rounds_up_unless_on_the_hour():
    exact = compute_time_window([_event(_at(9, 0), _at(17, 0))], DAY, CONFIG)
    past = compute_time_window([_event(_at(9, 0), _at(17, 1))], DAY, CONFIG)

    assert exact.end == _at(17, 0)
    assert past.end == _at(18, 0)


def test_end_uses_all_events_including_sentinel():
    events = [
        _event(_at(7, 0), _at(8, 0), "Group Fitness"),
        _event(_at(5, 30), datetime(2025, 2, 7, 0, 0), "Open Basketball", "BB Court #2"),
    ]

    window = compute_time_window(events, DAY, CONFIG)

    assert window.start == _at(6, 0)
    assert window.end == datetime(2025, 2, 7, 0, 0)


def test_window_end_is_after_start_for_real_events():
    cases = [
        [_event(_at(23, 59), datetime(2025, 2, 7, 0, 0))],
        [_event(_at(12, 0), _at(12, 1), "Open Basketball")],
        [_event(_at(0, 0), _at(0, 15), "Open Basketball")],
    ]
    for events in cases:
        window = compute_time_window(events, DAY, CONFIG)
        assert window.end > window.start


def test_custom_sentinel_name_is_respected():
    config = LayoutConfig(sentinel_event_name="Free Swim")
    events = [
        _event(_at(6, 0), _at(20, 0), "Free Swim"),
        _event(_at(11, 0), _at(12, 0), "Open Basketball"),
    ]

    window = compute_time_window(events, DAY, config)

    assert window.start == _at(10, 0)


def test_hour_rounding_helpers():
    assert floor_to_hour(datetime(2025, 2, 6, 9, 59, 59)) == _at(9, 0)
    assert ceil_to_hour(_at(9, 0)) == _at(9, 0)
    assert ceil_to_hour(datetime(2025, 2, 6, 23, 0, 1)) == datetime(2025, 2, 7, 0, 0)
