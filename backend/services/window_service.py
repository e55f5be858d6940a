"""Visible time range derived from the day's events."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time, timedelta

from backend.domain.constraints import LayoutConfig
from backend.domain.models import Event, TimeWindow


def floor_to_hour(moment: datetime) -> datetime:
    return moment.replace(minute=0, second=0, microsecond=0)


def ceil_to_hour(moment: datetime) -> datetime:
    floored = floor_to_hour(moment)
    if floored == moment:
        return moment
    return floored + timedelta(hours=1)


def default_window(reference_day: date, config: LayoutConfig) -> TimeWindow:
    start = datetime.combine(reference_day, time(hour=config.empty_window_start_hour))
    end = datetime.combine(reference_day + timedelta(days=1), time.min)
    return TimeWindow(start=start, end=end)


def compute_time_window(
    events: Sequence[Event],
    reference_day: date,
    config: LayoutConfig,
) -> TimeWindow:
    """Derive the visible window for ``events``.

    The sentinel event (a recurring all-day block) is ignored when picking the
    start unless it is the only thing booked, so it does not stretch the view
    back to opening time. Non-sentinel starts get a buffer before flooring.
    """
    if not events:
        return default_window(reference_day, config)

    qualifying = [event for event in events if event.name != config.sentinel_event_name]
    if qualifying:
        earliest = min(event.start for event in qualifying)
        start = floor_to_hour(earliest - timedelta(minutes=config.sentinel_buffer_minutes))
    else:
        start = floor_to_hour(min(event.start for event in events))

    end = max(ceil_to_hour(max(event.end for event in events)), start)
    return TimeWindow(start=start, end=end)
