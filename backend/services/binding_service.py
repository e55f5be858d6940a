"""Bins raw events and capacity readings into canonical columns."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Optional

from backend.domain.aliases import (
    CANONICAL_COLUMNS,
    CAPACITY_LOCATION_ALLOWLIST,
    COURT_COLUMN_IDS,
    GYMNASIUM_LOCATION,
)
from backend.domain.models import CanonicalColumn, CapacityRecord, Event
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def bind_events(
    events: Iterable[Event],
    room_aliases: Mapping[str, str],
    columns: Sequence[CanonicalColumn] = CANONICAL_COLUMNS,
) -> dict[str, list[Event]]:
    """Group events by canonical column, preserving input order.

    Every column in ``columns`` is present in the result even when empty.
    Events whose room has no alias, or whose alias points at a column that is
    not active, are dropped.
    """
    binned: dict[str, list[Event]] = {column.column_id: [] for column in columns}
    dropped = 0
    for event in events:
        column_id = room_aliases.get(event.raw_room_id)
        if column_id is None or column_id not in binned:
            dropped += 1
            continue
        binned[column_id].append(event)
    if dropped:
        logger.debug("Dropped %d events without an active column", dropped)
    return binned


def bind_capacities(
    records: Iterable[CapacityRecord],
    location_aliases: Mapping[str, str],
    columns: Sequence[CanonicalColumn] = CANONICAL_COLUMNS,
) -> dict[str, Optional[CapacityRecord]]:
    bound: dict[str, Optional[CapacityRecord]] = {column.column_id: None for column in columns}
    for record in records:
        if record.location_name == GYMNASIUM_LOCATION:
            targets: tuple[str, ...] = COURT_COLUMN_IDS
        else:
            column_id = location_aliases.get(record.location_name)
            if column_id is None:
                logger.debug("Ignoring capacity reading for %s", record.location_name)
                continue
            targets = (column_id,)
        for column_id in targets:
            if column_id in bound:
                bound[column_id] = record
    return bound


def filter_capacity_locations(
    records: Iterable[CapacityRecord],
    allowlist: frozenset[str] = CAPACITY_LOCATION_ALLOWLIST,
) -> list[CapacityRecord]:
    return [record for record in records if record.location_name in allowlist]


def filter_events_for_date(events: Iterable[Event], day: date) -> list[Event]:
    """Keep events that start on ``day``; the feed can include neighbours."""
    return [event for event in events if event.start.date() == day]
