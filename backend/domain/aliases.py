"""Static lookups from upstream room and location names to canonical columns."""

from __future__ import annotations

from types import MappingProxyType

from backend.domain.models import CanonicalColumn


CANONICAL_COLUMNS: tuple[CanonicalColumn, ...] = (
    CanonicalColumn("Court #1", "Court #1"),
    CanonicalColumn("Court #2", "Court #2"),
    CanonicalColumn("Court #3", "Court #3"),
    CanonicalColumn("Studio A", "Studio A"),
    CanonicalColumn("Studio B", "Studio B"),
    CanonicalColumn("Studio C", "Studio C"),
)

COURT_COLUMN_IDS: tuple[str, ...] = ("Court #1", "Court #2", "Court #3")

ROOM_ALIASES = MappingProxyType(
    {
        "BB Court #1": "Court #1",
        "BB Court #2": "Court #2",
        "BB Court #3": "Court #3",
        "Studio A - wood floor": "Studio A",
        "Studio B - Mind & Body": "Studio B",
        "Studio C - Revolutionz": "Studio C",
    }
)

# The gym reports one reading for all three courts.
GYMNASIUM_LOCATION = "Gymnasium"

LOCATION_ALIASES = MappingProxyType(
    {
        "Studio A": "Studio A",
        "Studio B": "Studio B",
        "Studio C - Cycling": "Studio C",
    }
)

CAPACITY_LOCATION_ALLOWLIST: frozenset[str] = frozenset(
    {GYMNASIUM_LOCATION, *LOCATION_ALIASES.keys()}
)

SENTINEL_EVENT_NAME = "Open Basketball"
