"""Responsive selection of the active column set."""

from __future__ import annotations

from collections.abc import Sequence

from backend.domain.aliases import CANONICAL_COLUMNS
from backend.domain.constraints import LayoutConfig
from backend.domain.models import CanonicalColumn


def select_active_columns(
    viewport_width: float,
    config: LayoutConfig,
    columns: Sequence[CanonicalColumn] = CANONICAL_COLUMNS,
) -> tuple[CanonicalColumn, ...]:
    # Width 0 means "not measured yet"; render the full grid until it is.
    if 0 < viewport_width < config.responsive_breakpoint_px:
        return tuple(columns[: config.narrow_column_count])
    return tuple(columns)
