"""Live "current time" marker position."""

from __future__ import annotations

from datetime import datetime

from backend.domain.constraints import LayoutConfig
from backend.domain.models import NowMarker, TimeWindow
from backend.services.geometry_service import GeometryMapper


def compute_now_marker(
    now: datetime,
    window: TimeWindow,
    viewport_height: float,
    config: LayoutConfig,
) -> NowMarker:
    """Place the marker rule and its badge for ``now``.

    The badge is centred on the seam between the time axis and the first
    column. The marker is hidden outside the visible window.
    """
    diameter = float(config.now_badge_diameter_px)
    badge_left = config.time_axis_width_px - diameter / 2
    visible = window.contains(now)
    top = GeometryMapper(window, viewport_height, config).offset(now) if visible else 0.0
    return NowMarker(
        top_px=top,
        visible=visible,
        badge_left_px=badge_left,
        badge_diameter_px=diameter,
    )
