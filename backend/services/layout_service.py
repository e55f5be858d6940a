"""Pure assembly of the render model from the latest input snapshot."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta
from typing import Optional

from backend.domain.aliases import LOCATION_ALIASES, ROOM_ALIASES
from backend.domain.constraints import LayoutConfig
from backend.domain.models import (
    CapacityRecord,
    ColumnRender,
    Event,
    EventBlock,
    RenderModel,
    TimeAxisTick,
    TimeWindow,
    ViewportMeasurement,
)
from backend.services.binding_service import bind_capacities, bind_events
from backend.services.capacity_service import capacity_reading, classify_event_tone
from backend.services.columns_service import select_active_columns
from backend.services.geometry_service import GeometryMapper, map_column_geometry
from backend.services.now_indicator_service import compute_now_marker
from backend.services.text_fit_service import (
    TextWidthMeasurer,
    available_column_width,
    choose_label_mode,
    format_clock,
    get_default_measurer,
    label_lines,
)
from backend.services.window_service import compute_time_window, floor_to_hour


def build_time_axis(mapper: GeometryMapper) -> list[TimeAxisTick]:
    """One tick per whole hour inside the window, window start included."""
    window: TimeWindow = mapper.window
    ticks: list[TimeAxisTick] = []
    cursor = floor_to_hour(window.start)
    if cursor < window.start:
        cursor += timedelta(hours=1)
    while cursor <= window.end:
        ticks.append(TimeAxisTick(label=format_clock(cursor), top_px=mapper.offset(cursor)))
        cursor += timedelta(hours=1)
    return ticks


def build_render_model(
    events: Sequence[Event],
    capacities: Sequence[CapacityRecord],
    viewport: ViewportMeasurement,
    now: datetime,
    *,
    config: LayoutConfig,
    window: Optional[TimeWindow] = None,
    reference_day: Optional[date] = None,
    measurer: Optional[TextWidthMeasurer] = None,
) -> RenderModel:
    """Turn one snapshot of inputs into the full grid geometry.

    The window is derived from every event supplied, before narrow viewports
    drop the studio columns, so resizing never shifts the time axis.
    Callers that already hold the window for these events may pass it in.
    ``reference_day`` only matters for an empty event list and defaults to the
    date of ``now``.
    """
    measurer = measurer or get_default_measurer()
    day = reference_day or now.date()

    if window is None:
        window = compute_time_window(events, day, config)
    mapper = GeometryMapper(window, viewport.height_px, config)

    active_columns = select_active_columns(viewport.width_px, config)
    binned_events = bind_events(events, ROOM_ALIASES, active_columns)
    bound_capacities = bind_capacities(capacities, LOCATION_ALIASES, active_columns)
    geometries = map_column_geometry(binned_events, mapper)
    label_width = available_column_width(viewport.width_px, len(active_columns), config)

    columns: list[ColumnRender] = []
    for column in active_columns:
        blocks: list[EventBlock] = []
        column_events = binned_events[column.column_id]
        for event, geometry in zip(column_events, geometries[column.column_id]):
            mode = choose_label_mode(event, geometry.height_px, label_width, measurer, config)
            blocks.append(
                EventBlock(
                    event=event,
                    geometry=geometry,
                    label_mode=mode,
                    label_lines=label_lines(event, mode),
                    tone=classify_event_tone(event.name),
                )
            )
        columns.append(
            ColumnRender(
                column=column,
                blocks=blocks,
                capacity=capacity_reading(bound_capacities[column.column_id]),
            )
        )

    column_width = 0.0
    if active_columns:
        column_width = max(0.0, (viewport.width_px - config.time_axis_width_px) / len(active_columns))

    return RenderModel(
        window=window,
        viewport=viewport,
        column_width_px=column_width,
        columns=columns,
        now_marker=compute_now_marker(now, window, viewport.height_px, config),
        time_axis=build_time_axis(mapper),
    )
