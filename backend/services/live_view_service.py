"""Event-driven recomputation of the render model.

Two triggers drive the view: the periodic now-tick and viewport resize
notifications. Both run on the caller's asyncio loop, replace one snapshot
field wholesale and rebuild the model from scratch. Nothing here starts a
thread.
"""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import Optional

from backend.domain.constraints import LayoutConfig
from backend.domain.models import (
    CapacityRecord,
    Event,
    RenderModel,
    TimeWindow,
    ViewportMeasurement,
)
from backend.services.layout_service import build_render_model
from backend.services.text_fit_service import TextWidthMeasurer
from backend.services.window_service import compute_time_window
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class Subscription:
    """Handle returned by ``subscribe``/``start``; cancelling is idempotent."""

    def __init__(self, on_cancel: Callable[[], None]) -> None:
        self._on_cancel: Optional[Callable[[], None]] = on_cancel

    @property
    def active(self) -> bool:
        return self._on_cancel is not None

    def cancel(self) -> None:
        on_cancel, self._on_cancel = self._on_cancel, None
        if on_cancel is not None:
            on_cancel()


class ViewportTracker:
    """Holds the latest viewport measurement and fans out resize notifications."""

    def __init__(self, initial: Optional[ViewportMeasurement] = None) -> None:
        self._current = initial or ViewportMeasurement()
        self._listeners: dict[int, Callable[[ViewportMeasurement], None]] = {}
        self._ids = itertools.count()

    @property
    def current(self) -> ViewportMeasurement:
        return self._current

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Callable[[ViewportMeasurement], None]) -> Subscription:
        listener_id = next(self._ids)
        self._listeners[listener_id] = listener
        return Subscription(lambda: self._listeners.pop(listener_id, None))

    def update(self, measurement: ViewportMeasurement) -> None:
        if measurement == self._current:
            return
        self._current = measurement
        for listener in list(self._listeners.values()):
            listener(measurement)


class NowTicker:
    """Calls ``callback(clock())`` every ``interval_seconds`` until stopped."""

    def __init__(
        self,
        callback: Callable[[datetime], None],
        interval_seconds: float = 60.0,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self._callback = callback
        self._interval = interval_seconds
        self._clock = clock
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> Subscription:
        if self.running:
            raise RuntimeError("ticker already started")
        self._task = asyncio.get_running_loop().create_task(self._run())
        return Subscription(self.stop)

    def stop(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._callback(self._clock())
            except Exception:
                logger.exception("Now tick callback failed; ticker keeps running")


class LiveScheduleView:
    """Owns the latest input snapshot and republishes the render model."""

    def __init__(
        self,
        on_render: Callable[[RenderModel], None],
        *,
        config: LayoutConfig,
        viewport_tracker: Optional[ViewportTracker] = None,
        measurer: Optional[TextWidthMeasurer] = None,
        clock: Callable[[], datetime] = datetime.now,
        tick_seconds: float = 60.0,
    ) -> None:
        self._on_render = on_render
        self._config = config
        self._viewport_tracker = viewport_tracker or ViewportTracker()
        self._measurer = measurer
        self._clock = clock
        self._tick_seconds = tick_seconds

        self._now = clock()
        self._reference_day: date = self._now.date()
        self._events: tuple[Event, ...] = ()
        self._capacities: tuple[CapacityRecord, ...] = ()
        self._window: TimeWindow = compute_time_window((), self._reference_day, config)

        self._subscriptions: list[Subscription] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def window(self) -> TimeWindow:
        return self._window

    def attach(self) -> None:
        """Start listening for resizes and ticks. Needs a running event loop."""
        if self._closed:
            raise RuntimeError("view has been closed")
        if self._subscriptions:
            return
        # Start the ticker first: it raises without a running loop, and a
        # failed attach must leave nothing subscribed.
        ticker = NowTicker(self._on_tick, self._tick_seconds, self._clock)
        tick_subscription = ticker.start()
        resize_subscription = self._viewport_tracker.subscribe(self._on_resize)
        self._subscriptions.extend((tick_subscription, resize_subscription))

    def close(self) -> None:
        self._closed = True
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions.clear()

    def set_events(self, events: Sequence[Event], reference_day: Optional[date] = None) -> None:
        self._events = tuple(events)
        if reference_day is not None:
            self._reference_day = reference_day
        self._window = compute_time_window(self._events, self._reference_day, self._config)
        self.render()

    def set_capacities(self, records: Sequence[CapacityRecord]) -> None:
        self._capacities = tuple(records)
        self.render()

    def render(self) -> Optional[RenderModel]:
        if self._closed:
            logger.debug("Skipping render for closed view")
            return None
        model = build_render_model(
            self._events,
            self._capacities,
            self._viewport_tracker.current,
            self._now,
            config=self._config,
            window=self._window,
            reference_day=self._reference_day,
            measurer=self._measurer,
        )
        self._on_render(model)
        return model

    def _on_resize(self, _measurement: ViewportMeasurement) -> None:
        self.render()

    def _on_tick(self, now: datetime) -> None:
        self._now = now
        self.render()
