"""Label layout selection from measured text widths."""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from typing import Optional, Protocol

from PIL import ImageFont

from backend.domain.constraints import LayoutConfig
from backend.domain.models import Event, LabelMode
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)

RANGE_SEPARATOR = " – "

# Bold faces tried, by file name, when no label font path is configured.
# Pillow resolves bare names against the platform font directories.
BOLD_FONT_CANDIDATES: tuple[str, ...] = (
    "DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
    "Arial Bold.ttf",
    "arialbd.ttf",
)


class TextWidthMeasurer(Protocol):
    def name_width(self, text: str) -> float: ...

    def detail_width(self, text: str) -> float: ...


def _load_font(
    path: Optional[str],
    size: int,
    candidates: tuple[str, ...] = (),
) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    if path:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            logger.warning("Font %s could not be loaded", path)
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    if path or candidates:
        logger.warning("No usable font found; measuring with Pillow default (regular weight)")
    return ImageFont.load_default(size=size)


class PillowTextMeasurer:
    """Measures label text with Pillow fonts.

    The event name is measured with the bold label font, clock times with the
    detail font. Without a configured label font the first installed face in
    ``BOLD_FONT_CANDIDATES`` is used; if none is installed both fonts fall
    back to Pillow's bundled regular font.
    """

    def __init__(
        self,
        label_font_path: Optional[str] = None,
        detail_font_path: Optional[str] = None,
        font_size: int = 12,
    ) -> None:
        self._label_font = _load_font(label_font_path, font_size, BOLD_FONT_CANDIDATES)
        self._detail_font = _load_font(detail_font_path or label_font_path, font_size)

    def name_width(self, text: str) -> float:
        return float(self._label_font.getlength(text))

    def detail_width(self, text: str) -> float:
        return float(self._detail_font.getlength(text))


@lru_cache(maxsize=1)
def get_default_measurer() -> PillowTextMeasurer:
    settings: Settings = get_settings()
    return PillowTextMeasurer(
        label_font_path=settings.label_font_path,
        detail_font_path=settings.detail_font_path,
        font_size=settings.label_font_size,
    )


def format_clock(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def format_range(start: datetime, end: datetime) -> str:
    return f"{format_clock(start)}{RANGE_SEPARATOR}{format_clock(end)}"


def available_column_width(
    viewport_width: float,
    visible_column_count: int,
    config: LayoutConfig,
) -> float:
    if visible_column_count <= 0:
        return 0.0
    column_width = (viewport_width - config.time_axis_width_px) / visible_column_count
    chrome = 2 * config.block_padding_px + 2 * config.block_border_px
    return max(0.0, column_width - chrome)


def choose_label_mode(
    event: Event,
    height_px: float,
    available_width: float,
    measurer: TextWidthMeasurer,
    config: LayoutConfig,
) -> LabelMode:
    if height_px >= config.short_block_threshold_px:
        return LabelMode.TWO_LINE

    # Inline modes render "<name> <detail>"; the joining space is measured
    # with the detail text.
    name_width = measurer.name_width(event.name)
    range_width = measurer.detail_width(f" {format_range(event.start, event.end)}")
    if name_width + range_width <= available_width:
        return LabelMode.NAME_WITH_RANGE

    start_width = measurer.detail_width(f" {format_clock(event.start)}")
    if name_width + start_width <= available_width:
        return LabelMode.NAME_WITH_START
    return LabelMode.NAME_ONLY


def label_lines(event: Event, mode: LabelMode) -> tuple[str, ...]:
    if mode is LabelMode.TWO_LINE:
        return (event.name, format_range(event.start, event.end))
    if mode is LabelMode.NAME_WITH_RANGE:
        return (f"{event.name} {format_range(event.start, event.end)}",)
    if mode is LabelMode.NAME_WITH_START:
        return (f"{event.name} {format_clock(event.start)}",)
    return (event.name,)
