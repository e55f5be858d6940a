"""Layout constants and their validation rules."""

from __future__ import annotations

from dataclasses import dataclass

from backend.domain.aliases import SENTINEL_EVENT_NAME
from backend.utils.config import Settings


@dataclass(frozen=True)
class LayoutConfig:
    block_inset_px: int = 3
    short_block_threshold_px: int = 36
    responsive_breakpoint_px: int = 640
    narrow_column_count: int = 3
    time_axis_width_px: int = 80
    block_padding_px: int = 8
    block_border_px: int = 1
    now_badge_diameter_px: int = 10
    empty_window_start_hour: int = 5
    sentinel_event_name: str = SENTINEL_EVENT_NAME
    sentinel_buffer_minutes: int = 30


def layout_config_from_settings(settings: Settings) -> LayoutConfig:
    config = LayoutConfig(
        block_inset_px=settings.block_inset_px,
        short_block_threshold_px=settings.short_block_threshold_px,
        responsive_breakpoint_px=settings.responsive_breakpoint_px,
        time_axis_width_px=settings.time_axis_width_px,
        block_padding_px=settings.block_padding_px,
        block_border_px=settings.block_border_px,
        now_badge_diameter_px=settings.now_badge_diameter_px,
        empty_window_start_hour=settings.empty_window_start_hour,
        sentinel_event_name=settings.sentinel_event_name,
        sentinel_buffer_minutes=settings.sentinel_buffer_minutes,
    )
    validate_layout_config(config)
    return config


def validate_layout_config(config: LayoutConfig) -> None:
    if config.block_inset_px < 1:
        raise ValueError("block_inset_px must be >= 1")
    if config.short_block_threshold_px <= 0:
        raise ValueError("short_block_threshold_px must be > 0")
    if config.responsive_breakpoint_px <= 0:
        raise ValueError("responsive_breakpoint_px must be > 0")
    if config.narrow_column_count <= 0:
        raise ValueError("narrow_column_count must be > 0")
    if config.time_axis_width_px < 0:
        raise ValueError("time_axis_width_px must be >= 0")
    if config.block_padding_px < 0 or config.block_border_px < 0:
        raise ValueError("block padding and border must be >= 0")
    if config.now_badge_diameter_px <= 0:
        raise ValueError("now_badge_diameter_px must be > 0")
    if not 0 <= config.empty_window_start_hour <= 23:
        raise ValueError("empty_window_start_hour must be between 0 and 23")
    if not config.sentinel_event_name.strip():
        raise ValueError("sentinel_event_name must be non-empty")
    if config.sentinel_buffer_minutes < 0:
        raise ValueError("sentinel_buffer_minutes must be >= 0")
