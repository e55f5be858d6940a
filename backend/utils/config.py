"""Environment-driven runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


def _env_optional(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str

    booking_endpoint_url: str
    booking_building_id: int
    booking_page_size: int
    capacity_endpoint_url: str
    capacity_account_api_key: Optional[str]
    upstream_timeout_seconds: float

    now_tick_seconds: float

    block_inset_px: int
    short_block_threshold_px: int
    responsive_breakpoint_px: int
    time_axis_width_px: int
    block_padding_px: int
    block_border_px: int
    now_badge_diameter_px: int
    empty_window_start_hour: int
    sentinel_event_name: str
    sentinel_buffer_minutes: int

    label_font_path: Optional[str]
    detail_font_path: Optional[str]
    label_font_size: int


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        app_name=_env_str("APP_NAME", "Recreation Schedule Board"),
        app_version=_env_str("APP_VERSION", "1.0.0"),
        log_level=_env_str("LOG_LEVEL", "INFO"),
        booking_endpoint_url=_env_str(
            "BOOKING_ENDPOINT_URL",
            "https://nuevents.neu.edu/ServerApi.aspx/CustomBrowseEvents",
        ),
        booking_building_id=_env_int("BOOKING_BUILDING_ID", 175),
        booking_page_size=_env_int("BOOKING_PAGE_SIZE", 50),
        capacity_endpoint_url=_env_str(
            "CAPACITY_ENDPOINT_URL",
            "https://goboardapi.azurewebsites.net/api/FacilityCount/GetCountsByAccount",
        ),
        capacity_account_api_key=_env_optional("CAPACITY_ACCOUNT_API_KEY"),
        upstream_timeout_seconds=_env_float("UPSTREAM_TIMEOUT_SECONDS", 10.0),
        now_tick_seconds=_env_float("NOW_TICK_SECONDS", 60.0),
        block_inset_px=_env_int("BLOCK_INSET_PX", 3),
        short_block_threshold_px=_env_int("SHORT_BLOCK_THRESHOLD_PX", 36),
        responsive_breakpoint_px=_env_int("RESPONSIVE_BREAKPOINT_PX", 640),
        time_axis_width_px=_env_int("TIME_AXIS_WIDTH_PX", 80),
        block_padding_px=_env_int("BLOCK_PADDING_PX", 8),
        block_border_px=_env_int("BLOCK_BORDER_PX", 1),
        now_badge_diameter_px=_env_int("NOW_BADGE_DIAMETER_PX", 10),
        empty_window_start_hour=_env_int("EMPTY_WINDOW_START_HOUR", 5),
        sentinel_event_name=_env_str("SENTINEL_EVENT_NAME", "Open Basketball"),
        sentinel_buffer_minutes=_env_int("SENTINEL_BUFFER_MINUTES", 30),
        label_font_path=_env_optional("LABEL_FONT_PATH"),
        detail_font_path=_env_optional("DETAIL_FONT_PATH"),
        label_font_size=_env_int("LABEL_FONT_SIZE", 12),
    )
