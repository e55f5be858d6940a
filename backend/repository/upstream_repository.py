"""Access layer for the upstream booking and facility-count services."""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from backend.domain.aliases import CAPACITY_LOCATION_ALLOWLIST
from backend.domain.models import CapacityRecord, Event
from backend.services.binding_service import filter_capacity_locations
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)

BOOKING_RESULT_FIELDS = ("DailyBookingResults", "MonthlyBookingResults")


class UpstreamError(Exception):
    """Base exception for upstream source failures."""


class TransportFailure(UpstreamError):
    """Raised when an upstream call does not complete with a success status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class CapacitySourceNotConfiguredError(UpstreamError):
    """Raised when no facility-count account key is configured."""


class UpstreamBooking(BaseModel):
    model_config = ConfigDict(extra="ignore")

    start: datetime = Field(alias="EventStart")
    end: datetime = Field(alias="EventEnd")
    name: str = Field(alias="EventName")
    room: str = Field(alias="Room")

    def to_event(self) -> Event:
        return Event(
            start=self.start.replace(tzinfo=None),
            end=self.end.replace(tzinfo=None),
            name=self.name,
            raw_room_id=self.room,
        )


class UpstreamCapacity(BaseModel):
    model_config = ConfigDict(extra="ignore")

    location_name: str = Field(alias="LocationName")
    count: int = Field(alias="LastCount", ge=0)
    capacity: int = Field(alias="TotalCapacity", gt=0)
    updated_at: datetime = Field(alias="LastUpdatedDateAndTime")

    def to_record(self) -> CapacityRecord:
        return CapacityRecord(
            location_name=self.location_name,
            count=self.count,
            capacity=self.capacity,
            updated_at=self.updated_at.replace(tzinfo=None),
        )


def parse_booking_records(rows: Iterable[Any]) -> list[Event]:
    events: list[Event] = []
    for row in rows:
        try:
            events.append(UpstreamBooking.model_validate(row).to_event())
        except ValidationError as exc:
            logger.warning("Skipping malformed booking row: %s", exc.errors()[:1])
    return events


def decode_booking_envelope(payload: Any) -> list[Event]:
    """Unwrap ``{"d": "<json>"}`` into events.

    Any structural problem with the envelope or the inner document yields an
    empty list; callers never see a parse error.
    """
    if not isinstance(payload, dict) or "d" not in payload:
        logger.warning("Booking payload has no 'd' envelope; treating as empty")
        return []

    inner_raw = payload["d"]
    if not isinstance(inner_raw, str):
        logger.warning("Booking envelope 'd' is not a string; treating as empty")
        return []
    try:
        inner = json.loads(inner_raw)
    except ValueError:
        logger.warning("Booking envelope 'd' is not valid JSON; treating as empty")
        return []
    if not isinstance(inner, dict):
        logger.warning("Booking document is not an object; treating as empty")
        return []

    rows: Any = None
    for field_name in BOOKING_RESULT_FIELDS:
        if inner.get(field_name) is not None:
            rows = inner[field_name]
            break
    if rows is None:
        return []
    if not isinstance(rows, list):
        logger.warning("Booking results field is not a list; treating as empty")
        return []
    return parse_booking_records(rows)


def format_booking_date(day: date) -> str:
    return f"{day.isoformat()} 00:00:00"


class BookingSourceClient:
    """Posts browse queries to the booking service."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._session = session or requests.Session()

    def build_payload(self, day: date) -> dict[str, Any]:
        return {
            "date": format_booking_date(day),
            "data": {
                "BuildingId": self._settings.booking_building_id,
                "GroupTypeId": -1,
                "GroupId": -1,
                "EventTypeId": -1,
                "RoomId": -1,
                "StatusId": -1,
                "ZeroDisplayOnWeb": 1,
                "HeaderUrl": "",
                "Title": "Scheduled Recreational Activities",
                "Format": 0,
                "Rollup": 0,
                "PageSize": self._settings.booking_page_size,
                "DropEventsInPast": True,
            },
        }

    def forward(self, body: bytes) -> requests.Response:
        """Send a pre-encoded request body unchanged."""
        return self._session.post(
            self._settings.booking_endpoint_url,
            data=body,
            headers={"Content-Type": "application/json"},
            timeout=self._settings.upstream_timeout_seconds,
        )

    def fetch_events(self, day: date) -> list[Event]:
        body = json.dumps(self.build_payload(day)).encode("utf-8")
        try:
            response = self.forward(body)
        except requests.exceptions.RequestException as exc:
            raise TransportFailure(f"Booking service unreachable: {exc}") from exc
        if not response.ok:
            raise TransportFailure(
                f"Booking service returned {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            payload = response.json()
        except ValueError:
            logger.warning("Booking service returned a non-JSON body; treating as empty")
            return []
        events = decode_booking_envelope(payload)
        logger.info("Fetched %d booking events for %s", len(events), day.isoformat())
        return events


class CapacitySourceClient:
    """Reads live facility counts for the configured account."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._session = session or requests.Session()

    def fetch_capacities(self) -> list[CapacityRecord]:
        api_key = self._settings.capacity_account_api_key
        if not api_key:
            raise CapacitySourceNotConfiguredError(
                "CAPACITY_ACCOUNT_API_KEY is not configured."
            )
        try:
            response = self._session.get(
                self._settings.capacity_endpoint_url,
                params={"AccountAPIKey": api_key},
                timeout=self._settings.upstream_timeout_seconds,
            )
        except requests.exceptions.RequestException as exc:
            raise TransportFailure(f"Capacity service unreachable: {exc}") from exc
        if not response.ok:
            raise TransportFailure(
                f"Capacity service returned {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            rows = response.json()
        except ValueError:
            logger.warning("Capacity service returned a non-JSON body; treating as empty")
            return []
        if not isinstance(rows, list):
            logger.warning("Capacity payload is not a list; treating as empty")
            return []

        records: list[CapacityRecord] = []
        for row in rows:
            try:
                records.append(UpstreamCapacity.model_validate(row).to_record())
            except ValidationError as exc:
                logger.warning("Skipping malformed capacity row: %s", exc.errors()[:1])
        return filter_capacity_locations(records, CAPACITY_LOCATION_ALLOWLIST)
