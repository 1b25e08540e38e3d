"""Trackable, location and location provider models."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from pyomlox.ingestion.normalize import parse_timestamp
from pyomlox.models._base import OmloxBaseModel, OmloxEnum
from pyomlox.models.geometry import Point, Polygon

OmloxTimestamp = Annotated[datetime | None, BeforeValidator(parse_timestamp)]
"""ISO 8601 (or epoch) timestamp coerced to an aware UTC datetime."""


class TrackableType(OmloxEnum):
    OMLOX = "omlox"
    VIRTUAL = "virtual"
    UNKNOWN = "unknown"


class ProviderType(OmloxEnum):
    UWB = "uwb"
    GPS = "gps"
    WIFI = "wifi"
    RFID = "rfid"
    IBEACON = "ibeacon"
    VIRTUAL = "virtual"
    UNKNOWN = "unknown"


class Trackable(OmloxBaseModel):
    """An entity whose position is reported by one or more location providers.

    Timeout and tolerance fields are milliseconds/meters as defined by the
    hub; ``-1`` means infinite and ``None`` defers to the fence setting.
    """

    id: str = ""
    type: TrackableType = TrackableType.VIRTUAL
    name: str | None = None
    geometry: Polygon | None = None
    extrusion: float | None = None
    location_providers: list[str] = Field(default_factory=list)
    fence_timeout: float | None = None
    exit_tolerance: float | None = None
    tolerance_timeout: float | None = None
    exit_delay: float | None = None
    radius: float | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    locating_rules: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.name or self.id


class Location(OmloxBaseModel):
    """A single position report for a trackable.

    ``position`` is kept lenient: a report with missing or non-numeric
    coordinates still parses, and :attr:`coordinates` returns ``None``.
    """

    position: Point | None = None
    source: str | None = None
    provider_type: ProviderType = ProviderType.UNKNOWN
    provider_id: str | None = None
    timestamp_generated: OmloxTimestamp = None
    timestamp_sent: OmloxTimestamp = None
    crs: str | None = None
    associated: bool | None = None
    accuracy: float | None = None
    floor: float | None = None
    true_heading: float | None = None
    magnetic_heading: float | None = None
    heading_accuracy: float | None = None
    elevation_ref: str | None = None
    speed: float | None = None
    course: float | None = None
    trackables: list[str] = Field(default_factory=list)
    properties: dict[str, Any] = Field(default_factory=dict)

    @property
    def coordinates(self) -> tuple[float, ...] | None:
        """``(longitude, latitude[, altitude])`` or ``None`` when unusable."""
        if self.position is None:
            return None
        return self.position.as_tuple()

    @property
    def has_coordinates(self) -> bool:
        return self.coordinates is not None


class TrackableMotion(OmloxBaseModel):
    """Current motion of a trackable: its id plus the latest location."""

    id: str = ""
    location: Location | None = None


class LocationProvider(OmloxBaseModel):
    """A device or virtual source producing locations (e.g. a UWB tag)."""

    id: str = ""
    type: ProviderType = ProviderType.UNKNOWN
    name: str | None = None
    sensors: Any = None
    fence_timeout: float | None = None
    exit_tolerance: float | None = None
    tolerance_timeout: float | None = None
    exit_delay: float | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
