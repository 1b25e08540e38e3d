"""Zone model."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pyomlox.models._base import OmloxBaseModel, OmloxEnum
from pyomlox.models.geometry import Point


class ZoneType(OmloxEnum):
    UWB = "uwb"
    WIFI = "wifi"
    RFID = "rfid"
    IBEACON = "ibeacon"
    UNKNOWN = "unknown"


class Zone(OmloxBaseModel):
    """A positioning system's spatial reference (e.g. a UWB installation)."""

    id: str = ""
    type: ZoneType = ZoneType.UNKNOWN
    foreign_id: str | None = None
    position: Point | None = None
    radius: float | None = None
    ground_control_points: list[list[float]] = Field(default_factory=list)
    incomplete_configuration: bool | None = None
    measurement_timestamp: str | None = None
    site: str | None = None
    building: str | None = None
    floor: float | None = None
    name: str | None = None
    description: str | None = None
    address: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    wgs84_height: float | None = None
