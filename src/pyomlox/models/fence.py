"""Fence, fence event and collision models."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import Field

from pyomlox.models._base import OmloxBaseModel, OmloxEnum
from pyomlox.models.geometry import Point, Polygon
from pyomlox.models.trackable import OmloxTimestamp

FenceRegion = Annotated[Point | Polygon, Field(discriminator="type")]


class FenceEventType(OmloxEnum):
    ENTER = "enter"
    EXIT = "exit"
    UNKNOWN = "unknown"


class CollisionType(OmloxEnum):
    START = "collision_start"
    COLLIDING = "colliding"
    END = "collision_end"
    UNKNOWN = "unknown"


class Fence(OmloxBaseModel):
    """A server-defined geofence: a point with radius or a polygon.

    ``exit_tolerance`` and ``tolerance_timeout`` describe the hub's own
    exit debounce; containment answers from the hub already include it.
    """

    id: str = ""
    region: FenceRegion | None = None
    radius: float | None = None
    extrusion: float | None = None
    floor: float | None = None
    foreign_id: str | None = None
    name: str | None = None
    timeout: float | None = None
    exit_tolerance: float | None = None
    tolerance_timeout: float | None = None
    exit_delay: float | None = None
    crs: str | None = None
    zone_id: str | None = None
    elevation_ref: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.name or self.id


class FenceEvent(OmloxBaseModel):
    id: str | None = None
    fence_id: str = ""
    trackable_id: str = ""
    event_type: FenceEventType = FenceEventType.UNKNOWN
    timestamp: OmloxTimestamp = None
    location: dict[str, float] | None = None
    properties: dict[str, Any] = Field(default_factory=dict)


class Collision(OmloxBaseModel):
    id: str = ""
    object_type: Literal["trackable"] = "trackable"
    position: Point | None = None
    geometry: Polygon | None = None
    floor: float | None = None


class CollisionEvent(OmloxBaseModel):
    id: str = ""
    collision_type: CollisionType = CollisionType.UNKNOWN
    start_time: OmloxTimestamp = None
    end_time: OmloxTimestamp = None
    collision_time: OmloxTimestamp = None
    collisions: list[Collision] = Field(default_factory=list)
    properties: dict[str, Any] = Field(default_factory=dict)
