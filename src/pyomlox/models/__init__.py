"""Data models for OMLOX Hub API resources."""

from pyomlox.models._base import OmloxBaseModel, OmloxEnum
from pyomlox.models.fence import (
    Collision,
    CollisionEvent,
    CollisionType,
    Fence,
    FenceEvent,
    FenceEventType,
)
from pyomlox.models.geometry import Point, Polygon
from pyomlox.models.trackable import (
    Location,
    LocationProvider,
    OmloxTimestamp,
    ProviderType,
    Trackable,
    TrackableMotion,
    TrackableType,
)
from pyomlox.models.zone import Zone, ZoneType

__all__ = [
    "Collision",
    "CollisionEvent",
    "CollisionType",
    "Fence",
    "FenceEvent",
    "FenceEventType",
    "Location",
    "LocationProvider",
    "OmloxBaseModel",
    "OmloxEnum",
    "OmloxTimestamp",
    "Point",
    "Polygon",
    "ProviderType",
    "Trackable",
    "TrackableMotion",
    "TrackableType",
    "Zone",
    "ZoneType",
]
