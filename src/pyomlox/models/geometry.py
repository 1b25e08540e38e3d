"""GeoJSON geometry models used by fences, zones and locations."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from pyomlox.ingestion.normalize import coordinate_tuple
from pyomlox.models._base import OmloxBaseModel


class Point(OmloxBaseModel):
    """GeoJSON Point: ``[longitude, latitude]`` or ``[longitude, latitude, altitude]``."""

    type: Literal["Point"] = "Point"
    coordinates: list[Any] = Field(default_factory=list)

    def as_tuple(self) -> tuple[float, ...] | None:
        """Return the coordinates as a tuple, or ``None`` when malformed."""
        return coordinate_tuple(self.coordinates)


class Polygon(OmloxBaseModel):
    """GeoJSON Polygon: a list of linear rings, the first being the outer ring."""

    type: Literal["Polygon"] = "Polygon"
    coordinates: list[list[list[float]]] = Field(default_factory=list)

    @property
    def exterior(self) -> list[list[float]]:
        return self.coordinates[0] if self.coordinates else []
