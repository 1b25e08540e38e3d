"""Base model for OMLOX Hub API resources.

Every resource model inherits from :class:`OmloxBaseModel` which
provides:

* frozen instances with unknown keys ignored, so newer hub versions
  do not break parsing;
* a ``model_validator(mode="before")`` that drops ``None`` values so
  the field default is used;
* a ``raw`` dict that captures the original payload, since the OMLOX
  schema requires clients to preserve vendor ``properties``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OmloxBaseModel(BaseModel):
    """Base for OMLOX resource models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        """Drop ``null`` values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Keep an explicit raw= from keyword construction.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned

    def to_payload(self) -> dict[str, Any]:
        """Serialize for a create/update request body.

        An empty ``id`` is omitted so the hub generates one.
        """
        payload = self.model_dump(mode="json", exclude_none=True, exclude={"raw"})
        if payload.get("id") == "":
            payload.pop("id")
        return payload


class OmloxEnum(StrEnum):
    """Base for OMLOX string enums.

    Every subclass **must** define ``UNKNOWN = "unknown"``.
    Values the hub sends that have no mapped member resolve to
    ``UNKNOWN`` instead of raising ``ValueError``.
    """

    @classmethod
    def _missing_(cls, value: object) -> OmloxEnum:
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        if hasattr(cls, "UNKNOWN"):
            unknown: OmloxEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))
