"""Shared helpers for OMLOX endpoint modules.

This module centralizes the most repeated patterns:
- building query parameters from optional keyword arguments
- validating list/object responses into models

It is internal to pyOMLOX and may change at any time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar
from urllib.parse import quote

from pyomlox.exceptions import OmloxApiError
from pyomlox.models._base import OmloxBaseModel

M = TypeVar("M", bound=OmloxBaseModel)


def resource_path(*segments: str) -> str:
    """Join path segments, percent-encoding resource ids."""
    return "".join(f"/{quote(str(segment), safe='')}" for segment in segments)


def build_query(options: Mapping[str, Any]) -> dict[str, str]:
    """Build query parameters, skipping ``None`` and lowercasing booleans."""
    params: dict[str, str] = {}
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = str(value)
    return params


def parse_list(model: type[M], decoded: Any, *, endpoint: str) -> list[M]:
    """Validate a JSON array response into a list of models."""
    if decoded is None:
        return []
    if not isinstance(decoded, list):
        raise OmloxApiError(f"{endpoint} returned {type(decoded).__name__}, expected a list", endpoint=endpoint)
    return [model.model_validate(item) for item in decoded if isinstance(item, dict)]


def parse_object(model: type[M], decoded: Any, *, endpoint: str) -> M:
    """Validate a JSON object response into a model."""
    if not isinstance(decoded, dict):
        raise OmloxApiError(f"{endpoint} returned {type(decoded).__name__}, expected an object", endpoint=endpoint)
    return model.model_validate(decoded)
