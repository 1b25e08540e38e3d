"""Normalization helpers.

Centralizes defensive parsing of coordinates and timestamps.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1e11


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def coordinate_tuple(values: Any) -> tuple[float, ...] | None:
    """Return ``(lon, lat[, alt])`` or ``None`` when the position is unusable.

    A position needs at least two numeric components. Anything beyond the
    third component is ignored.
    """
    if not isinstance(values, (list, tuple)) or len(values) < 2:
        return None
    parsed: list[float] = []
    for item in values[:3]:
        number = safe_float(item)
        if number is None:
            return None
        parsed.append(number)
    return tuple(parsed)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO 8601 string or epoch number into an aware UTC datetime.

    Epoch numbers above 1e11 are treated as milliseconds. Naive datetimes are
    assumed to be UTC, as mandated for OMLOX timestamps.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        ts = float(value)
        if ts <= 0:
            return None
        if ts > _MS_THRESHOLD:
            ts /= 1000.0
        try:
            return datetime.fromtimestamp(ts, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def extract_id(value: Any) -> str | None:
    """Return the id of a resource given as a string, mapping or model."""
    if isinstance(value, str):
        return safe_str(value)
    if isinstance(value, dict):
        return safe_str(value.get("id"))
    return safe_str(getattr(value, "id", None))
