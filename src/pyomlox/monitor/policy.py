"""Pure decision helpers for the intrusion monitor.

This module intentionally performs *no* I/O. It picks the authoritative
location from a batch, extracts fence ids from containment answers and
folds per-trackable state into the aggregate alarm.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pyomlox.ingestion.normalize import extract_id
from pyomlox.models.trackable import Location


def select_latest_location(locations: Iterable[Location] | None) -> Location | None:
    """Pick the authoritative location from a batch.

    The newest ``timestamp_generated`` wins; ties and records without a
    timestamp fall back to return order (earliest first). Returns ``None``
    for an empty batch.
    """
    items = list(locations or [])
    if not items:
        return None
    stamped = [
        (location.timestamp_generated, -index, location)
        for index, location in enumerate(items)
        if location.timestamp_generated is not None
    ]
    if stamped:
        return max(stamped, key=lambda entry: (entry[0], entry[1]))[2]
    return items[0]


def fence_ids(containing: Iterable[Any] | None) -> frozenset[str]:
    """Collect ids from fence records, dicts or bare id strings."""
    ids: set[str] = set()
    for item in containing or ():
        fence_id = extract_id(item)
        if fence_id is not None:
            ids.add(fence_id)
    return frozenset(ids)


def armed_matches(containing: Iterable[Any] | None, armed: Iterable[str]) -> frozenset[str]:
    """Fences that both contain the trackable and are armed."""
    return fence_ids(containing) & frozenset(armed)


def alarm_active(intrusions: Mapping[str, bool]) -> bool:
    return any(intrusions.values())
