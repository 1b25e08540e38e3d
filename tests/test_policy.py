from __future__ import annotations

from typing import Any

from pyomlox.models.fence import Fence
from pyomlox.models.trackable import Location
from pyomlox.monitor.policy import alarm_active, armed_matches, fence_ids, select_latest_location


def _loc(provider_id: str, ts: Any = None) -> Location:
    payload: dict[str, Any] = {
        "position": {"type": "Point", "coordinates": [1.0, 2.0]},
        "provider_id": provider_id,
    }
    if ts is not None:
        payload["timestamp_generated"] = ts
    return Location.model_validate(payload)


# ------------------------------------------------------------------
# select_latest_location
# ------------------------------------------------------------------


def test_select_latest_location_empty() -> None:
    assert select_latest_location([]) is None
    assert select_latest_location(None) is None


def test_select_latest_location_newest_timestamp_wins() -> None:
    older = _loc("uwb", "2024-03-01T10:00:00Z")
    newer = _loc("gps", "2024-03-01T10:00:05Z")
    assert select_latest_location([older, newer]) is newer
    assert select_latest_location([newer, older]) is newer


def test_select_latest_location_tie_keeps_return_order() -> None:
    first = _loc("uwb", "2024-03-01T10:00:00Z")
    second = _loc("gps", "2024-03-01T10:00:00Z")
    assert select_latest_location([first, second]) is first


def test_select_latest_location_without_timestamps_uses_first() -> None:
    first = _loc("uwb")
    second = _loc("gps")
    assert select_latest_location([first, second]) is first


def test_select_latest_location_prefers_stamped_over_unstamped() -> None:
    unstamped = _loc("uwb")
    stamped = _loc("gps", "2024-03-01T10:00:00Z")
    assert select_latest_location([unstamped, stamped]) is stamped


# ------------------------------------------------------------------
# fence matching
# ------------------------------------------------------------------


def test_fence_ids_accepts_models_dicts_and_strings() -> None:
    containing = [Fence(id="F1"), {"id": "F2"}, "F3", {"name": "anonymous"}]
    assert fence_ids(containing) == frozenset({"F1", "F2", "F3"})
    assert fence_ids(None) == frozenset()


def test_armed_matches_intersects_with_armed_set() -> None:
    containing = [Fence(id="F1"), Fence(id="F2")]
    assert armed_matches(containing, {"F1"}) == frozenset({"F1"})
    assert armed_matches(containing, set()) == frozenset()
    assert armed_matches([], {"F1"}) == frozenset()


def test_alarm_active_is_or_of_flags() -> None:
    assert alarm_active({}) is False
    assert alarm_active({"T1": False, "T2": False}) is False
    assert alarm_active({"T1": False, "T2": True}) is True
