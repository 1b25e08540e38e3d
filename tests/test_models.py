"""Tests for Pydantic model parsing with OmloxBaseModel + OmloxEnum."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from pyomlox.models.fence import CollisionEvent, CollisionType, Fence, FenceEvent, FenceEventType
from pyomlox.models.geometry import Point, Polygon
from pyomlox.models.trackable import Location, ProviderType, Trackable, TrackableMotion, TrackableType
from pyomlox.models.zone import Zone

# ------------------------------------------------------------------
# OmloxEnum
# ------------------------------------------------------------------


class TestOmloxEnum:
    def test_unknown_value_falls_back(self) -> None:
        assert ProviderType("lorawan") == ProviderType.UNKNOWN

    def test_case_insensitive_match(self) -> None:
        assert ProviderType("UWB") == ProviderType.UWB
        assert TrackableType("Omlox") == TrackableType.OMLOX

    def test_collision_type_values(self) -> None:
        assert CollisionType("collision_start") == CollisionType.START
        assert CollisionType("bump") == CollisionType.UNKNOWN


# ------------------------------------------------------------------
# Fence
# ------------------------------------------------------------------


class TestFence:
    def test_point_fence_with_radius(self) -> None:
        fence = Fence.model_validate(
            {
                "id": "f-1",
                "name": "Loading dock",
                "region": {"type": "Point", "coordinates": [8.40, 49.01]},
                "radius": 5.5,
                "crs": "local",
                "zone_id": "z-1",
                "properties": {"vendor": {"color": "red"}},
            }
        )
        assert isinstance(fence.region, Point)
        assert fence.region.as_tuple() == (8.40, 49.01)
        assert fence.radius == 5.5
        assert fence.display_name == "Loading dock"
        assert fence.properties == {"vendor": {"color": "red"}}

    def test_polygon_fence(self) -> None:
        ring = [[0.0, 0.0], [0.0, 1.0], [1.0, 1.0], [0.0, 0.0]]
        fence = Fence.model_validate({"id": "f-2", "region": {"type": "Polygon", "coordinates": [ring]}})
        assert isinstance(fence.region, Polygon)
        assert fence.region.exterior == ring
        assert fence.display_name == "f-2"

    def test_unknown_keys_ignored_and_raw_preserved(self) -> None:
        payload = {"id": "f-3", "future_field": 42, "name": None}
        fence = Fence.model_validate(payload)
        assert fence.name is None
        assert fence.raw == payload

    def test_frozen(self) -> None:
        fence = Fence(id="f-4")
        with pytest.raises(ValidationError):
            fence.name = "renamed"  # type: ignore[misc]

    def test_to_payload_omits_empty_id_and_raw(self) -> None:
        fence = Fence(region=Point(coordinates=[1.0, 2.0]), radius=3.0)
        payload = fence.to_payload()
        assert "id" not in payload
        assert "raw" not in payload
        assert payload["region"] == {"type": "Point", "coordinates": [1.0, 2.0]}
        assert payload["radius"] == 3.0


# ------------------------------------------------------------------
# Trackable / Location
# ------------------------------------------------------------------


class TestTrackable:
    def test_defaults(self) -> None:
        trackable = Trackable.model_validate({"id": "t-1"})
        assert trackable.type == TrackableType.VIRTUAL
        assert trackable.location_providers == []
        assert trackable.display_name == "t-1"

    def test_full_payload(self) -> None:
        trackable = Trackable.model_validate(
            {
                "id": "t-2",
                "type": "omlox",
                "name": "Forklift 7",
                "location_providers": ["AA:BB"],
                "fence_timeout": -1,
                "radius": 1.5,
            }
        )
        assert trackable.type == TrackableType.OMLOX
        assert trackable.display_name == "Forklift 7"
        assert trackable.fence_timeout == -1


class TestLocation:
    def test_location_with_coordinates(self) -> None:
        location = Location.model_validate(
            {
                "position": {"type": "Point", "coordinates": [8.4, 49.0, 1.2]},
                "source": "zone-1",
                "provider_type": "uwb",
                "provider_id": "AA:BB",
                "timestamp_generated": "2024-03-01T10:00:00.250Z",
                "accuracy": 0.3,
            }
        )
        assert location.coordinates == (8.4, 49.0, 1.2)
        assert location.has_coordinates
        assert location.provider_type == ProviderType.UWB
        assert location.timestamp_generated == datetime(2024, 3, 1, 10, 0, 0, 250000, tzinfo=UTC)

    def test_malformed_coordinates_parse_but_are_unusable(self) -> None:
        location = Location.model_validate({"position": {"type": "Point", "coordinates": ["x", 49.0]}})
        assert location.position is not None
        assert location.coordinates is None
        assert not location.has_coordinates

    def test_missing_position(self) -> None:
        location = Location.model_validate({"provider_id": "AA:BB"})
        assert location.coordinates is None

    def test_epoch_millis_timestamp(self) -> None:
        location = Location.model_validate({"timestamp_generated": 1_709_287_200_000})
        assert location.timestamp_generated == datetime(2024, 3, 1, 10, 0, tzinfo=UTC)

    def test_out_of_range_timestamp_is_dropped(self) -> None:
        location = Location.model_validate({"timestamp_generated": 1e300, "provider_id": "AA:BB"})
        assert location.timestamp_generated is None
        assert location.provider_id == "AA:BB"

    def test_motion_wraps_location(self) -> None:
        motion = TrackableMotion.model_validate(
            {"id": "t-1", "location": {"position": {"type": "Point", "coordinates": [1, 2]}}}
        )
        assert motion.location is not None
        assert motion.location.coordinates == (1.0, 2.0)


# ------------------------------------------------------------------
# Events / zones
# ------------------------------------------------------------------


class TestEvents:
    def test_fence_event(self) -> None:
        event = FenceEvent.model_validate(
            {
                "fence_id": "f-1",
                "trackable_id": "t-1",
                "event_type": "region_entry",
                "timestamp": "2024-03-01T10:00:00Z",
            }
        )
        assert event.event_type == FenceEventType.UNKNOWN
        assert event.timestamp == datetime(2024, 3, 1, 10, 0, tzinfo=UTC)

    def test_collision_event(self) -> None:
        event = CollisionEvent.model_validate(
            {
                "collision_type": "colliding",
                "collisions": [{"id": "t-1", "position": {"type": "Point", "coordinates": [0, 0]}}],
            }
        )
        assert event.collision_type == CollisionType.COLLIDING
        assert event.collisions[0].object_type == "trackable"


class TestZone:
    def test_zone_parses(self) -> None:
        zone = Zone.model_validate({"id": "z-1", "type": "uwb", "name": "Hall A", "floor": 1})
        assert zone.id == "z-1"
        assert zone.name == "Hall A"
