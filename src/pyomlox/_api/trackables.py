"""Trackable endpoints.

Endpoints:
  - /trackables, /trackables/summary, /trackables/{id}
  - /trackables/{id}/motion
  - /trackables/{id}/locations
  - /trackables/{id}/location_providers[/{provider_id}]
  - /trackables/{id}/fences
"""

from __future__ import annotations

from pyomlox._api._common import build_query, parse_list, parse_object, resource_path
from pyomlox._constants import TRACKABLES, TRACKABLES_SUMMARY
from pyomlox._transport import Transport
from pyomlox.models.fence import Fence
from pyomlox.models.trackable import Location, LocationProvider, Trackable, TrackableMotion


def _path(trackable_id: str, *rest: str) -> str:
    return TRACKABLES + resource_path(trackable_id, *rest)


async def list_trackables(transport: Transport, token: str | None) -> list[Trackable]:
    decoded = await transport.request("GET", TRACKABLES_SUMMARY, token=token)
    return parse_list(Trackable, decoded, endpoint=TRACKABLES_SUMMARY)


async def get_trackable(transport: Transport, token: str | None, trackable_id: str) -> Trackable:
    path = _path(trackable_id)
    decoded = await transport.request("GET", path, token=token)
    return parse_object(Trackable, decoded, endpoint=path)


async def create_trackable(
    transport: Transport,
    token: str | None,
    trackable: Trackable,
    *,
    force_location_update: bool | None = None,
    subdivide: bool | None = None,
) -> Trackable:
    params = build_query({"force_location_update": force_location_update, "subdivide": subdivide})
    decoded = await transport.request("POST", TRACKABLES, params=params, json_body=trackable.to_payload(), token=token)
    return parse_object(Trackable, decoded, endpoint=TRACKABLES)


async def update_trackable(
    transport: Transport,
    token: str | None,
    trackable_id: str,
    trackable: Trackable,
    *,
    force_location_update: bool | None = None,
    subdivide: bool | None = None,
) -> Trackable:
    path = _path(trackable_id)
    params = build_query({"force_location_update": force_location_update, "subdivide": subdivide})
    decoded = await transport.request("PUT", path, params=params, json_body=trackable.to_payload(), token=token)
    if decoded is None:
        return trackable
    return parse_object(Trackable, decoded, endpoint=path)


async def delete_trackable(transport: Transport, token: str | None, trackable_id: str) -> None:
    await transport.request("DELETE", _path(trackable_id), token=token)


async def delete_all_trackables(transport: Transport, token: str | None) -> None:
    await transport.request("DELETE", TRACKABLES, token=token)


async def get_motion(transport: Transport, token: str | None, trackable_id: str) -> TrackableMotion:
    path = _path(trackable_id, "motion")
    decoded = await transport.request("GET", path, token=token)
    return parse_object(TrackableMotion, decoded, endpoint=path)


async def list_locations(
    transport: Transport,
    token: str | None,
    trackable_id: str,
    *,
    max_age: int | None = None,
    limit: int | None = None,
    offset: int | None = None,
) -> list[Location]:
    """Last known location of the trackable for each of its providers."""
    path = _path(trackable_id, "locations")
    params = build_query({"max_age": max_age, "limit": limit, "offset": offset})
    decoded = await transport.request("GET", path, params=params, token=token)
    return parse_list(Location, decoded, endpoint=path)


async def post_location(transport: Transport, token: str | None, trackable_id: str, location: Location) -> None:
    await transport.request("POST", _path(trackable_id, "locations"), json_body=location.to_payload(), token=token)


async def list_location_providers(transport: Transport, token: str | None, trackable_id: str) -> list[LocationProvider]:
    path = _path(trackable_id, "location_providers")
    decoded = await transport.request("GET", path, token=token)
    return parse_list(LocationProvider, decoded, endpoint=path)


async def assign_location_provider(transport: Transport, token: str | None, trackable_id: str, provider_id: str) -> None:
    await transport.request("PUT", _path(trackable_id, "location_providers", provider_id), json_body={}, token=token)


async def unassign_location_provider(
    transport: Transport, token: str | None, trackable_id: str, provider_id: str
) -> None:
    await transport.request("DELETE", _path(trackable_id, "location_providers", provider_id), token=token)


async def list_inside_fences(
    transport: Transport,
    token: str | None,
    trackable_id: str,
    *,
    spatial_query: bool | None = None,
) -> list[Fence]:
    """Fences the hub currently considers the trackable to be inside.

    With ``spatial_query`` the hub evaluates the latest position against
    the fence geometry instead of relying on its fence event history.
    """
    path = _path(trackable_id, "fences")
    params = build_query({"spatial_query": spatial_query})
    decoded = await transport.request("GET", path, params=params, token=token)
    return parse_list(Fence, decoded, endpoint=path)
