"""Fence and collision endpoints.

Endpoints:
  - /fences, /fences/summary, /fences/{id}
  - /fences/{id}/events
  - /fences/{id}/trackables
  - /collisions, /collision-events
"""

from __future__ import annotations

from pyomlox._api._common import build_query, parse_list, parse_object, resource_path
from pyomlox._constants import COLLISION_EVENTS, COLLISIONS, FENCES, FENCES_SUMMARY
from pyomlox._transport import Transport
from pyomlox.models.fence import Collision, CollisionEvent, Fence, FenceEvent
from pyomlox.models.trackable import Trackable


def _path(fence_id: str, *rest: str) -> str:
    return FENCES + resource_path(fence_id, *rest)


async def list_fences(transport: Transport, token: str | None) -> list[Fence]:
    decoded = await transport.request("GET", FENCES_SUMMARY, token=token)
    return parse_list(Fence, decoded, endpoint=FENCES_SUMMARY)


async def get_fence(transport: Transport, token: str | None, fence_id: str) -> Fence:
    path = _path(fence_id)
    decoded = await transport.request("GET", path, token=token)
    return parse_object(Fence, decoded, endpoint=path)


async def create_fence(
    transport: Transport,
    token: str | None,
    fence: Fence,
    *,
    force_location_update: bool | None = None,
    subdivide: bool | None = None,
) -> Fence:
    params = build_query({"force_location_update": force_location_update, "subdivide": subdivide})
    decoded = await transport.request("POST", FENCES, params=params, json_body=fence.to_payload(), token=token)
    return parse_object(Fence, decoded, endpoint=FENCES)


async def update_fence(
    transport: Transport,
    token: str | None,
    fence_id: str,
    fence: Fence,
    *,
    force_location_update: bool | None = None,
    subdivide: bool | None = None,
) -> Fence:
    path = _path(fence_id)
    params = build_query({"force_location_update": force_location_update, "subdivide": subdivide})
    decoded = await transport.request("PUT", path, params=params, json_body=fence.to_payload(), token=token)
    if decoded is None:
        return fence
    return parse_object(Fence, decoded, endpoint=path)


async def delete_fence(transport: Transport, token: str | None, fence_id: str) -> None:
    await transport.request("DELETE", _path(fence_id), token=token)


async def delete_all_fences(transport: Transport, token: str | None) -> None:
    await transport.request("DELETE", FENCES, token=token)


async def list_fence_events(
    transport: Transport,
    token: str | None,
    fence_id: str,
    *,
    max_age: int | None = None,
    limit: int | None = None,
    offset: int | None = None,
    trackable_id: str | None = None,
) -> list[FenceEvent]:
    path = _path(fence_id, "events")
    params = build_query({"max_age": max_age, "limit": limit, "offset": offset, "trackable_id": trackable_id})
    decoded = await transport.request("GET", path, params=params, token=token)
    return parse_list(FenceEvent, decoded, endpoint=path)


async def list_inside_trackables(
    transport: Transport,
    token: str | None,
    fence_id: str,
    *,
    spatial_query: bool | None = None,
) -> list[Trackable]:
    path = _path(fence_id, "trackables")
    params = build_query({"spatial_query": spatial_query})
    decoded = await transport.request("GET", path, params=params, token=token)
    return parse_list(Trackable, decoded, endpoint=path)


async def list_collisions(
    transport: Transport,
    token: str | None,
    *,
    max_age: int | None = None,
    limit: int | None = None,
    offset: int | None = None,
    trackable_id: str | None = None,
) -> list[Collision]:
    params = build_query({"max_age": max_age, "limit": limit, "offset": offset, "trackable_id": trackable_id})
    decoded = await transport.request("GET", COLLISIONS, params=params, token=token)
    return parse_list(Collision, decoded, endpoint=COLLISIONS)


async def list_collision_events(
    transport: Transport,
    token: str | None,
    *,
    max_age: int | None = None,
    limit: int | None = None,
    offset: int | None = None,
    trackable_id: str | None = None,
) -> list[CollisionEvent]:
    params = build_query({"max_age": max_age, "limit": limit, "offset": offset, "trackable_id": trackable_id})
    decoded = await transport.request("GET", COLLISION_EVENTS, params=params, token=token)
    return parse_list(CollisionEvent, decoded, endpoint=COLLISION_EVENTS)
