"""Zone endpoints: /zones, /zones/summary, /zones/{id}, /zones/{id}/trackables."""

from __future__ import annotations

from pyomlox._api._common import build_query, parse_list, parse_object, resource_path
from pyomlox._constants import ZONES, ZONES_SUMMARY
from pyomlox._transport import Transport
from pyomlox.models.trackable import Trackable
from pyomlox.models.zone import Zone


def _path(zone_id: str, *rest: str) -> str:
    return ZONES + resource_path(zone_id, *rest)


async def list_zones(transport: Transport, token: str | None) -> list[Zone]:
    decoded = await transport.request("GET", ZONES_SUMMARY, token=token)
    return parse_list(Zone, decoded, endpoint=ZONES_SUMMARY)


async def get_zone(transport: Transport, token: str | None, zone_id: str) -> Zone:
    path = _path(zone_id)
    decoded = await transport.request("GET", path, token=token)
    return parse_object(Zone, decoded, endpoint=path)


async def create_zone(transport: Transport, token: str | None, zone: Zone, *, subdivide: bool | None = None) -> Zone:
    params = build_query({"subdivide": subdivide})
    decoded = await transport.request("POST", ZONES, params=params, json_body=zone.to_payload(), token=token)
    return parse_object(Zone, decoded, endpoint=ZONES)


async def update_zone(
    transport: Transport, token: str | None, zone_id: str, zone: Zone, *, subdivide: bool | None = None
) -> Zone:
    path = _path(zone_id)
    params = build_query({"subdivide": subdivide})
    decoded = await transport.request("PUT", path, params=params, json_body=zone.to_payload(), token=token)
    if decoded is None:
        return zone
    return parse_object(Zone, decoded, endpoint=path)


async def delete_zone(transport: Transport, token: str | None, zone_id: str) -> None:
    await transport.request("DELETE", _path(zone_id), token=token)


async def delete_all_zones(transport: Transport, token: str | None) -> None:
    await transport.request("DELETE", ZONES, token=token)


async def list_inside_trackables(
    transport: Transport, token: str | None, zone_id: str, *, spatial_query: bool | None = None
) -> list[Trackable]:
    path = _path(zone_id, "trackables")
    params = build_query({"spatial_query": spatial_query})
    decoded = await transport.request("GET", path, params=params, token=token)
    return parse_list(Trackable, decoded, endpoint=path)
