"""Location provider endpoints: /providers, /providers/summary, /providers/{id}."""

from __future__ import annotations

from pyomlox._api._common import parse_list, parse_object, resource_path
from pyomlox._constants import PROVIDERS, PROVIDERS_SUMMARY
from pyomlox._transport import Transport
from pyomlox.models.trackable import LocationProvider


def _path(provider_id: str) -> str:
    return PROVIDERS + resource_path(provider_id)


async def list_providers(transport: Transport, token: str | None) -> list[LocationProvider]:
    decoded = await transport.request("GET", PROVIDERS_SUMMARY, token=token)
    return parse_list(LocationProvider, decoded, endpoint=PROVIDERS_SUMMARY)


async def get_provider(transport: Transport, token: str | None, provider_id: str) -> LocationProvider:
    path = _path(provider_id)
    decoded = await transport.request("GET", path, token=token)
    return parse_object(LocationProvider, decoded, endpoint=path)


async def create_provider(transport: Transport, token: str | None, provider: LocationProvider) -> LocationProvider:
    decoded = await transport.request("POST", PROVIDERS, json_body=provider.to_payload(), token=token)
    return parse_object(LocationProvider, decoded, endpoint=PROVIDERS)


async def update_provider(
    transport: Transport, token: str | None, provider_id: str, provider: LocationProvider
) -> LocationProvider:
    path = _path(provider_id)
    decoded = await transport.request("PUT", path, json_body=provider.to_payload(), token=token)
    if decoded is None:
        return provider
    return parse_object(LocationProvider, decoded, endpoint=path)


async def delete_provider(transport: Transport, token: str | None, provider_id: str) -> None:
    await transport.request("DELETE", _path(provider_id), token=token)


async def delete_all_providers(transport: Transport, token: str | None) -> None:
    await transport.request("DELETE", PROVIDERS, token=token)
