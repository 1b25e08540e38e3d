"""High-level async client for the OMLOX Hub REST API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import aiohttp

from pyomlox._api import fences as _fences_api
from pyomlox._api import providers as _providers_api
from pyomlox._api import trackables as _trackables_api
from pyomlox._api import zones as _zones_api
from pyomlox._api.oauth import fetch_access_token
from pyomlox._transport import HttpTransport, Transport
from pyomlox.config import OmloxConfig
from pyomlox.exceptions import OmloxAuthenticationError, OmloxError
from pyomlox.models.fence import Collision, CollisionEvent, Fence, FenceEvent
from pyomlox.models.trackable import Location, LocationProvider, Trackable, TrackableMotion
from pyomlox.models.zone import Zone
from pyomlox.session import AccessToken

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class OmloxClient:
    """Async client for the OMLOX Hub API.

    Usage::

        async with OmloxClient(config) as client:
            fences = await client.get_fences()
            trackables = await client.get_trackables()

    The client also satisfies the :class:`~pyomlox.monitor.LocationSource`
    and :class:`~pyomlox.monitor.ContainmentOracle` protocols, so it can be
    handed directly to :class:`~pyomlox.monitor.IntrusionMonitor`.
    """

    def __init__(
        self,
        config: OmloxConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._token: AccessToken | None = None
        self._token_lock = asyncio.Lock()

    @property
    def config(self) -> OmloxConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> OmloxClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None
        self._token = None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def ensure_token(self) -> str | None:
        """Return a valid bearer token, fetching a new one when stale.

        Returns ``None`` when no ``token_url`` is configured.
        """
        if not self._config.token_url:
            return None
        token = self._token
        if token is not None and not token.is_expired:
            return token.access_token
        # Concurrent callers share one refresh.
        async with self._token_lock:
            token = self._token
            if token is not None and not token.is_expired:
                return token.access_token
            transport = self._require_transport()
            self._token = await fetch_access_token(self._config, transport)
            return self._token.access_token

    def invalidate_token(self) -> None:
        """Force token invalidation (next call will re-authenticate)."""
        self._token = None

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None and not self._token.is_expired

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise OmloxError("Client not initialized. Use 'async with OmloxClient(...) as client:'")
        return self._transport

    async def _call(self, fn: Callable[[Transport, str | None], Awaitable[T]]) -> T:
        """Run an API call, retrying once with a fresh token on HTTP 401."""
        transport = self._require_transport()
        token = await self.ensure_token()
        try:
            return await fn(transport, token)
        except OmloxAuthenticationError:
            if not self._config.token_url:
                raise
            _logger.debug("Bearer token rejected; refreshing and retrying once")
            self.invalidate_token()
            token = await self.ensure_token()
            return await fn(transport, token)

    # ------------------------------------------------------------------
    # Trackables
    # ------------------------------------------------------------------

    async def get_trackables(self) -> list[Trackable]:
        """Fetch all trackables visible to the client."""
        return await self._call(_trackables_api.list_trackables)

    async def get_trackable(self, trackable_id: str) -> Trackable:
        return await self._call(lambda t, tok: _trackables_api.get_trackable(t, tok, trackable_id))

    async def create_trackable(
        self,
        trackable: Trackable,
        *,
        force_location_update: bool | None = None,
        subdivide: bool | None = None,
    ) -> Trackable:
        return await self._call(
            lambda t, tok: _trackables_api.create_trackable(
                t, tok, trackable, force_location_update=force_location_update, subdivide=subdivide
            )
        )

    async def update_trackable(
        self,
        trackable_id: str,
        trackable: Trackable,
        *,
        force_location_update: bool | None = None,
        subdivide: bool | None = None,
    ) -> Trackable:
        return await self._call(
            lambda t, tok: _trackables_api.update_trackable(
                t, tok, trackable_id, trackable, force_location_update=force_location_update, subdivide=subdivide
            )
        )

    async def delete_trackable(self, trackable_id: str) -> None:
        await self._call(lambda t, tok: _trackables_api.delete_trackable(t, tok, trackable_id))

    async def delete_all_trackables(self) -> None:
        await self._call(_trackables_api.delete_all_trackables)

    async def get_trackable_motion(self, trackable_id: str) -> TrackableMotion:
        return await self._call(lambda t, tok: _trackables_api.get_motion(t, tok, trackable_id))

    async def get_trackable_locations(
        self,
        trackable_id: str,
        *,
        max_age: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Location]:
        """Fetch the last known location of a trackable for each of its providers."""
        return await self._call(
            lambda t, tok: _trackables_api.list_locations(
                t, tok, trackable_id, max_age=max_age, limit=limit, offset=offset
            )
        )

    async def update_trackable_location(self, trackable_id: str, location: Location) -> None:
        await self._call(lambda t, tok: _trackables_api.post_location(t, tok, trackable_id, location))

    async def get_trackable_providers(self, trackable_id: str) -> list[LocationProvider]:
        return await self._call(lambda t, tok: _trackables_api.list_location_providers(t, tok, trackable_id))

    async def assign_location_provider(self, trackable_id: str, provider_id: str) -> None:
        await self._call(
            lambda t, tok: _trackables_api.assign_location_provider(t, tok, trackable_id, provider_id)
        )

    async def unassign_location_provider(self, trackable_id: str, provider_id: str) -> None:
        await self._call(
            lambda t, tok: _trackables_api.unassign_location_provider(t, tok, trackable_id, provider_id)
        )

    async def get_trackable_fences(self, trackable_id: str, *, spatial_query: bool | None = None) -> list[Fence]:
        """Fetch the fences the hub considers the trackable to be inside."""
        return await self._call(
            lambda t, tok: _trackables_api.list_inside_fences(t, tok, trackable_id, spatial_query=spatial_query)
        )

    # ------------------------------------------------------------------
    # Fences and collisions
    # ------------------------------------------------------------------

    async def get_fences(self) -> list[Fence]:
        """Fetch all fences visible to the client."""
        return await self._call(_fences_api.list_fences)

    async def get_fence(self, fence_id: str) -> Fence:
        return await self._call(lambda t, tok: _fences_api.get_fence(t, tok, fence_id))

    async def create_fence(
        self,
        fence: Fence,
        *,
        force_location_update: bool | None = None,
        subdivide: bool | None = None,
    ) -> Fence:
        return await self._call(
            lambda t, tok: _fences_api.create_fence(
                t, tok, fence, force_location_update=force_location_update, subdivide=subdivide
            )
        )

    async def update_fence(
        self,
        fence_id: str,
        fence: Fence,
        *,
        force_location_update: bool | None = None,
        subdivide: bool | None = None,
    ) -> Fence:
        return await self._call(
            lambda t, tok: _fences_api.update_fence(
                t, tok, fence_id, fence, force_location_update=force_location_update, subdivide=subdivide
            )
        )

    async def delete_fence(self, fence_id: str) -> None:
        await self._call(lambda t, tok: _fences_api.delete_fence(t, tok, fence_id))

    async def delete_all_fences(self) -> None:
        await self._call(_fences_api.delete_all_fences)

    async def get_fence_events(
        self,
        fence_id: str,
        *,
        max_age: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
        trackable_id: str | None = None,
    ) -> list[FenceEvent]:
        return await self._call(
            lambda t, tok: _fences_api.list_fence_events(
                t, tok, fence_id, max_age=max_age, limit=limit, offset=offset, trackable_id=trackable_id
            )
        )

    async def get_fence_trackables(self, fence_id: str, *, spatial_query: bool | None = None) -> list[Trackable]:
        return await self._call(
            lambda t, tok: _fences_api.list_inside_trackables(t, tok, fence_id, spatial_query=spatial_query)
        )

    async def get_collisions(
        self,
        *,
        max_age: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
        trackable_id: str | None = None,
    ) -> list[Collision]:
        return await self._call(
            lambda t, tok: _fences_api.list_collisions(
                t, tok, max_age=max_age, limit=limit, offset=offset, trackable_id=trackable_id
            )
        )

    async def get_collision_events(
        self,
        *,
        max_age: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
        trackable_id: str | None = None,
    ) -> list[CollisionEvent]:
        return await self._call(
            lambda t, tok: _fences_api.list_collision_events(
                t, tok, max_age=max_age, limit=limit, offset=offset, trackable_id=trackable_id
            )
        )

    # ------------------------------------------------------------------
    # Zones
    # ------------------------------------------------------------------

    async def get_zones(self) -> list[Zone]:
        return await self._call(_zones_api.list_zones)

    async def get_zone(self, zone_id: str) -> Zone:
        return await self._call(lambda t, tok: _zones_api.get_zone(t, tok, zone_id))

    async def create_zone(self, zone: Zone, *, subdivide: bool | None = None) -> Zone:
        return await self._call(lambda t, tok: _zones_api.create_zone(t, tok, zone, subdivide=subdivide))

    async def update_zone(self, zone_id: str, zone: Zone, *, subdivide: bool | None = None) -> Zone:
        return await self._call(lambda t, tok: _zones_api.update_zone(t, tok, zone_id, zone, subdivide=subdivide))

    async def delete_zone(self, zone_id: str) -> None:
        await self._call(lambda t, tok: _zones_api.delete_zone(t, tok, zone_id))

    async def delete_all_zones(self) -> None:
        await self._call(_zones_api.delete_all_zones)

    async def get_zone_trackables(self, zone_id: str, *, spatial_query: bool | None = None) -> list[Trackable]:
        return await self._call(
            lambda t, tok: _zones_api.list_inside_trackables(t, tok, zone_id, spatial_query=spatial_query)
        )

    # ------------------------------------------------------------------
    # Location providers
    # ------------------------------------------------------------------

    async def get_providers(self) -> list[LocationProvider]:
        return await self._call(_providers_api.list_providers)

    async def get_provider(self, provider_id: str) -> LocationProvider:
        return await self._call(lambda t, tok: _providers_api.get_provider(t, tok, provider_id))

    async def create_provider(self, provider: LocationProvider) -> LocationProvider:
        return await self._call(lambda t, tok: _providers_api.create_provider(t, tok, provider))

    async def update_provider(self, provider_id: str, provider: LocationProvider) -> LocationProvider:
        return await self._call(lambda t, tok: _providers_api.update_provider(t, tok, provider_id, provider))

    async def delete_provider(self, provider_id: str) -> None:
        await self._call(lambda t, tok: _providers_api.delete_provider(t, tok, provider_id))

    async def delete_all_providers(self) -> None:
        await self._call(_providers_api.delete_all_providers)

    # ------------------------------------------------------------------
    # Intrusion monitor collaborators
    # ------------------------------------------------------------------

    async def get_latest_location(self, trackable_id: str) -> list[Location]:
        """Location source for :class:`~pyomlox.monitor.IntrusionMonitor`."""
        return await self.get_trackable_locations(trackable_id)

    async def get_containing_fences(self, trackable_id: str, use_spatial_query: bool) -> list[Fence]:
        """Containment oracle for :class:`~pyomlox.monitor.IntrusionMonitor`."""
        return await self.get_trackable_fences(trackable_id, spatial_query=use_spatial_query)
