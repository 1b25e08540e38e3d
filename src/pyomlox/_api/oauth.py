"""OAuth2 client-credentials token endpoint."""

from __future__ import annotations

import logging
from typing import Any

from pyomlox._constants import DEFAULT_TOKEN_LIFETIME
from pyomlox._transport import Transport
from pyomlox.config import OmloxConfig
from pyomlox.exceptions import OmloxAuthenticationError, OmloxConfigError
from pyomlox.ingestion.normalize import safe_float, safe_str
from pyomlox.session import AccessToken

_logger = logging.getLogger(__name__)


def build_token_request(config: OmloxConfig) -> dict[str, str]:
    """Build the urlencoded form for the client-credentials grant."""
    return {
        "grant_type": "client_credentials",
        "client_id": config.client_id,
        "client_secret": config.client_secret,
    }


def parse_token_response(response: dict[str, Any], config: OmloxConfig) -> AccessToken:
    """Parse ``{access_token, expires_in, token_type}`` into an :class:`AccessToken`."""
    access_token = safe_str(response.get("access_token"))
    if access_token is None:
        raise OmloxAuthenticationError(
            "Token response did not contain an access_token",
            endpoint=config.token_url or "",
        )
    expires_in = safe_float(response.get("expires_in"))
    if expires_in is None or expires_in <= 0:
        expires_in = DEFAULT_TOKEN_LIFETIME
    return AccessToken(
        access_token=access_token,
        token_type=safe_str(response.get("token_type")) or "Bearer",
        expires_in=expires_in,
        refresh_margin=config.token_refresh_margin,
    )


async def fetch_access_token(config: OmloxConfig, transport: Transport) -> AccessToken:
    """Request a fresh access token from ``config.token_url``."""
    if not config.token_url:
        raise OmloxConfigError("token_url is not configured")
    response = await transport.post_form(config.token_url, build_token_request(config))
    token = parse_token_response(response, config)
    _logger.debug("Obtained access token (expires in %.0fs)", token.expires_in)
    return token
