"""HTTP transport for the OMLOX Hub REST API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyomlox._constants import USER_AGENT
from pyomlox.config import OmloxConfig
from pyomlox.exceptions import (
    OmloxApiError,
    OmloxAuthenticationError,
    OmloxForbiddenError,
    OmloxNotFoundError,
    OmloxTransportError,
)

_logger = logging.getLogger(__name__)

_STATUS_MESSAGES: dict[int, str] = {
    401: "Unauthorized - Invalid or missing authentication token",
    403: "Forbidden - Insufficient permissions",
    404: "Not found",
    500: "Internal server error",
}

_STATUS_ERRORS: dict[int, type[OmloxApiError]] = {
    401: OmloxAuthenticationError,
    403: OmloxForbiddenError,
    404: OmloxNotFoundError,
}


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Any = None,
        token: str | None = None,
    ) -> Any:
        ...

    async def post_form(self, url: str, form: Mapping[str, str]) -> dict[str, Any]:
        ...


def _error_message(status: int, reason: str | None, body: Any) -> str:
    known = _STATUS_MESSAGES.get(status)
    if known is not None:
        return known
    message = f"Server error: {status} {reason or ''}".rstrip()
    if isinstance(body, dict) and body.get("message"):
        message += f" - {body['message']}"
    return message


def raise_for_status(status: int, reason: str | None, text: str, endpoint: str) -> None:
    """Map a non-2xx hub response to the exception hierarchy."""
    if 200 <= status < 300:
        return
    try:
        body: Any = json.loads(text) if text else None
    except json.JSONDecodeError:
        body = None
    message = _error_message(status, reason, body)
    _logger.debug("OMLOX API error on %s: %s (%s)", endpoint, message, text[:200])
    error_cls = _STATUS_ERRORS.get(status, OmloxApiError)
    raise error_cls(message, status_code=status, endpoint=endpoint)


class HttpTransport:
    """JSON-over-HTTP transport bound to the configured hub base URL."""

    def __init__(self, config: OmloxConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self, token: str | None, *, has_body: bool) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
            **self._config.default_headers,
        }
        if has_body:
            headers["content-type"] = "application/json"
        if token:
            headers["authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Any = None,
        token: str | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Returns ``None`` for empty bodies (e.g. ``DELETE`` responses).
        """
        url = f"{self._config.base_url.rstrip('/')}{path}"
        data = json.dumps(json_body) if json_body is not None else None
        headers = self._headers(token, has_body=data is not None)

        _logger.debug("%s %s params=%s", method, url, dict(params) if params else {})

        try:
            async with self._http.request(
                method,
                url,
                params=dict(params) if params else None,
                data=data,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                raise_for_status(resp.status, resp.reason, text, path)
        except OmloxApiError:
            raise
        except TimeoutError as exc:
            raise OmloxTransportError(f"Request to {path} timed out", endpoint=path) from exc
        except aiohttp.ClientError as exc:
            raise OmloxTransportError(f"Request to {path} failed: {exc}", endpoint=path) from exc

        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise OmloxTransportError(
                f"Invalid JSON from {path}: {text[:200]}",
                status_code=resp.status,
                endpoint=path,
            ) from exc

    async def post_form(self, url: str, form: Mapping[str, str]) -> dict[str, Any]:
        """POST an urlencoded form to an absolute URL (OAuth token endpoint)."""
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        _logger.debug("POST %s (form)", url)
        try:
            async with self._http.post(url, data=dict(form), headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status in (400, 401):
                    raise OmloxAuthenticationError(
                        f"Token request rejected: HTTP {resp.status} {text[:200]}",
                        status_code=resp.status,
                        endpoint=url,
                    )
                raise_for_status(resp.status, resp.reason, text, url)
        except OmloxApiError:
            raise
        except TimeoutError as exc:
            raise OmloxTransportError(f"Token request to {url} timed out", endpoint=url) from exc
        except aiohttp.ClientError as exc:
            raise OmloxTransportError(f"Token request to {url} failed: {exc}", endpoint=url) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise OmloxTransportError(f"Invalid JSON from {url}: {text[:200]}", endpoint=url) from exc
        if not isinstance(body, dict):
            raise OmloxTransportError(f"Unexpected token response from {url}", endpoint=url)
        return body
