"""Custom exception hierarchy for pyomlox."""

from __future__ import annotations


class OmloxError(Exception):
    """Base exception for all pyomlox errors."""


class OmloxConfigError(OmloxError):
    """Invalid or missing configuration."""


class OmloxTransportError(OmloxError):
    """HTTP-level failure (network, timeout, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class OmloxApiError(OmloxError):
    """Hub answered with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class OmloxAuthenticationError(OmloxApiError):
    """Token request failed or the hub rejected the bearer token (HTTP 401).

    The client catches this once per call to refresh its access token.
    """


class OmloxForbiddenError(OmloxApiError):
    """Token is valid but lacks permission for the resource (HTTP 403)."""


class OmloxNotFoundError(OmloxApiError):
    """Requested resource does not exist (HTTP 404)."""


class InvalidStateError(OmloxError):
    """Operation is not allowed in the monitor's current state.

    Raised by :meth:`IntrusionMonitor.start` when no trackable is
    selected for monitoring.
    """
