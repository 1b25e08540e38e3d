"""Client configuration for pyomlox."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pyomlox.exceptions import OmloxConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    raw = env.get(key)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise OmloxConfigError(f"{key} must be a number, got {raw!r}") from exc


@dataclasses.dataclass(frozen=True)
class OmloxConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        OMLOX Hub REST API root (e.g. ``"https://hub.example.com/v2"``).
        Endpoint paths such as ``/trackables/summary`` are appended verbatim.
    token_url : str or None
        OAuth2 token endpoint.  When ``None`` requests are sent without an
        ``Authorization`` header.
    client_id : str
        OAuth2 client id for the client-credentials grant.
    client_secret : str
        OAuth2 client secret for the client-credentials grant.
    token_refresh_margin : float
        Seconds before the advertised expiry at which a cached access
        token is considered stale and refreshed.
    request_timeout : float
        Total timeout in seconds applied to every HTTP request.
    poll_interval : float
        Seconds between intrusion monitor evaluation passes.
    use_spatial_query : bool
        Pass ``spatial_query=true`` when asking the hub which fences
        contain a trackable.
    default_headers : dict
        Extra headers sent with every API request.
    """

    base_url: str = "http://localhost:8081/v2"
    token_url: str | None = None
    client_id: str = ""
    client_secret: str = ""
    token_refresh_margin: float = 30.0
    request_timeout: float = 10.0
    poll_interval: float = 5.0
    use_spatial_query: bool = True
    default_headers: dict[str, str] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise OmloxConfigError("poll_interval must be positive")
        if self.request_timeout <= 0:
            raise OmloxConfigError("request_timeout must be positive")
        if self.token_url and not self.client_id:
            raise OmloxConfigError("client_id is required when token_url is set")

    @classmethod
    def from_env(cls, **overrides: Any) -> OmloxConfig:
        """Create configuration from environment variables.

        Reads ``OMLOX_BASE_URL``, ``OMLOX_TOKEN_URL``, ``OMLOX_CLIENT_ID``,
        ``OMLOX_CLIENT_SECRET`` and the optional numeric/boolean
        ``OMLOX_*`` tuning variables. Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        OmloxConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "OMLOX_BASE_URL": "base_url",
            "OMLOX_TOKEN_URL": "token_url",
            "OMLOX_CLIENT_ID": "client_id",
            "OMLOX_CLIENT_SECRET": "client_secret",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_FLOAT_MAP = {
            "OMLOX_TOKEN_REFRESH_MARGIN": "token_refresh_margin",
            "OMLOX_REQUEST_TIMEOUT": "request_timeout",
            "OMLOX_POLL_INTERVAL": "poll_interval",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            if field_name in overrides:
                continue
            parsed = _env_float(env, env_key)
            if parsed is not None:
                config_kwargs[field_name] = parsed

        if "use_spatial_query" not in overrides:
            config_kwargs["use_spatial_query"] = _env_bool(env.get("OMLOX_USE_SPATIAL_QUERY"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
