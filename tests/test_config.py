from __future__ import annotations

import pytest

from pyomlox.config import OmloxConfig
from pyomlox.exceptions import OmloxConfigError

_ENV_KEYS = (
    "OMLOX_BASE_URL",
    "OMLOX_TOKEN_URL",
    "OMLOX_CLIENT_ID",
    "OMLOX_CLIENT_SECRET",
    "OMLOX_TOKEN_REFRESH_MARGIN",
    "OMLOX_REQUEST_TIMEOUT",
    "OMLOX_POLL_INTERVAL",
    "OMLOX_USE_SPATIAL_QUERY",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = OmloxConfig()
    assert config.base_url == "http://localhost:8081/v2"
    assert config.token_url is None
    assert config.poll_interval == 5.0
    assert config.use_spatial_query is True


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OMLOX_BASE_URL", "https://hub.example.com/v2")
    monkeypatch.setenv("OMLOX_TOKEN_URL", "https://auth.example.com/token")
    monkeypatch.setenv("OMLOX_CLIENT_ID", "monitor")
    monkeypatch.setenv("OMLOX_CLIENT_SECRET", "s3cret")
    monkeypatch.setenv("OMLOX_POLL_INTERVAL", "2.5")
    monkeypatch.setenv("OMLOX_USE_SPATIAL_QUERY", "off")

    config = OmloxConfig.from_env()

    assert config.base_url == "https://hub.example.com/v2"
    assert config.token_url == "https://auth.example.com/token"
    assert config.client_id == "monitor"
    assert config.client_secret == "s3cret"
    assert config.poll_interval == 2.5
    assert config.use_spatial_query is False


def test_from_env_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OMLOX_BASE_URL", "https://hub.example.com/v2")
    monkeypatch.setenv("OMLOX_POLL_INTERVAL", "not-a-number")

    config = OmloxConfig.from_env(base_url="http://other/v2", poll_interval=1.0)

    assert config.base_url == "http://other/v2"
    assert config.poll_interval == 1.0


def test_from_env_rejects_bad_number(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OMLOX_REQUEST_TIMEOUT", "ten")
    with pytest.raises(OmloxConfigError, match="OMLOX_REQUEST_TIMEOUT"):
        OmloxConfig.from_env()


def test_unrecognized_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OMLOX_USE_SPATIAL_QUERY", "maybe")
    assert OmloxConfig.from_env().use_spatial_query is True


@pytest.mark.parametrize("field", ["poll_interval", "request_timeout"])
def test_non_positive_intervals_rejected(field: str) -> None:
    with pytest.raises(OmloxConfigError):
        OmloxConfig(**{field: 0})


def test_token_url_requires_client_id() -> None:
    with pytest.raises(OmloxConfigError):
        OmloxConfig(token_url="https://auth.example.com/token")
