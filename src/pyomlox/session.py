"""Access token state for authenticated API calls."""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field

from pyomlox._constants import DEFAULT_TOKEN_LIFETIME


class AccessToken(BaseModel):
    """Bearer token obtained through the OAuth2 client-credentials grant.

    Parameters
    ----------
    access_token : str
        The bearer token sent in the ``Authorization`` header.
    token_type : str
        Token type reported by the authorization server.
    expires_in : float
        Lifetime in seconds as advertised by the server.
    refresh_margin : float
        Seconds before expiry at which the token is treated as expired,
        so a request never races the real expiry.
    created_at : float
        Monotonic timestamp (``time.monotonic()``) when the token was
        issued.  Defaults to *now* if not provided.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    access_token: str = Field(min_length=1)
    token_type: str = "Bearer"
    expires_in: float = DEFAULT_TOKEN_LIFETIME
    refresh_margin: float = 30.0
    created_at: float = Field(default_factory=time.monotonic)

    @property
    def is_expired(self) -> bool:
        """Whether the token is within ``refresh_margin`` of its expiry."""
        return self.age >= (self.expires_in - self.refresh_margin)

    @property
    def age(self) -> float:
        """Seconds since the token was issued."""
        return time.monotonic() - self.created_at
