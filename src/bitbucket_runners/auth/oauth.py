"""OAuth2 client-credentials authentication for httpx.

The runner client never handles tokens itself; it receives a transport whose
httpx client carries this auth flow.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import AsyncGenerator, Generator, Iterable

import httpx
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class TokenResponse(BaseModel):
    """Token endpoint response."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None
    scope: str | None = None


class ClientCredentialsAuth(httpx.Auth):
    """Bearer auth backed by the OAuth2 client-credentials grant.

    A token is requested from ``token_url`` the first time a request is sent
    and whenever the cached one is within ``expiry_leeway`` seconds of
    expiring. Token endpoint failures are raised as ``httpx.HTTPError`` from
    the send call.
    """

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        scopes: Iterable[str] = (),
        expiry_leeway: float = 10.0,
    ) -> None:
        """Initialize auth flow.

        Args:
            token_url: OAuth2 token endpoint
            client_id: OAuth consumer key
            client_secret: OAuth consumer secret
            scopes: Optional scopes, sent space-separated
            expiry_leeway: Seconds before expiry at which a token is refreshed
        """
        self.token_url = token_url
        self.client_id = client_id
        self._client_secret = client_secret
        self.scopes = list(scopes)
        self.expiry_leeway = expiry_leeway
        self._lock = threading.Lock()
        self._access_token: str | None = None
        self._expires_at: float | None = None

    def sync_auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        # Only the token response is read here; API responses stay unread streams.
        token = self._cached_token()
        if token is None:
            token_response = yield self._build_token_request()
            token_response.read()
            token = self._store_token(token_response)
        request.headers["Authorization"] = f"Bearer {token}"
        yield request

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        raise RuntimeError("ClientCredentialsAuth supports synchronous clients only")
        yield request  # pragma: no cover

    def invalidate(self) -> None:
        """Drop the cached token so the next request fetches a new one."""
        with self._lock:
            self._access_token = None
            self._expires_at = None

    def _cached_token(self) -> str | None:
        with self._lock:
            if self._access_token is None:
                return None
            if self._expires_at is not None and time.monotonic() >= self._expires_at:
                return None
            return self._access_token

    def _build_token_request(self) -> httpx.Request:
        data = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self._client_secret,
        }
        if self.scopes:
            data["scope"] = " ".join(self.scopes)
        return httpx.Request(
            "POST",
            self.token_url,
            data=data,
            headers={"Accept": "application/json"},
        )

    def _store_token(self, response: httpx.Response) -> str:
        response.raise_for_status()
        try:
            token = TokenResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise httpx.DecodingError(
                f"Invalid token response from {self.token_url}: {e}", request=response.request
            ) from e

        expires_at = None
        if token.expires_in is not None:
            expires_at = time.monotonic() + token.expires_in - self.expiry_leeway

        with self._lock:
            self._access_token = token.access_token
            self._expires_at = expires_at

        logger.debug(f"Obtained access token from {self.token_url}")
        return token.access_token
