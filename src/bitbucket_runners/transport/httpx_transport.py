"""httpx-backed transport."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class HttpxTransport:
    """HTTPTransport implementation on top of ``httpx.Client``.

    Responses are returned unread (``stream=True``) so the caller owns body
    reading and release. Timeouts, pooling and auth are the client's concern.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        timeout: float = 30.0,
        auth: httpx.Auth | None = None,
    ) -> None:
        """Initialize transport.

        Args:
            client: Existing client to wrap. It is not closed by this transport.
            timeout: Request timeout in seconds when building a new client
            auth: Auth flow for a new client (e.g. ClientCredentialsAuth)
        """
        if client is None:
            self._client = httpx.Client(timeout=timeout, auth=auth)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

    def get(self, url: str) -> httpx.Response:
        """Send a GET request."""
        return self.execute(self._client.build_request("GET", url))

    def post(self, url: str, content_type: str, body: bytes) -> httpx.Response:
        """Send a POST request with an explicit content type."""
        request = self._client.build_request(
            "POST", url, content=body, headers={"Content-Type": content_type}
        )
        return self.execute(request)

    def execute(self, request: httpx.Request) -> httpx.Response:
        """Send a prepared request and return the unread response."""
        logger.debug(f"{request.method} {request.url}")
        return self._client.send(request, stream=True)

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
