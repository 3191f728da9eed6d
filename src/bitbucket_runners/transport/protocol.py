"""Transport capability consumed by the runner client."""

from typing import Protocol

import httpx


class HTTPTransport(Protocol):
    """Minimal HTTP capability the runner client depends on.

    Used by:
    - RunnerClient (every operation)
    - HttpxTransport (production implementation)
    - FakeTransport in tests

    Returned responses may be unread streams. Callers read them with
    ``response.read()`` and must call ``response.close()`` on every path.
    Failures to send are raised as ``httpx.HTTPError`` or ``OSError``.
    """

    def get(self, url: str) -> httpx.Response:
        """Send a GET request.

        Args:
            url: Absolute request URL

        Returns:
            The (possibly unread) response
        """
        ...

    def post(self, url: str, content_type: str, body: bytes) -> httpx.Response:
        """Send a POST request with the given body.

        Args:
            url: Absolute request URL
            content_type: Value of the Content-Type header
            body: Raw request body

        Returns:
            The (possibly unread) response
        """
        ...

    def execute(self, request: httpx.Request) -> httpx.Response:
        """Send an arbitrary prepared request.

        Args:
            request: Request carrying method, URL, headers and body

        Returns:
            The (possibly unread) response
        """
        ...

    def close(self) -> None:
        """Release connections held by the transport."""
        ...
