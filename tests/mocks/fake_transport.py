"""FakeTransport - programmable HTTPTransport for RunnerClient tests.

Records every call with its arguments and answers with queued outcomes:
an ``httpx.Response`` is returned, an exception is raised.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class RecordedCall:
    """One call made on the transport."""

    method: str  # "get" | "post" | "execute"
    args: tuple[Any, ...]


class FakeTransport:
    """Test double implementing HTTPTransport.

    Example:
        transport = FakeTransport().queue(stream_response(200, '{"page": 1}'))
        client = RunnerClient(transport, "https://api", "ws")
        client.list_runners()
        assert transport.calls[0].method == "get"
    """

    def __init__(self) -> None:
        self.calls: list[RecordedCall] = []
        self.closed = False
        self._outcomes: list[httpx.Response | BaseException] = []

    def queue(self, *outcomes: httpx.Response | BaseException) -> FakeTransport:
        """Queue responses or exceptions, consumed in order."""
        self._outcomes.extend(outcomes)
        return self

    def get(self, url: str) -> httpx.Response:
        return self._next("get", url)

    def post(self, url: str, content_type: str, body: bytes) -> httpx.Response:
        return self._next("post", url, content_type, body)

    def execute(self, request: httpx.Request) -> httpx.Response:
        return self._next("execute", request)

    def close(self) -> None:
        self.closed = True

    @property
    def last_call(self) -> RecordedCall:
        assert self.calls, "transport was never called"
        return self.calls[-1]

    def _next(self, method: str, *args: Any) -> httpx.Response:
        self.calls.append(RecordedCall(method, args))
        if not self._outcomes:
            raise AssertionError(f"Unexpected transport call: {method}{args}")
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class ChunkStream(httpx.SyncByteStream):
    """Unread body stream that remembers whether it was closed."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = list(chunks)
        self.closed = False

    def __iter__(self):
        yield from self._chunks

    def close(self) -> None:
        self.closed = True


class FailingStream(httpx.SyncByteStream):
    """Body stream whose read fails."""

    def __init__(self, message: str = "simulated read error") -> None:
        self._message = message
        self.closed = False

    def __iter__(self):
        raise httpx.ReadError(self._message)

    def close(self) -> None:
        self.closed = True


def stream_response(status_code: int, body: str | bytes = b"") -> httpx.Response:
    """Build a response whose body has not been read yet."""
    if isinstance(body, str):
        body = body.encode()
    return httpx.Response(status_code, stream=ChunkStream([body]))


def failing_response(status_code: int, message: str = "simulated read error") -> httpx.Response:
    """Build a response whose body read raises httpx.ReadError."""
    return httpx.Response(status_code, stream=FailingStream(message))
