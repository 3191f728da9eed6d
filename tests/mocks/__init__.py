"""Test mocks for bitbucket-runners.

Provides mock implementations for testing:
- FakeTransport: Programmable HTTPTransport recording every call
- stream_response / failing_response: Unread httpx responses
- Sample API payloads
"""

from .fake_transport import (
    ChunkStream,
    FailingStream,
    FakeTransport,
    RecordedCall,
    failing_response,
    stream_response,
)
from .payloads import (
    BASE_URL,
    RUNNER_JSON,
    RUNNER_LIST_JSON,
    RUNNER_UUID,
    WORKSPACE_UUID,
)

__all__ = [
    "FakeTransport",
    "RecordedCall",
    "ChunkStream",
    "FailingStream",
    "stream_response",
    "failing_response",
    "BASE_URL",
    "WORKSPACE_UUID",
    "RUNNER_UUID",
    "RUNNER_JSON",
    "RUNNER_LIST_JSON",
]
