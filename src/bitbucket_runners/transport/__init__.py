"""HTTP transport used by the runner client."""

from .httpx_transport import HttpxTransport
from .protocol import HTTPTransport

__all__ = ["HTTPTransport", "HttpxTransport"]
