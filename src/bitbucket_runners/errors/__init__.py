"""Runner client error handling - Structured errors with context."""

from .errors import (
    BodyReadError,
    ConfigError,
    DecodeError,
    ErrorKind,
    ErrorTemplate,
    RunnerClientError,
    StatusError,
    TransportError,
)
from .factory import ErrorFactory, create_error, get_error_factory
from .registry import ErrorRegistry

__all__ = [
    # Core error types
    "RunnerClientError",
    "ErrorKind",
    "ErrorTemplate",
    "TransportError",
    "BodyReadError",
    "StatusError",
    "DecodeError",
    "ConfigError",
    # Registry and factory
    "ErrorRegistry",
    "ErrorFactory",
    # Convenience functions
    "get_error_factory",
    "create_error",
]
