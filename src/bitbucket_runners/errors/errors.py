"""Runner client error types."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Where in a call the failure happened."""

    TRANSPORT = "TRANSPORT"
    BODY_READ = "BODY_READ"
    STATUS = "STATUS"
    DECODE = "DECODE"
    CONFIG = "CONFIG"


@dataclass
class RunnerClientError(Exception):
    """Structured error with context. Base exception for all runner client errors."""

    # Identity
    code: str  # e.g., "STATUS_ERROR"
    kind: ErrorKind

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation

    # Context
    retryable: bool = False  # Is retry potentially useful?
    operation: str | None = None  # e.g., "list runners"
    status_code: int | None = None  # Only for STATUS errors
    body: str | None = None  # Raw response text, only for STATUS errors

    # Underlying exception, also chained via __cause__
    cause: BaseException | None = None

    # Metadata
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logs and API consumers.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "kind": self.kind.value,
            "message": self.message,
            "detail": self.detail,
            "retryable": self.retryable,
            "operation": self.operation,
            "status_code": self.status_code,
            "body": self.body,
            "cause": str(self.cause) if self.cause is not None else None,
            "timestamp": self.timestamp.isoformat(),
        }


class TransportError(RunnerClientError):
    """The transport call itself failed; no response was received."""


class BodyReadError(RunnerClientError):
    """A response arrived but its body could not be read."""


class StatusError(RunnerClientError):
    """The response status is not one the operation accepts."""


class DecodeError(RunnerClientError):
    """The status was accepted but the body did not decode."""


class ConfigError(RunnerClientError):
    """Client configuration is missing or invalid."""


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    kind: ErrorKind
    error_class: type[RunnerClientError]
    message_template: str  # "failed to {action}, status: {status_code}, body: {body}"
    detail_template: str | None = None
    default_retryable: bool = False
