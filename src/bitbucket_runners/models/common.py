"""Common wire types."""

import re
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, PlainSerializer

# Python datetimes stop at microseconds; the API sends nanoseconds.
_EXTRA_FRACTION_DIGITS = re.compile(r"(\.\d{6})\d+")
_UTC_OFFSET = re.compile(r"(Z|[+-]\d{2}:?\d{2})$", re.IGNORECASE)


def _parse_timestamp(value: Any) -> Any:
    """Truncate sub-microsecond digits so RFC3339 nanosecond text parses.

    Text without a UTC offset is not RFC3339 and is rejected.
    """
    if isinstance(value, str):
        value = value.strip()
        if not _UTC_OFFSET.search(value):
            raise ValueError("timestamp must include a UTC offset")
        return _EXTRA_FRACTION_DIGITS.sub(r"\1", value, count=1)
    return value


def _ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes given in Python as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _format_timestamp(value: datetime) -> str:
    """Format as RFC3339 UTC with a trailing Z."""
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


Timestamp = Annotated[
    datetime,
    BeforeValidator(_parse_timestamp),
    AfterValidator(_ensure_aware),
    PlainSerializer(_format_timestamp, when_used="json"),
]
