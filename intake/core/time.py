"""UTC time helpers shared by services and persistence."""

from __future__ import annotations

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return a naive UTC datetime."""
    return datetime.now(UTC).replace(tzinfo=None)


def isoformat_utc(value: datetime | None = None) -> str:
    """Render a UTC timestamp as ISO-8601 text with a trailing ``Z``."""
    current = value or utcnow()
    if current.tzinfo is not None:
        current = current.astimezone(UTC).replace(tzinfo=None)
    return f"{current.isoformat(timespec='microseconds')}Z"


def parse_iso_timestamp(value: str) -> datetime:
    """Parse ISO-8601 text, accepting a trailing ``Z`` for UTC."""
    normalized = value.strip()
    if normalized.endswith(("Z", "z")):
        normalized = f"{normalized[:-1]}+00:00"
    return datetime.fromisoformat(normalized)
