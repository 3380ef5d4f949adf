"""Common reusable schema primitives shared by payload models."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, StringConstraints

from intake.core.time import parse_iso_timestamp

# Reusable string type for request payloads where blank/whitespace-only values are invalid.
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _require_iso_timestamp(value: str) -> str:
    try:
        parse_iso_timestamp(value)
    except ValueError as exc:
        raise ValueError("must be an ISO-8601 timestamp") from exc
    return value


# ISO-8601 text kept verbatim once it parses.
IsoTimestampStr = Annotated[NonEmptyStr, AfterValidator(_require_iso_timestamp)]


def normalize_optional_text(value: object) -> object | None:
    """Trim text and map blank strings to ``None``."""
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        return text or None
    return value
