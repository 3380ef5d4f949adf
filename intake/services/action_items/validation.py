"""Turn untyped JSON payloads into typed create/update models."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from intake.schemas.action_items import ActionItemCreate, ActionItemUpdate
from intake.services.action_items.errors import ActionValidationError

# FastAPI prefixes request-body errors with the location segment.
_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


def format_validation_issues(errors: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Flatten pydantic error dicts into ``{field, message, type}`` issues."""
    issues: list[dict[str, Any]] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        issues.append(
            {
                "field": ".".join(loc) or "body",
                "message": str(error.get("msg", "Invalid value")),
                "type": str(error.get("type", "value_error")),
            }
        )
    return issues


def validate_create(payload: object) -> ActionItemCreate:
    """Validate a creation payload or raise ``ActionValidationError``."""
    try:
        return ActionItemCreate.model_validate(payload)
    except ValidationError as exc:
        raise ActionValidationError(format_validation_issues(exc.errors())) from exc


def validate_update(payload: object) -> ActionItemUpdate:
    """Validate a partial update payload or raise ``ActionValidationError``."""
    try:
        return ActionItemUpdate.model_validate(payload)
    except ValidationError as exc:
        raise ActionValidationError(format_validation_issues(exc.errors())) from exc
