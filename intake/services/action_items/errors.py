"""Typed failures raised by the action-item service layer."""

from __future__ import annotations

from typing import Any


class ActionItemError(Exception):
    """Base class for classified action-item failures."""


class ActionValidationError(ActionItemError):
    """Payload failed schema validation; carries the offending fields."""

    def __init__(self, issues: list[dict[str, Any]]) -> None:
        super().__init__("Validation error")
        self.issues = issues

    @property
    def fields(self) -> list[str]:
        return [issue["field"] for issue in self.issues]


class GuardViolationError(ActionItemError):
    """Valid payload that violates a lifecycle transition precondition."""

    def __init__(self, guard: str, message: str) -> None:
        super().__init__(message)
        self.guard = guard
        self.message = message


class ActionItemNotFoundError(ActionItemError):
    """No action item exists for the requested analysis and id."""

    def __init__(self, analysis_id: str, action_id: str) -> None:
        super().__init__("Action item not found")
        self.analysis_id = analysis_id
        self.action_id = action_id
