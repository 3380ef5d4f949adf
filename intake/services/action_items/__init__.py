"""Action item lifecycle: validation, merge, guards, persistence, orchestration."""

from intake.services.action_items.errors import (
    ActionItemError,
    ActionItemNotFoundError,
    ActionValidationError,
    GuardViolationError,
)
from intake.services.action_items.service import ActionItemService

__all__ = [
    "ActionItemError",
    "ActionItemNotFoundError",
    "ActionItemService",
    "ActionValidationError",
    "GuardViolationError",
]
