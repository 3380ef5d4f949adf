"""Public schema exports shared across API route modules."""

from intake.schemas.action_items import (
    ActionChangeControl,
    ActionItem,
    ActionItemCreate,
    ActionItemUpdate,
    ActionLinks,
    ActionVerification,
    ChangeControlPatch,
    VerificationPatch,
)

__all__ = [
    "ActionChangeControl",
    "ActionItem",
    "ActionItemCreate",
    "ActionItemUpdate",
    "ActionLinks",
    "ActionVerification",
    "ChangeControlPatch",
    "VerificationPatch",
]
