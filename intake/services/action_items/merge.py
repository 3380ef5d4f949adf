"""Compute the next action item from a stored record plus a partial update."""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel

from intake.schemas.action_items import (
    ActionChangeControl,
    ActionItem,
    ActionItemUpdate,
    ActionLinks,
    ActionVerification,
)

NestedT = TypeVar("NestedT", bound=BaseModel)

# Scalar fields replaced wholesale when present in the update.
_SCALAR_FIELDS = (
    "summary",
    "detail",
    "owner",
    "role",
    "status",
    "priority",
    "due_at",
    "started_at",
    "completed_at",
    "dependencies",
    "risk",
    "notes",
)


class Patch(Enum):
    """Field-level patch markers alongside a concrete replacement value."""

    UNSET = "unset"
    CLEAR = "clear"


def field_patch(model: BaseModel, name: str) -> Any:
    """Return ``Patch.UNSET``, ``Patch.CLEAR``, or the supplied value for ``name``."""
    if name not in model.model_fields_set:
        return Patch.UNSET
    value = getattr(model, name)
    if value is None:
        return Patch.CLEAR
    return value


def _merge_nested(
    current: NestedT | None,
    patch: BaseModel,
    model: type[NestedT],
) -> NestedT:
    merged: dict[str, Any] = current.model_dump(exclude_none=True) if current is not None else {}
    for name in patch.model_fields_set:
        value = field_patch(patch, name)
        if value is Patch.CLEAR:
            merged.pop(name, None)
        elif value is not Patch.UNSET:
            merged[name] = value
    return model.model_validate(merged)


def merge_links(existing: ActionLinks | None, update: ActionItemUpdate) -> ActionLinks | None:
    """Merge link keys onto the stored links; an empty result becomes ``None``."""
    patch = field_patch(update, "links")
    if patch is Patch.UNSET:
        return existing
    if patch is Patch.CLEAR:
        return None
    merged = _merge_nested(existing, patch, ActionLinks)
    if not merged.model_dump(exclude_none=True):
        return None
    return merged


def merge_action_item(existing: ActionItem, update: ActionItemUpdate) -> ActionItem:
    """Apply ``update`` to ``existing`` without touching identity or audit fields."""
    changes: dict[str, Any] = {}
    for name in _SCALAR_FIELDS:
        patch = field_patch(update, name)
        if patch is Patch.UNSET:
            continue
        if patch is Patch.CLEAR:
            changes[name] = None
        elif name == "dependencies":
            changes[name] = list(patch)
        else:
            changes[name] = patch

    change_control = field_patch(update, "change_control")
    if isinstance(change_control, BaseModel):
        changes["change_control"] = _merge_nested(
            existing.change_control,
            change_control,
            ActionChangeControl,
        )

    verification = field_patch(update, "verification")
    if isinstance(verification, BaseModel):
        changes["verification"] = _merge_nested(
            existing.verification,
            verification,
            ActionVerification,
        )

    changes["links"] = merge_links(existing.links, update)
    return existing.model_copy(update=changes, deep=True)
