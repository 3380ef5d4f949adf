"""Lifecycle guard policy for action item status transitions."""

from __future__ import annotations

from dataclasses import dataclass

from intake.core.time import isoformat_utc
from intake.schemas.action_items import ActionChangeControl, ActionItem, ActionVerification

ROLLBACK_PLAN_REQUIRED = "rollback_plan_required"
VERIFICATION_EVIDENCE_REQUIRED = "verification_evidence_required"


@dataclass(frozen=True)
class ActionGuardResult:
    ok: bool
    item: ActionItem | None = None
    guard: str | None = None
    reason: str | None = None


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def has_rollback_plan(change_control: ActionChangeControl) -> bool:
    return _has_text(change_control.rollback_plan)


def has_verification_evidence(verification: ActionVerification) -> bool:
    return (
        verification.result is not None
        and _has_text(verification.checked_by)
        and _has_text(verification.checked_at)
    )


def evaluate_guards(
    *,
    prior: ActionItem | None,
    candidate: ActionItem,
    now: str | None = None,
) -> ActionGuardResult:
    """Validate ``candidate`` against lifecycle guards and apply completion stamping.

    ``prior`` is ``None`` on creation. Any status may move to any other; only
    In-Progress and Done carry preconditions.
    """
    if candidate.status == "In-Progress":
        needs_rollback = candidate.risk == "High" or candidate.change_control.required
        if needs_rollback and not has_rollback_plan(candidate.change_control):
            return ActionGuardResult(
                ok=False,
                guard=ROLLBACK_PLAN_REQUIRED,
                reason=(
                    "Rollback plan required before moving to In-Progress when risk is High "
                    "or change control is required."
                ),
            )

    completed_at = candidate.completed_at
    if candidate.status == "Done":
        if candidate.verification.required and not has_verification_evidence(candidate.verification):
            return ActionGuardResult(
                ok=False,
                guard=VERIFICATION_EVIDENCE_REQUIRED,
                reason="Verification result, checkedBy, and checkedAt are required before marking as Done.",
            )
        if not completed_at:
            completed_at = now or isoformat_utc()
    elif prior is not None and prior.status == "Done" and completed_at == prior.completed_at:
        completed_at = None

    if completed_at == candidate.completed_at:
        return ActionGuardResult(ok=True, item=candidate)
    return ActionGuardResult(ok=True, item=candidate.model_copy(update={"completed_at": completed_at}))
