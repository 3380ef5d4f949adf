"""Schemas for remediation action items and their create/update payloads.

Wire payloads use camelCase keys (``analysisId``, ``changeControl``); Python
attributes stay snake_case. Read payloads omit absent optional fields.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from intake.schemas.common import IsoTimestampStr, NonEmptyStr, normalize_optional_text

ActionStatus = Literal["Planned", "In-Progress", "Blocked", "Deferred", "Done", "Cancelled"]
ActionPriority = Literal["P1", "P2", "P3"]
ActionRisk = Literal["None", "Low", "Medium", "High"]
VerificationResult = Literal["Pass", "Fail"]

_OPTIONAL_TEXT_FIELDS = ("detail", "owner", "role", "notes")
_OPTIONAL_TIMESTAMP_FIELDS = ("due_at", "started_at", "completed_at")


def _reject_null(value: object) -> object:
    if value is None:
        raise ValueError("may not be null")
    return value


class CamelModel(BaseModel):
    """Base model accepting camelCase or snake_case keys and emitting camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ActionChangeControl(CamelModel):
    """Change governance metadata for risky actions."""

    required: bool = False
    id: NonEmptyStr | None = None
    rollback_plan: NonEmptyStr | None = None


class ActionVerification(CamelModel):
    """Evidence that an action's effect was confirmed."""

    required: bool = False
    method: NonEmptyStr | None = None
    evidence: NonEmptyStr | None = None
    result: VerificationResult | None = None
    checked_by: NonEmptyStr | None = None
    checked_at: IsoTimestampStr | None = None


class ActionLinks(CamelModel):
    """References from an action to a KT cause or external material."""

    hypothesis_id: NonEmptyStr | None = None
    runbook: NonEmptyStr | None = None
    ticket: NonEmptyStr | None = None
    notes: NonEmptyStr | None = None


class ActionItem(CamelModel):
    """One remediation task tied to an incident analysis."""

    id: str
    analysis_id: str
    created_at: str
    created_by: str
    summary: str
    detail: str | None = None
    owner: str | None = None
    role: str | None = None
    status: ActionStatus = "Planned"
    priority: ActionPriority = "P2"
    due_at: str | None = None
    started_at: str | None = None
    completed_at: str | None = None
    dependencies: list[str] | None = None
    risk: ActionRisk | None = None
    change_control: ActionChangeControl = Field(default_factory=ActionChangeControl)
    verification: ActionVerification = Field(default_factory=ActionVerification)
    links: ActionLinks | None = None
    notes: str | None = None

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready camelCase payload with absent fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ActionItemCreate(CamelModel):
    """Payload for creating an action item under an analysis."""

    summary: NonEmptyStr
    created_by: NonEmptyStr
    detail: str | None = None
    owner: str | None = None
    role: str | None = None
    status: ActionStatus = "Planned"
    priority: ActionPriority = "P2"
    due_at: IsoTimestampStr | None = None
    started_at: IsoTimestampStr | None = None
    completed_at: IsoTimestampStr | None = None
    dependencies: list[NonEmptyStr] | None = None
    risk: ActionRisk | None = None
    change_control: ActionChangeControl = Field(default_factory=ActionChangeControl)
    verification: ActionVerification = Field(default_factory=ActionVerification)
    links: ActionLinks | None = None
    notes: str | None = None

    @field_validator(*_OPTIONAL_TEXT_FIELDS, *_OPTIONAL_TIMESTAMP_FIELDS, mode="before")
    @classmethod
    def normalize_text_fields(cls, value: object) -> object | None:
        return normalize_optional_text(value)


class ChangeControlPatch(CamelModel):
    """Partial change-control payload; only supplied keys are merged."""

    required: bool | None = None
    id: NonEmptyStr | None = None
    rollback_plan: NonEmptyStr | None = None

    @field_validator("required", mode="before")
    @classmethod
    def reject_null_required(cls, value: object) -> object:
        return _reject_null(value)


class VerificationPatch(CamelModel):
    """Partial verification payload; only supplied keys are merged."""

    required: bool | None = None
    method: NonEmptyStr | None = None
    evidence: NonEmptyStr | None = None
    result: VerificationResult | None = None
    checked_by: NonEmptyStr | None = None
    checked_at: IsoTimestampStr | None = None

    @field_validator("required", mode="before")
    @classmethod
    def reject_null_required(cls, value: object) -> object:
        return _reject_null(value)


class ActionItemUpdate(CamelModel):
    """Partial update payload.

    Presence is tracked through ``model_fields_set``: a key left out of the
    payload means "unchanged", while ``null`` (or blank text) on an optional
    field means "clear it".
    """

    summary: NonEmptyStr | None = None
    detail: str | None = None
    owner: str | None = None
    role: str | None = None
    status: ActionStatus | None = None
    priority: ActionPriority | None = None
    due_at: IsoTimestampStr | None = None
    started_at: IsoTimestampStr | None = None
    completed_at: IsoTimestampStr | None = None
    dependencies: list[NonEmptyStr] | None = None
    risk: ActionRisk | None = None
    change_control: ChangeControlPatch | None = None
    verification: VerificationPatch | None = None
    links: ActionLinks | None = None
    notes: str | None = None

    @field_validator("summary", "status", "priority", "change_control", "verification", mode="before")
    @classmethod
    def reject_null(cls, value: object) -> object:
        return _reject_null(value)

    @field_validator(*_OPTIONAL_TEXT_FIELDS, *_OPTIONAL_TIMESTAMP_FIELDS, mode="before")
    @classmethod
    def normalize_text_fields(cls, value: object) -> object | None:
        return normalize_optional_text(value)
