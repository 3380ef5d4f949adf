"""Persisted action item rows keyed by analysis and id."""

from __future__ import annotations

from sqlalchemy import Index
from sqlmodel import Field, SQLModel


class ActionItemRecord(SQLModel, table=True):
    """Storage row for an action item; nested objects live in JSON text columns."""

    __tablename__ = "action_items"  # pyright: ignore[reportAssignmentType]
    __table_args__ = (
        Index("ix_action_items_analysis_status_priority", "analysis_id", "status", "priority"),
    )

    id: str = Field(primary_key=True)
    analysis_id: str = Field(index=True)
    created_at: str
    created_by: str
    summary: str
    detail: str | None = Field(default=None)
    owner: str | None = Field(default=None)
    role: str | None = Field(default=None)
    status: str = Field(default="Planned")
    priority: str = Field(default="P2")
    due_at: str | None = Field(default=None)
    started_at: str | None = Field(default=None)
    completed_at: str | None = Field(default=None)
    dependencies: str | None = Field(default=None)
    risk: str | None = Field(default=None)
    change_control: str
    verification: str
    links: str | None = Field(default=None)
    notes: str | None = Field(default=None)
