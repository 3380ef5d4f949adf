"""Persistence for action items scoped by ``(analysis_id, id)``."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from sqlmodel import col, select

from intake.models.action_items import ActionItemRecord
from intake.schemas.action_items import ActionChangeControl, ActionItem, ActionLinks, ActionVerification

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

# Columns rewritten by a full update; identity and creation audit stay fixed.
_MUTABLE_COLUMNS = (
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
    "change_control",
    "verification",
    "links",
    "notes",
)


def _dump_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def serialize(item: ActionItem) -> dict[str, Any]:
    """Map a domain item onto column values."""
    return {
        "id": item.id,
        "analysis_id": item.analysis_id,
        "created_at": item.created_at,
        "created_by": item.created_by,
        "summary": item.summary,
        "detail": item.detail,
        "owner": item.owner,
        "role": item.role,
        "status": item.status,
        "priority": item.priority,
        "due_at": item.due_at,
        "started_at": item.started_at,
        "completed_at": item.completed_at,
        "dependencies": _dump_json(item.dependencies) if item.dependencies is not None else None,
        "risk": item.risk,
        "change_control": _dump_json(item.change_control.model_dump(by_alias=True, exclude_none=True)),
        "verification": _dump_json(item.verification.model_dump(by_alias=True, exclude_none=True)),
        "links": (
            _dump_json(item.links.model_dump(by_alias=True, exclude_none=True))
            if item.links is not None
            else None
        ),
        "notes": item.notes,
    }


def deserialize(row: ActionItemRecord) -> ActionItem:
    """Rebuild a domain item from a stored row."""
    return ActionItem(
        id=row.id,
        analysis_id=row.analysis_id,
        created_at=row.created_at,
        created_by=row.created_by,
        summary=row.summary,
        detail=row.detail,
        owner=row.owner,
        role=row.role,
        status=row.status,  # type: ignore[arg-type]
        priority=row.priority,  # type: ignore[arg-type]
        due_at=row.due_at,
        started_at=row.started_at,
        completed_at=row.completed_at,
        dependencies=json.loads(row.dependencies) if row.dependencies else None,
        risk=row.risk,  # type: ignore[arg-type]
        change_control=ActionChangeControl.model_validate(json.loads(row.change_control)),
        verification=ActionVerification.model_validate(json.loads(row.verification)),
        links=ActionLinks.model_validate(json.loads(row.links)) if row.links else None,
        notes=row.notes,
    )


class ActionItemRepository:
    """Keyed store over the ``action_items`` table.

    Methods stage changes on the session; committing is left to the caller.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get_row(self, analysis_id: str, action_id: str) -> ActionItemRecord | None:
        statement = (
            select(ActionItemRecord)
            .where(col(ActionItemRecord.analysis_id) == analysis_id)
            .where(col(ActionItemRecord.id) == action_id)
        )
        return (await self._session.exec(statement)).first()

    async def list(self, analysis_id: str) -> list[ActionItem]:
        statement = (
            select(ActionItemRecord)
            .where(col(ActionItemRecord.analysis_id) == analysis_id)
            .order_by(col(ActionItemRecord.created_at).asc())
        )
        rows = (await self._session.exec(statement)).all()
        return [deserialize(row) for row in rows]

    async def find_by_id(self, analysis_id: str, action_id: str) -> ActionItem | None:
        row = await self._get_row(analysis_id, action_id)
        return deserialize(row) if row is not None else None

    async def create(self, item: ActionItem) -> ActionItem:
        self._session.add(ActionItemRecord(**serialize(item)))
        await self._session.flush()
        return item

    async def update(self, item: ActionItem) -> ActionItem:
        row = await self._get_row(item.analysis_id, item.id)
        if row is None:
            return item
        values = serialize(item)
        for column in _MUTABLE_COLUMNS:
            setattr(row, column, values[column])
        self._session.add(row)
        await self._session.flush()
        return item

    async def delete(self, analysis_id: str, action_id: str) -> None:
        row = await self._get_row(analysis_id, action_id)
        if row is None:
            return
        await self._session.delete(row)
        await self._session.flush()
