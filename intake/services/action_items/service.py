"""Orchestrates validation, merge, guard checks, and persistence for action items."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING
from uuid import uuid4

from intake.core.logging import get_logger
from intake.core.time import isoformat_utc
from intake.schemas.action_items import ActionItem
from intake.services.action_items.errors import ActionItemNotFoundError, GuardViolationError
from intake.services.action_items.guards import evaluate_guards
from intake.services.action_items.merge import merge_action_item
from intake.services.action_items.repository import ActionItemRepository
from intake.services.action_items.validation import validate_create, validate_update

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

logger = get_logger(__name__)


class ActionItemService:
    """Request-scoped service; each mutation commits the session once on success."""

    def __init__(self, session: AsyncSession, *, repository: ActionItemRepository | None = None) -> None:
        self._session = session
        self._repository = repository or ActionItemRepository(session)

    async def list(self, analysis_id: str) -> list[ActionItem]:
        return await self._repository.list(analysis_id)

    async def get(self, analysis_id: str, action_id: str) -> ActionItem:
        item = await self._repository.find_by_id(analysis_id, action_id)
        if item is None:
            raise ActionItemNotFoundError(analysis_id, action_id)
        return item

    async def cause_counts(self, analysis_id: str) -> dict[str, int]:
        """Count actions linked to each KT hypothesis id."""
        counts: Counter[str] = Counter()
        for item in await self._repository.list(analysis_id):
            hypothesis_id = (item.links.hypothesis_id or "").strip() if item.links else ""
            if hypothesis_id:
                counts[hypothesis_id] += 1
        return dict(counts)

    def _enforce_guards(self, *, prior: ActionItem | None, candidate: ActionItem) -> ActionItem:
        result = evaluate_guards(prior=prior, candidate=candidate)
        if not result.ok or result.item is None:
            guard = result.guard or "guard_violation"
            logger.warning(
                "action_items.guard_rejected",
                extra={
                    "analysis_id": candidate.analysis_id,
                    "action_id": candidate.id,
                    "status": candidate.status,
                    "guard": guard,
                },
            )
            raise GuardViolationError(guard, result.reason or "Transition guard failed.")
        return result.item

    async def create(self, analysis_id: str, payload: object) -> ActionItem:
        data = validate_create(payload)
        candidate = ActionItem(
            id=str(uuid4()),
            analysis_id=analysis_id,
            created_at=isoformat_utc(),
            created_by=data.created_by,
            summary=data.summary,
            detail=data.detail,
            owner=data.owner,
            role=data.role,
            status=data.status,
            priority=data.priority,
            due_at=data.due_at,
            started_at=data.started_at,
            completed_at=data.completed_at,
            dependencies=data.dependencies,
            risk=data.risk,
            change_control=data.change_control,
            verification=data.verification,
            links=data.links if data.links and data.links.model_dump(exclude_none=True) else None,
            notes=data.notes,
        )
        item = self._enforce_guards(prior=None, candidate=candidate)

        created = await self._repository.create(item)
        await self._session.commit()
        logger.info(
            "action_items.created",
            extra={"analysis_id": analysis_id, "action_id": created.id, "status": created.status},
        )
        return created

    async def update(self, analysis_id: str, action_id: str, payload: object) -> ActionItem:
        existing = await self.get(analysis_id, action_id)
        data = validate_update(payload)
        candidate = merge_action_item(existing, data)
        item = self._enforce_guards(prior=existing, candidate=candidate)

        updated = await self._repository.update(item)
        await self._session.commit()
        logger.info(
            "action_items.updated",
            extra={
                "analysis_id": analysis_id,
                "action_id": action_id,
                "previous_status": existing.status,
                "status": updated.status,
            },
        )
        return updated

    async def delete(self, analysis_id: str, action_id: str) -> None:
        await self.get(analysis_id, action_id)
        await self._repository.delete(analysis_id, action_id)
        await self._session.commit()
        logger.info("action_items.deleted", extra={"analysis_id": analysis_id, "action_id": action_id})
