"""Action item API scoped to an incident analysis."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import JSONResponse

from intake.db.session import get_session
from intake.services.action_items.service import ActionItemService

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

router = APIRouter(prefix="/analyses/{analysis_id}/actions", tags=["action-items"])
SESSION_DEP = Depends(get_session)
PAYLOAD_BODY = Body(...)


def get_action_item_service(session: AsyncSession = SESSION_DEP) -> ActionItemService:
    return ActionItemService(session)


SERVICE_DEP = Depends(get_action_item_service)


@router.get("")
async def list_action_items(
    analysis_id: str,
    service: ActionItemService = SERVICE_DEP,
) -> JSONResponse:
    """List action items for an analysis, oldest first."""
    items = await service.list(analysis_id)
    return JSONResponse(content=[item.to_wire() for item in items])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_action_item(
    analysis_id: str,
    payload: dict[str, Any] = PAYLOAD_BODY,
    service: ActionItemService = SERVICE_DEP,
) -> JSONResponse:
    """Create an action item; the server assigns id and creation timestamp."""
    item = await service.create(analysis_id, payload)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=item.to_wire())


@router.get("/cause-counts")
async def get_cause_action_counts(
    analysis_id: str,
    service: ActionItemService = SERVICE_DEP,
) -> dict[str, int]:
    """Return how many actions reference each KT hypothesis."""
    return await service.cause_counts(analysis_id)


@router.get("/{action_id}")
async def get_action_item(
    analysis_id: str,
    action_id: str,
    service: ActionItemService = SERVICE_DEP,
) -> JSONResponse:
    """Fetch a single action item."""
    item = await service.get(analysis_id, action_id)
    return JSONResponse(content=item.to_wire())


@router.patch("/{action_id}")
async def update_action_item(
    analysis_id: str,
    action_id: str,
    payload: dict[str, Any] = PAYLOAD_BODY,
    service: ActionItemService = SERVICE_DEP,
) -> JSONResponse:
    """Apply a partial update, subject to lifecycle guards."""
    item = await service.update(analysis_id, action_id, payload)
    return JSONResponse(content=item.to_wire())


@router.delete("/{action_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_action_item(
    analysis_id: str,
    action_id: str,
    service: ActionItemService = SERVICE_DEP,
) -> Response:
    """Permanently delete an action item."""
    await service.delete(analysis_id, action_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
