# ruff: noqa: S101
from __future__ import annotations

import json

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from intake.models.action_items import ActionItemRecord
from intake.schemas.action_items import ActionItem
from intake.services.action_items.repository import ActionItemRepository, serialize


def _item(action_id: str, *, analysis_id: str = "analysis-1", **overrides: object) -> ActionItem:
    values: dict[str, object] = {
        "id": action_id,
        "analysis_id": analysis_id,
        "created_at": f"2026-10-18T10:00:00.{action_id[-1]}00000Z",
        "created_by": "user-1",
        "summary": f"Action {action_id}",
    }
    values.update(overrides)
    return ActionItem.model_validate(values)


async def _create_schema(engine: AsyncEngine) -> None:
    async with engine.connect() as conn, conn.begin():
        await conn.run_sync(SQLModel.metadata.create_all)


def test_serialize_stores_nested_objects_as_json_text() -> None:
    values = serialize(
        _item(
            "act-1",
            dependencies=["chg-1"],
            change_control={"required": True, "rollback_plan": "Revert"},
            links={"hypothesis_id": "cause-1"},
        )
    )
    assert json.loads(values["change_control"]) == {"required": True, "rollbackPlan": "Revert"}
    assert json.loads(values["verification"]) == {"required": False}
    assert json.loads(values["links"]) == {"hypothesisId": "cause-1"}
    assert json.loads(values["dependencies"]) == ["chg-1"]
    assert values["notes"] is None


@pytest.mark.asyncio
async def test_repository_round_trips_and_scopes_by_analysis() -> None:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    await _create_schema(engine)
    session_maker = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    rich = _item(
        "act-2",
        risk="None",
        dependencies=[],
        verification={"required": True, "method": "Probe", "result": "Pass"},
        links={"runbook": "rb/1", "notes": "doc-9"},
    )
    async with session_maker() as session:
        repository = ActionItemRepository(session)
        await repository.create(rich)
        await repository.create(_item("act-1"))
        await repository.create(_item("act-3", analysis_id="analysis-2"))
        await session.commit()

    async with session_maker() as session:
        repository = ActionItemRepository(session)
        listed = await repository.list("analysis-1")
        assert [item.id for item in listed] == ["act-1", "act-2"]
        assert listed[1].model_dump() == rich.model_dump()
        assert listed[1].dependencies == []
        assert listed[0].links is None
        assert listed[0].dependencies is None

        assert await repository.find_by_id("analysis-2", "act-1") is None
        found = await repository.find_by_id("analysis-2", "act-3")
        assert found is not None
        assert found.analysis_id == "analysis-2"
    await engine.dispose()


@pytest.mark.asyncio
async def test_repository_update_replaces_and_delete_is_noop_when_missing() -> None:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    await _create_schema(engine)
    session_maker = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    original = _item("act-1", notes="first pass", links={"ticket": "INC-1"})
    async with session_maker() as session:
        repository = ActionItemRepository(session)
        await repository.create(original)
        await session.commit()

    replacement = original.model_copy(
        update={"status": "Blocked", "notes": None, "links": None, "created_by": "ignored"},
    )
    async with session_maker() as session:
        repository = ActionItemRepository(session)
        await repository.update(replacement)
        await repository.delete("analysis-1", "missing")
        await session.commit()

    async with session_maker() as session:
        row = (await session.exec(select(ActionItemRecord))).one()
        assert row.status == "Blocked"
        assert row.notes is None
        assert row.links is None
        assert row.created_by == "user-1"

        repository = ActionItemRepository(session)
        await repository.delete("analysis-1", "act-1")
        await session.commit()
        assert await repository.list("analysis-1") == []
    await engine.dispose()
