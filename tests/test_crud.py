from datetime import datetime, timedelta, timezone

import pytest

from planner import crud
from planner.errors import NotFound
from planner.models import models as db


@pytest.mark.asyncio
async def test_create_assigns_id_and_lists_in_creation_order(owner_id):
    first = await crud.create_task({"user_id": owner_id, "title": "first", "category": "personal"})
    second = await crud.create_task({"user_id": owner_id, "title": "second", "category": "school"})

    assert first.id and second.id and first.id != second.id
    assert first.completed is False
    assert first.priority == "medium"

    rows = await crud.get_tasks(owner_id)
    assert [r.title for r in rows] == ["first", "second"]


@pytest.mark.asyncio
async def test_client_supplied_id_is_ignored(owner_id):
    row = await crud.create_project(
        {"id": "mine", "user_id": owner_id, "title": "P", "description": "d"}
    )
    assert row.id != "mine"


@pytest.mark.asyncio
async def test_list_is_scoped_to_owner(owner_id):
    await crud.create_journal(
        {"user_id": owner_id, "title": "mine", "content": "", "date": datetime.now(timezone.utc)}
    )
    await crud.create_journal(
        {"user_id": owner_id + "_other", "title": "theirs", "content": "", "date": datetime.now(timezone.utc)}
    )

    assert [j.title for j in await crud.get_journals(owner_id)] == ["mine"]
    assert await crud.get_projects("nobody_" + owner_id) == []


@pytest.mark.asyncio
async def test_update_merges_only_given_fields(owner_id):
    due = datetime(2024, 6, 12, 15, 0, tzinfo=timezone.utc)
    task = await crud.create_task(
        {"user_id": owner_id, "title": "Essay", "category": "school", "due_date": due, "priority": "high"}
    )

    updated = await crud.update_task(task.id, {"completed": True})

    assert updated.completed is True
    assert updated.title == "Essay"
    assert updated.priority == "high"
    assert updated.due_date.replace(tzinfo=timezone.utc) == due


@pytest.mark.asyncio
async def test_update_cannot_reassign_owner(owner_id):
    project = await crud.create_project({"user_id": owner_id, "title": "P", "description": ""})
    updated = await crud.update_project(project.id, {"user_id": "someone_else", "title": "Q"})
    assert updated.user_id == owner_id
    assert updated.title == "Q"


@pytest.mark.asyncio
async def test_update_unknown_id_raises_not_found():
    with pytest.raises(NotFound) as info:
        await crud.update_journal("does-not-exist", {"title": "x"})
    assert info.value.message == "Journal not found"
    assert info.value.status_code == 404


@pytest.mark.asyncio
async def test_delete_is_idempotent(owner_id):
    task = await crud.create_task({"user_id": owner_id, "title": "gone", "category": "other"})

    assert await crud.delete_task(task.id) is True
    assert await crud.delete_task(task.id) is False
    assert await crud.get_tasks(owner_id) == []


@pytest.mark.asyncio
async def test_deleting_project_leaves_linked_tasks(owner_id):
    project = await crud.create_project({"user_id": owner_id, "title": "P", "description": ""})
    await crud.create_task(
        {"user_id": owner_id, "title": "linked", "category": "project", "project_id": project.id}
    )

    await crud.delete_project(project.id)

    tasks = await crud.get_tasks(owner_id)
    assert len(tasks) == 1
    assert tasks[0].project_id == project.id


@pytest.mark.asyncio
async def test_journal_tags_round_trip(owner_id):
    when = datetime.now(timezone.utc) - timedelta(days=1)
    entry = await crud.create_journal(
        {"user_id": owner_id, "title": "t", "content": "c", "date": when, "tags": ["a", "b"]}
    )
    fetched = (await crud.get_journals(owner_id))[0]
    assert fetched.id == entry.id
    assert fetched.tags == ["a", "b"]


@pytest.mark.asyncio
async def test_upsert_user_creates_then_refreshes():
    uid = "uid_upsert_test"
    created = await crud.upsert_user(uid, "a@example.com", "Ann")
    refreshed = await crud.upsert_user(uid, "b@example.com")

    assert created.id == refreshed.id == uid
    assert refreshed.email == "b@example.com"
    assert refreshed.display_name == "Ann"
    assert isinstance(await crud.get_user(uid), db.User)
    assert await crud.get_user("uid_missing") is None
