import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlalchemy import select

from planner import database
from planner.errors import NotFound
from planner.models import models as db

logger = logging.getLogger("planner.crud")

ModelT = TypeVar("ModelT", db.Project, db.Task, db.Journal)


# --- Generic DB helpers ------------------------------------------------------

async def _get_or_none(session, model, id_):
    obj = await session.get(model, id_)
    if not obj:
        logger.warning("%s with id=%s not found.", model.__name__, id_)
    return obj


async def _commit_refresh(session, obj):
    await session.commit()
    await session.refresh(obj)
    return obj


def _columns(model) -> set:
    return {c.name for c in model.__table__.columns}


# --- Generic entity operations -----------------------------------------------

async def list_by_owner(model: Type[ModelT], owner_id: str) -> List[ModelT]:
    async with database.AsyncSessionLocal() as dbs:
        result = await dbs.execute(
            select(model).where(model.user_id == owner_id).order_by(model.created_at)
        )
        rows = list(result.scalars())
        logger.info("Fetched %d %s row(s) for user %s", len(rows), model.__tablename__, owner_id)
        return rows


async def create(model: Type[ModelT], fields: Dict[str, Any]) -> ModelT:
    """Insert a row; ``id`` and ``created_at`` are always server assigned."""
    allowed = _columns(model) - {"id", "created_at"}
    values = {k: v for k, v in fields.items() if k in allowed}
    async with database.AsyncSessionLocal() as dbs:
        obj = model(**values)
        dbs.add(obj)
        await _commit_refresh(dbs, obj)
        logger.info("Created %s %s for user %s", model.__name__, obj.id, obj.user_id)
        return obj


async def update_by_id(model: Type[ModelT], id_: str, fields: Dict[str, Any]) -> ModelT:
    """Merge ``fields`` into the row. Raises NotFound for an unknown id."""
    allowed = _columns(model) - {"id", "user_id", "created_at"}
    async with database.AsyncSessionLocal() as dbs:
        obj = await _get_or_none(dbs, model, id_)
        if not obj:
            raise NotFound(model.__name__, id_)
        for key, value in fields.items():
            if key in allowed:
                setattr(obj, key, value)
        await _commit_refresh(dbs, obj)
        logger.info("Updated %s %s", model.__name__, obj.id)
        return obj


async def delete_by_id(model: Type[ModelT], id_: str) -> bool:
    """Delete the row if present. Deleting an absent id is not an error."""
    async with database.AsyncSessionLocal() as dbs:
        obj = await _get_or_none(dbs, model, id_)
        if not obj:
            return False
        await dbs.delete(obj)
        await dbs.commit()
        logger.info("Deleted %s %s", model.__name__, id_)
        return True


# --- Project Operations ------------------------------------------------------

async def get_projects(user_id: str) -> List[db.Project]:
    return await list_by_owner(db.Project, user_id)


async def create_project(fields: Dict[str, Any]) -> db.Project:
    return await create(db.Project, fields)


async def update_project(project_id: str, fields: Dict[str, Any]) -> db.Project:
    return await update_by_id(db.Project, project_id, fields)


async def delete_project(project_id: str) -> bool:
    return await delete_by_id(db.Project, project_id)


# --- Task Operations ---------------------------------------------------------

async def get_tasks(user_id: str) -> List[db.Task]:
    return await list_by_owner(db.Task, user_id)


async def create_task(fields: Dict[str, Any]) -> db.Task:
    return await create(db.Task, fields)


async def update_task(task_id: str, fields: Dict[str, Any]) -> db.Task:
    return await update_by_id(db.Task, task_id, fields)


async def delete_task(task_id: str) -> bool:
    return await delete_by_id(db.Task, task_id)


# --- Journal Operations ------------------------------------------------------

async def get_journals(user_id: str) -> List[db.Journal]:
    return await list_by_owner(db.Journal, user_id)


async def create_journal(fields: Dict[str, Any]) -> db.Journal:
    return await create(db.Journal, fields)


async def update_journal(journal_id: str, fields: Dict[str, Any]) -> db.Journal:
    return await update_by_id(db.Journal, journal_id, fields)


async def delete_journal(journal_id: str) -> bool:
    return await delete_by_id(db.Journal, journal_id)


# --- User Operations ---------------------------------------------------------

async def upsert_user(user_id: str, email: str, display_name: Optional[str] = None) -> db.User:
    """Create or refresh the identity provider's view of a user."""
    async with database.AsyncSessionLocal() as dbs:
        user = await dbs.get(db.User, user_id)
        if user:
            user.email = email
            if display_name is not None:
                user.display_name = display_name
            logger.info("Updated user %s", user_id)
        else:
            user = db.User(id=user_id, email=email, display_name=display_name)
            dbs.add(user)
            logger.info("Created user %s", user_id)
        return await _commit_refresh(dbs, user)


async def get_user(user_id: str) -> Optional[db.User]:
    async with database.AsyncSessionLocal() as dbs:
        return await dbs.get(db.User, user_id)
