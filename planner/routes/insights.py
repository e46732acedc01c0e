"""
Read-only projections that the views render: dashboard, notifications,
student planner buckets and the filtered todo / journal / project lists.
"""
import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Path, Query

from planner import crud, schemas
from planner.config import get_settings
from planner.features import planning
from planner.services.common import current_time, resolve_zone

logger = logging.getLogger("planner.routes.insights")
router = APIRouter()


def _now(now: Optional[datetime]) -> datetime:
    settings = get_settings()
    if now is None:
        return current_time(settings.timezone)
    if now.tzinfo is None:
        # A bare timestamp is read in the configured zone
        return now.replace(tzinfo=resolve_zone(settings.timezone))
    return now


def _out(model, items) -> list:
    return [model.model_validate(item) for item in items]


def _notifications_out(notes) -> List[schemas.NotificationOut]:
    return [schemas.NotificationOut.model_validate(n) for n in notes]


NOW_QUERY = Query(None, description="Reference time (ISO 8601); defaults to the current time")


@router.get("/{owner_id}/dashboard", response_model=schemas.DashboardOut, summary="Dashboard aggregates")
async def dashboard(owner_id: str = Path(...), now: Optional[datetime] = NOW_QUERY):
    settings = get_settings()
    projects, tasks, journals = await asyncio.gather(
        crud.get_projects(owner_id),
        crud.get_tasks(owner_id),
        crud.get_journals(owner_id),
    )
    board = planning.build_dashboard(
        projects,
        tasks,
        journals,
        _now(now),
        upcoming_days=settings.upcoming_window_days,
        journal_limit=settings.recent_journal_limit,
    )
    return schemas.DashboardOut(
        counts=schemas.DashboardCounts(**vars(board.counts)),
        upcoming_tasks=_out(schemas.TaskOut, board.upcoming_tasks),
        overdue_tasks=_out(schemas.TaskOut, board.overdue_tasks),
        active_projects=_out(schemas.ProjectOut, board.active_projects),
        recent_journals=_out(schemas.JournalOut, board.recent_journals),
        notifications=_notifications_out(board.notifications),
    )


@router.get(
    "/{owner_id}/notifications",
    response_model=List[schemas.NotificationOut],
    summary="Deadline notifications",
)
async def notifications(owner_id: str = Path(...), now: Optional[datetime] = NOW_QUERY):
    tasks = await crud.get_tasks(owner_id)
    return _notifications_out(planning.derive_notifications(tasks, _now(now)))


@router.get("/{owner_id}/planner", response_model=schemas.PlannerOut, summary="School tasks grouped by due window")
async def student_planner(
    owner_id: str = Path(...),
    window: str = Query("all", description="all | today | week | upcoming | past"),
    now: Optional[datetime] = NOW_QUERY,
):
    if window not in planning.TIME_WINDOWS:
        raise HTTPException(
            status_code=400,
            detail={
                "error": "Validation failed",
                "details": {"window": "must be one of: " + ", ".join(planning.TIME_WINDOWS)},
            },
        )
    reference = _now(now)
    tasks = planning.school_tasks(await crud.get_tasks(owner_id))
    visible = planning.filter_by_time_window(tasks, window, reference)
    grouped = planning.group_tasks_by_due_window(visible, reference)
    return schemas.PlannerOut(
        window=window,
        buckets={name: _out(schemas.TaskOut, members) for name, members in grouped.items()},
    )


@router.get("/{owner_id}/todos", response_model=List[schemas.TaskOut], summary="Personal todo list")
async def todos(
    owner_id: str = Path(...),
    search: Optional[str] = Query(None, description="Substring of title or description"),
    show_completed: bool = Query(True),
    priority: Optional[str] = Query(None, description="all | high | medium | low"),
):
    tasks = await crud.get_tasks(owner_id)
    return _out(schemas.TaskOut, planning.filter_todos(tasks, search, show_completed, priority))


@router.get("/{owner_id}/journals", response_model=schemas.JournalSearchOut, summary="Search journal entries")
async def journals(
    owner_id: str = Path(...),
    search: Optional[str] = Query(None, description="Matches title, content or any tag"),
    tag: Optional[str] = Query(None, description="Only entries carrying this exact tag"),
):
    entries = await crud.get_journals(owner_id)
    return schemas.JournalSearchOut(
        tags=planning.collect_tags(entries),
        journals=_out(schemas.JournalOut, planning.filter_journals(entries, search, tag)),
    )


@router.get("/{owner_id}/projects", response_model=List[schemas.ProjectOut], summary="Filter projects")
async def projects(
    owner_id: str = Path(...),
    status: Optional[str] = Query(None, description="all | planning | in-progress | completed | on-hold"),
    priority: Optional[str] = Query(None, description="all | high | medium | low"),
):
    rows = await crud.get_projects(owner_id)
    return _out(schemas.ProjectOut, planning.filter_projects(rows, status, priority))
