import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from functools import cmp_to_key
from typing import Any, Iterable, List, Optional

from .base import due_of, is_completed, resolve_now, value_of
from .notifications import Notification, derive_notifications

logger = logging.getLogger("planner.planning.dashboard")


@dataclass
class DashboardCounts:
    projects: int = 0
    school_tasks: int = 0
    pending_tasks: int = 0
    journals: int = 0


@dataclass
class Dashboard:
    counts: DashboardCounts
    upcoming_tasks: List[Any] = field(default_factory=list)
    overdue_tasks: List[Any] = field(default_factory=list)
    active_projects: List[Any] = field(default_factory=list)
    recent_journals: List[Any] = field(default_factory=list)
    notifications: List[Notification] = field(default_factory=list)


def upcoming_tasks(tasks: Iterable[Any], now: Optional[datetime] = None, days: int = 7) -> List[Any]:
    """Open tasks due between now and ``days`` from now, soonest first."""
    now = resolve_now(now)
    horizon = now + timedelta(days=days)
    picked = []
    for task in tasks:
        due = due_of(task)
        if due is None or is_completed(task):
            continue
        if now <= due <= horizon:
            picked.append((due, task))
    picked.sort(key=lambda pair: pair[0])
    return [task for _, task in picked]


def overdue_tasks(tasks: Iterable[Any], now: Optional[datetime] = None) -> List[Any]:
    """Open tasks already past due, most recently due first."""
    now = resolve_now(now)
    picked = []
    for task in tasks:
        due = due_of(task)
        if due is None or is_completed(task):
            continue
        if due < now:
            picked.append((due, task))
    picked.sort(key=lambda pair: pair[0], reverse=True)
    return [task for _, task in picked]


def _compare_due(a: Any, b: Any) -> int:
    # Pairs with a missing date compare equal, so undated projects stay put
    da, db = due_of(a), due_of(b)
    if da is None or db is None:
        return 0
    return (da > db) - (da < db)


def active_projects(projects: Iterable[Any]) -> List[Any]:
    in_progress = [p for p in projects if value_of(p, "status") == "in-progress"]
    return sorted(in_progress, key=cmp_to_key(_compare_due))


def recent_journals(journals: Iterable[Any], limit: int = 3) -> List[Any]:
    dated = [(due_of(j, "date"), j) for j in journals]
    dated.sort(key=lambda pair: pair[0].timestamp() if pair[0] else float("-inf"), reverse=True)
    return [j for _, j in dated[:limit]]


def build_dashboard(
    projects: Iterable[Any],
    tasks: Iterable[Any],
    journals: Iterable[Any],
    now: Optional[datetime] = None,
    *,
    upcoming_days: int = 7,
    journal_limit: int = 3,
) -> Dashboard:
    now = resolve_now(now)
    projects, tasks, journals = list(projects), list(tasks), list(journals)

    counts = DashboardCounts(
        projects=len(projects),
        school_tasks=sum(1 for t in tasks if value_of(t, "category") == "school"),
        pending_tasks=sum(1 for t in tasks if not is_completed(t)),
        journals=len(journals),
    )
    dashboard = Dashboard(
        counts=counts,
        upcoming_tasks=upcoming_tasks(tasks, now, upcoming_days),
        overdue_tasks=overdue_tasks(tasks, now),
        active_projects=active_projects(projects),
        recent_journals=recent_journals(journals, journal_limit),
        notifications=derive_notifications(tasks, now),
    )
    logger.debug(
        "Dashboard built: %d upcoming, %d overdue, %d active project(s)",
        len(dashboard.upcoming_tasks),
        len(dashboard.overdue_tasks),
        len(dashboard.active_projects),
    )
    return dashboard
