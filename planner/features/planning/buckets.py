"""
Time buckets for the student planner.

Tasks are split into Overdue / Today / Tomorrow / This Week / Upcoming /
Completed by comparing calendar days in the timezone of ``now``. Every
bucket is always present in the result, empty or not.
"""
import logging
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from .base import calendar_day, due_of, is_completed, priority_rank, resolve_now, value_of

logger = logging.getLogger("planner.planning.buckets")

OVERDUE = "Overdue"
TODAY = "Today"
TOMORROW = "Tomorrow"
THIS_WEEK = "This Week"
UPCOMING = "Upcoming"
COMPLETED = "Completed"

BUCKET_ORDER = (OVERDUE, TODAY, TOMORROW, THIS_WEEK, UPCOMING, COMPLETED)

TIME_WINDOWS = ("all", "today", "week", "upcoming", "past")


def classify_task(task: Any, now: Optional[datetime] = None) -> str:
    """Name of the bucket a single task belongs to."""
    if is_completed(task):
        return COMPLETED

    due = due_of(task)
    if due is None:
        return UPCOMING

    now = resolve_now(now)
    today = now.date()
    due_day = calendar_day(due, now)

    if due_day < today:
        return OVERDUE
    if due_day == today:
        return TODAY
    if due_day == today + timedelta(days=1):
        return TOMORROW

    week_start = today - timedelta(days=today.weekday())
    if week_start <= due_day <= week_start + timedelta(days=6):
        return THIS_WEEK
    return UPCOMING


def group_tasks_by_due_window(tasks: Iterable[Any], now: Optional[datetime] = None) -> Dict[str, List[Any]]:
    now = resolve_now(now)
    grouped: Dict[str, List[Any]] = OrderedDict((name, []) for name in BUCKET_ORDER)
    for task in tasks:
        grouped[classify_task(task, now)].append(task)

    # list.sort is stable, so equal priorities keep their encounter order
    for members in grouped.values():
        members.sort(key=priority_rank)
    return grouped


def non_empty_buckets(grouped: Dict[str, List[Any]]) -> Dict[str, List[Any]]:
    return OrderedDict((name, members) for name, members in grouped.items() if members)


def school_tasks(tasks: Iterable[Any]) -> List[Any]:
    return [t for t in tasks if value_of(t, "category") == "school"]


def filter_by_time_window(tasks: Iterable[Any], window: str = "all", now: Optional[datetime] = None) -> List[Any]:
    """Student planner time filter. Undated tasks only pass the "all" window."""
    if window not in TIME_WINDOWS:
        raise ValueError(f"unknown time window {window!r}; expected one of {', '.join(TIME_WINDOWS)}")

    now = resolve_now(now)
    today = now.date()
    week_start = today - timedelta(days=today.weekday())
    week_end = week_start + timedelta(days=6)

    def _match(task: Any) -> bool:
        due = due_of(task)
        if due is None:
            return window == "all"
        if window == "today":
            return calendar_day(due, now) == today
        if window == "week":
            return week_start <= calendar_day(due, now) <= week_end
        if window == "upcoming":
            return due > now
        if window == "past":
            return due < now
        return True

    return [t for t in tasks if _match(t)]
