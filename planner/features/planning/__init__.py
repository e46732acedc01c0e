"""
Planning feature module: time buckets, derived notifications, dashboard
aggregates and per-view filters over in-memory entity lists.
"""
from .buckets import (
    BUCKET_ORDER,
    TIME_WINDOWS,
    classify_task,
    filter_by_time_window,
    group_tasks_by_due_window,
    non_empty_buckets,
    school_tasks,
)
from .dashboard import Dashboard, DashboardCounts, build_dashboard
from .filters import collect_tags, filter_journals, filter_projects, filter_todos, suggest_tags
from .notifications import Notification, NotificationFeed, derive_notifications

__all__ = [
    "BUCKET_ORDER",
    "TIME_WINDOWS",
    "classify_task",
    "filter_by_time_window",
    "group_tasks_by_due_window",
    "non_empty_buckets",
    "school_tasks",
    "Dashboard",
    "DashboardCounts",
    "build_dashboard",
    "collect_tags",
    "filter_journals",
    "filter_projects",
    "filter_todos",
    "suggest_tags",
    "Notification",
    "NotificationFeed",
    "derive_notifications",
]
