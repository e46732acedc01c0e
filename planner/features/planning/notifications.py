"""
Deadline notifications derived from the task list.

Nothing here is stored or delivered: the list is recomputed from
(tasks, now) and is identical for identical inputs, ids included.
"""
import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Optional

from .base import due_of, is_completed, resolve_now

logger = logging.getLogger("planner.planning.notifications")

SECONDS_PER_DAY = 24 * 60 * 60
_NAMESPACE = uuid.UUID("6f1c3a52-0d4b-4f0e-9a57-3b8e2d1c7a10")


@dataclass(frozen=True)
class Notification:
    id: str
    title: str
    message: str
    type: str
    related_id: Optional[str] = None


def _notification_id(task_id: Any, kind: str) -> str:
    return str(uuid.uuid5(_NAMESPACE, f"{task_id}:{kind}"))


def notification_for(task: Any, now: datetime) -> Optional[Notification]:
    if is_completed(task):
        return None
    due = due_of(task)
    if due is None:
        return None

    task_id = getattr(task, "id", None)
    title = getattr(task, "title", "")
    days_diff = (due - now).total_seconds() / SECONDS_PER_DAY

    if days_diff < 0:
        kind, heading, message = "error", "Overdue Task", f'Task "{title}" is overdue!'
    elif days_diff <= 1:
        kind, heading, message = "warning", "Due Soon", f'Task "{title}" is due within 24 hours!'
    elif days_diff <= 3:
        kind, heading = "info", "Upcoming"
        message = f'Task "{title}" is due in {math.ceil(days_diff)} days'
    else:
        return None

    return Notification(
        id=_notification_id(task_id, kind),
        title=heading,
        message=message,
        type=kind,
        related_id=None if task_id is None else str(task_id),
    )


def derive_notifications(tasks: Iterable[Any], now: Optional[datetime] = None) -> List[Notification]:
    now = resolve_now(now)
    out = []
    for task in tasks:
        note = notification_for(task, now)
        if note is not None:
            out.append(note)
    return out


class NotificationFeed:
    """Memoises ``derive_notifications`` on (task collection identity, now).

    The cache is only refreshed when a different collection object or a
    different reference time is passed in, so owners must replace the
    collection rather than mutate it. Without ``now`` the current time is
    used, which always recomputes.
    """

    def __init__(self):
        self._source: Optional[object] = None
        self._now: Optional[datetime] = None
        self._cached: List[Notification] = []
        self.computations = 0

    def get(self, tasks: Iterable[Any], now: Optional[datetime] = None) -> List[Notification]:
        now = resolve_now(now)
        if tasks is not self._source or now != self._now:
            self._cached = derive_notifications(tasks, now)
            self._source = tasks
            self._now = now
            self.computations += 1
            logger.debug("Recomputed %d notification(s)", len(self._cached))
        return list(self._cached)

    def invalidate(self) -> None:
        self._source = None
        self._now = None
        self._cached = []
