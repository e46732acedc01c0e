"""
Shared helpers for the planning projections.

Everything here works on plain attribute access, so ORM rows, pydantic
models and simple namespaces can all be fed in.
"""
from datetime import date, datetime, timezone
from typing import Any, Optional

from planner.services.common import ensure_utc, parse_dt

PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}


def value_of(obj: Any, name: str, default: Any = None) -> Any:
    """Attribute value with enums unwrapped to their string value."""
    raw = getattr(obj, name, default)
    return getattr(raw, "value", raw)


def priority_rank(item: Any) -> int:
    # Unknown priorities sort after low
    return PRIORITY_RANK.get(value_of(item, "priority"), len(PRIORITY_RANK))


def is_completed(task: Any) -> bool:
    return bool(getattr(task, "completed", False))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def resolve_now(now: Optional[datetime]) -> datetime:
    return utc_now() if now is None else ensure_utc(now)


def due_of(item: Any, name: str = "due_date") -> Optional[datetime]:
    """The item's datetime field as an aware datetime, or None."""
    return parse_dt(getattr(item, name, None))


def calendar_day(moment: datetime, now: datetime) -> date:
    """Calendar date of ``moment`` as seen from ``now``'s timezone."""
    return moment.astimezone(now.tzinfo).date()
