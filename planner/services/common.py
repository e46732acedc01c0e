import logging
from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

import dateparser

logger = logging.getLogger("planner.services.common")


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware ones are returned unchanged."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_dt(maybe: Any) -> Optional[datetime]:
    """Parse various datetime formats and return a timezone-aware datetime."""
    if not maybe:
        return None

    if isinstance(maybe, datetime):
        return ensure_utc(maybe)

    if isinstance(maybe, (int, float)):
        try:
            return datetime.fromtimestamp(maybe, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(maybe, str):
        try:
            return ensure_utc(datetime.fromisoformat(maybe.replace("Z", "+00:00")))
        except ValueError:
            pass
        for fmt in ("%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M:%SZ"):
            try:
                return datetime.strptime(maybe, fmt).replace(tzinfo=timezone.utc)
            except ValueError:
                continue
        dt = dateparser.parse(
            maybe,
            settings={
                "TIMEZONE": "UTC",
                "RETURN_AS_TIMEZONE_AWARE": True,
            },
        )
        if dt is None:
            logger.debug("Could not parse datetime from %r", maybe)
            return None
        return dt.astimezone(timezone.utc)

    return None


def resolve_zone(name: Optional[str]) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (KeyError, ValueError):
        logger.warning("Unknown timezone %r, falling back to UTC", name)
        return timezone.utc


def current_time(zone_name: Optional[str] = None) -> datetime:
    """Now, expressed in the given IANA zone (UTC by default)."""
    return datetime.now(resolve_zone(zone_name))


def to_columns(payload: Any, *, partial: bool = False) -> Dict[str, Any]:
    """Turn a pydantic payload into plain column values (enums unwrapped).

    ``partial`` keeps only fields the client actually sent, so updates merge.
    """
    data = payload.model_dump(exclude_unset=partial)
    return {k: _column_value(v) for k, v in data.items()}


def _column_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        # SQLite keeps wall time only, so everything is stored as UTC
        return ensure_utc(value).astimezone(timezone.utc)
    return value
