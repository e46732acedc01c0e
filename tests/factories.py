"""Plain stand-ins for entities, for tests of the pure planning functions."""
import itertools
from types import SimpleNamespace

_ids = itertools.count(1)


def make_task(title="task", due_date=None, completed=False, priority="medium", category="personal", **extra):
    return SimpleNamespace(
        id=extra.pop("id", f"t{next(_ids)}"),
        title=title,
        description=extra.pop("description", None),
        due_date=due_date,
        completed=completed,
        priority=priority,
        category=category,
        project_id=extra.pop("project_id", None),
        **extra,
    )


def make_project(title="project", due_date=None, status="planning", priority="medium", **extra):
    return SimpleNamespace(
        id=extra.pop("id", f"p{next(_ids)}"),
        title=title,
        description=extra.pop("description", ""),
        due_date=due_date,
        status=status,
        priority=priority,
        **extra,
    )


def make_journal(title="entry", content="", date=None, tags=(), mood=None, **extra):
    return SimpleNamespace(
        id=extra.pop("id", f"j{next(_ids)}"),
        title=title,
        content=content,
        date=date,
        tags=list(tags),
        mood=mood,
        **extra,
    )
