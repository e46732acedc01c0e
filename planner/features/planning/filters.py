"""Search and filter helpers behind the journal, todo and project views."""
from typing import Any, Iterable, List, Optional

from .base import due_of, is_completed, priority_rank, value_of

TODO_CATEGORIES = ("personal", "other")


def _wanted(choice: Optional[str]) -> Optional[str]:
    """Normalise a select-box value: None / "" / "all" mean no filter."""
    if choice is None:
        return None
    choice = getattr(choice, "value", choice)
    return None if choice in ("", "all") else choice


# --- Journals ----------------------------------------------------------------

def collect_tags(journals: Iterable[Any]) -> List[str]:
    tags = set()
    for journal in journals:
        tags.update(getattr(journal, "tags", None) or [])
    return sorted(tags)


def _journal_matches(journal: Any, term: str) -> bool:
    if term in (getattr(journal, "title", "") or "").lower():
        return True
    if term in (getattr(journal, "content", "") or "").lower():
        return True
    return any(term in tag.lower() for tag in getattr(journal, "tags", None) or [])


def _journal_sort_key(journal: Any) -> float:
    when = due_of(journal, "date")
    return when.timestamp() if when else float("-inf")


def filter_journals(journals: Iterable[Any], search_term: Optional[str] = None, tag: Optional[str] = None) -> List[Any]:
    """Text search AND tag filter, newest entry first."""
    term = (search_term or "").lower()
    result = list(journals)
    if term:
        result = [j for j in result if _journal_matches(j, term)]
    if tag:
        result = [j for j in result if tag in (getattr(j, "tags", None) or [])]
    result.sort(key=_journal_sort_key, reverse=True)
    return result


def suggest_tags(existing: Iterable[str], partial: str, chosen: Iterable[str] = ()) -> List[str]:
    """Existing tags containing ``partial`` that are not picked yet."""
    partial = (partial or "").strip().lower()
    if not partial:
        return []
    chosen = set(chosen)
    return [t for t in existing if partial in t.lower() and t not in chosen]


# --- Todos -------------------------------------------------------------------

def _todo_sort_key(task: Any):
    due = due_of(task)
    # Undated tasks go after dated ones; ties fall through to priority
    return (
        is_completed(task),
        due is None,
        due.timestamp() if due else 0.0,
        priority_rank(task),
    )


def filter_todos(
    tasks: Iterable[Any],
    search_term: Optional[str] = None,
    show_completed: bool = True,
    priority: Optional[str] = None,
) -> List[Any]:
    result = [t for t in tasks if value_of(t, "category") in TODO_CATEGORIES]

    term = (search_term or "").lower()
    if term:
        result = [
            t
            for t in result
            if term in (getattr(t, "title", "") or "").lower()
            or term in (getattr(t, "description", None) or "").lower()
        ]

    if not show_completed:
        result = [t for t in result if not is_completed(t)]

    wanted = _wanted(priority)
    if wanted:
        result = [t for t in result if value_of(t, "priority") == wanted]

    result.sort(key=_todo_sort_key)
    return result


# --- Projects ----------------------------------------------------------------

def filter_projects(projects: Iterable[Any], status: Optional[str] = None, priority: Optional[str] = None) -> List[Any]:
    wanted_status = _wanted(status)
    wanted_priority = _wanted(priority)
    return [
        p
        for p in projects
        if (wanted_status is None or value_of(p, "status") == wanted_status)
        and (wanted_priority is None or value_of(p, "priority") == wanted_priority)
    ]
