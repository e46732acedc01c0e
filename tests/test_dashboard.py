from datetime import datetime, timedelta, timezone

from factories import make_journal, make_project, make_task
from planner.features.planning import build_dashboard
from planner.features.planning.dashboard import active_projects, overdue_tasks, recent_journals, upcoming_tasks

NOW = datetime(2024, 6, 10, 9, 0, tzinfo=timezone.utc)


def test_upcoming_window_is_seven_days_sorted_soonest_first():
    tasks = [
        make_task("in5", NOW + timedelta(days=5)),
        make_task("in1", NOW + timedelta(days=1)),
        make_task("edge", NOW + timedelta(days=7)),
        make_task("too_far", NOW + timedelta(days=7, minutes=1)),
        make_task("done", NOW + timedelta(days=2), completed=True),
        make_task("undated", None),
    ]
    assert [t.title for t in upcoming_tasks(tasks, NOW)] == ["in1", "in5", "edge"]


def test_overdue_sorted_most_recent_first():
    tasks = [
        make_task("week_ago", NOW - timedelta(days=7)),
        make_task("hour_ago", NOW - timedelta(hours=1)),
        make_task("done", NOW - timedelta(days=1), completed=True),
        make_task("future", NOW + timedelta(days=1)),
    ]
    assert [t.title for t in overdue_tasks(tasks, NOW)] == ["hour_ago", "week_ago"]


def test_active_projects_sorted_by_due_date():
    projects = [
        make_project("late", NOW + timedelta(days=30), status="in-progress"),
        make_project("soon", NOW + timedelta(days=2), status="in-progress"),
        make_project("idle", NOW + timedelta(days=1), status="planning"),
    ]
    assert [p.title for p in active_projects(projects)] == ["soon", "late"]


def test_undated_active_projects_keep_their_order():
    projects = [make_project(str(i), None, status="in-progress") for i in range(3)]
    assert [p.title for p in active_projects(projects)] == ["0", "1", "2"]


def test_recent_journals_newest_three():
    journals = [make_journal(str(d), date=NOW - timedelta(days=d)) for d in (4, 1, 3, 0, 2)]
    assert [j.title for j in recent_journals(journals)] == ["0", "1", "2"]


def test_build_dashboard_counts_and_lists():
    projects = [make_project(status="in-progress"), make_project(status="completed")]
    tasks = [
        make_task("hw", NOW + timedelta(hours=5), category="school"),
        make_task("rent", NOW - timedelta(days=2)),
        make_task("done", None, completed=True, category="school"),
    ]
    journals = [make_journal(date=NOW)]

    board = build_dashboard(projects, tasks, journals, NOW)

    assert board.counts.projects == 2
    assert board.counts.school_tasks == 2
    assert board.counts.pending_tasks == 2
    assert board.counts.journals == 1
    assert [t.title for t in board.upcoming_tasks] == ["hw"]
    assert [t.title for t in board.overdue_tasks] == ["rent"]
    assert len(board.active_projects) == 1
    assert [n.type for n in board.notifications] == ["warning", "error"]
