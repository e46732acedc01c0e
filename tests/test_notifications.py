from datetime import datetime, timedelta, timezone

from factories import make_task
from planner.features.planning import NotificationFeed, derive_notifications

T = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)


def test_overdue_task_gives_error():
    notes = derive_notifications([make_task("Essay", T - timedelta(hours=2))], T)
    assert len(notes) == 1
    assert notes[0].type == "error"
    assert notes[0].title == "Overdue Task"
    assert notes[0].message == 'Task "Essay" is overdue!'


def test_due_within_a_day_gives_warning():
    notes = derive_notifications([make_task("Lab", T + timedelta(hours=20))], T)
    assert [n.type for n in notes] == ["warning"]
    assert "within 24 hours" in notes[0].message


def test_exactly_one_day_is_still_a_warning():
    notes = derive_notifications([make_task("Lab", T + timedelta(days=1))], T)
    assert [n.type for n in notes] == ["warning"]


def test_upcoming_info_rounds_days_up():
    notes = derive_notifications([make_task("Quiz", T + timedelta(days=2.5))], T)
    assert len(notes) == 1
    assert notes[0].type == "info"
    assert "3 days" in notes[0].message


def test_nothing_beyond_three_days():
    assert derive_notifications([make_task("Far", T + timedelta(days=3, minutes=1))], T) == []


def test_completed_and_undated_tasks_are_silent():
    tasks = [
        make_task("done", T - timedelta(days=2), completed=True),
        make_task("whenever", None),
    ]
    assert derive_notifications(tasks, T) == []


def test_output_follows_input_order_and_links_task():
    tasks = [
        make_task("b", T + timedelta(days=2), id="task-b"),
        make_task("a", T - timedelta(days=1), id="task-a"),
    ]
    notes = derive_notifications(tasks, T)
    assert [n.related_id for n in notes] == ["task-b", "task-a"]
    assert [n.type for n in notes] == ["info", "error"]


def test_derivation_is_idempotent():
    tasks = [
        make_task("x", T - timedelta(hours=1)),
        make_task("y", T + timedelta(hours=5)),
        make_task("z", T + timedelta(days=2)),
    ]
    assert derive_notifications(tasks, T) == derive_notifications(tasks, T)


class TestNotificationFeed:
    def test_memoised_on_collection_identity(self):
        feed = NotificationFeed()
        tasks = (make_task("x", T - timedelta(hours=1)),)

        first = feed.get(tasks, T)
        second = feed.get(tasks, T)
        assert first == second
        assert feed.computations == 1

    def test_new_collection_recomputes(self):
        feed = NotificationFeed()
        tasks = (make_task("x", T - timedelta(hours=1)),)
        feed.get(tasks, T)

        replaced = tasks + (make_task("y", T + timedelta(hours=2)),)
        notes = feed.get(replaced, T)
        assert feed.computations == 2
        assert [n.type for n in notes] == ["error", "warning"]

    def test_invalidate_forces_recompute(self):
        feed = NotificationFeed()
        tasks = ()
        feed.get(tasks, T)
        feed.invalidate()
        feed.get(tasks, T)
        assert feed.computations == 2

    def test_new_reference_time_recomputes(self):
        feed = NotificationFeed()
        tasks = (make_task("Quiz", T + timedelta(days=2)),)

        assert [n.type for n in feed.get(tasks, T)] == ["info"]
        assert [n.type for n in feed.get(tasks, T + timedelta(days=5))] == ["error"]
        assert feed.computations == 2

        feed.get(tasks, T + timedelta(days=5))
        assert feed.computations == 2
