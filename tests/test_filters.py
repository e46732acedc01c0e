from datetime import datetime, timedelta, timezone

import pytest

from factories import make_journal, make_project, make_task
from planner.features.planning import collect_tags, filter_journals, filter_projects, filter_todos, suggest_tags

NOW = datetime(2024, 6, 10, 9, 0, tzinfo=timezone.utc)


def _journals():
    return [
        make_journal("Morning run", "felt great", NOW - timedelta(days=3), ["health"]),
        make_journal("Work notes", "run the numbers again", NOW - timedelta(days=1), ["work", "health"]),
        make_journal("Run club", "met new people", NOW - timedelta(days=2), ["social"]),
        make_journal("Quiet day", "nothing much", NOW, ["health"]),
        make_journal("Team lunch", "tacos", NOW - timedelta(days=4), ["Social-Run"]),
    ]


class TestJournalFilters:
    def test_tags_are_unique_and_sorted(self):
        assert collect_tags(_journals()) == ["Social-Run", "health", "social", "work"]

    @pytest.mark.parametrize("term,tag", [("run", "health"), ("RUN", None), (None, "social"), ("", None)])
    def test_search_and_tag_combine_with_and(self, term, tag):
        journals = _journals()
        result = filter_journals(journals, term, tag)

        def matches_term(j):
            if not term:
                return True
            t = term.lower()
            return t in j.title.lower() or t in j.content.lower() or any(t in g.lower() for g in j.tags)

        def matches_tag(j):
            return not tag or tag in j.tags

        expected = {j.id for j in journals if matches_term(j) and matches_tag(j)}
        assert {j.id for j in result} == expected

    def test_run_with_health_tag(self):
        result = filter_journals(_journals(), "run", "health")
        # newest first
        assert [j.title for j in result] == ["Work notes", "Morning run"]

    def test_search_matches_tag_text(self):
        result = filter_journals(_journals(), "social-r", None)
        assert [j.title for j in result] == ["Team lunch"]

    def test_tag_filter_is_exact(self):
        assert filter_journals(_journals(), None, "Social") == []

    def test_sorted_newest_first(self):
        dates = [j.date for j in filter_journals(_journals())]
        assert dates == sorted(dates, reverse=True)

    def test_suggest_tags(self):
        existing = ["health", "homework", "work"]
        assert suggest_tags(existing, "WOR", chosen=["work"]) == ["homework"]
        assert suggest_tags(existing, "  ") == []


class TestTodoFilters:
    def _tasks(self):
        return [
            make_task("school thing", NOW, category="school"),
            make_task("Buy milk", NOW + timedelta(days=2), priority="low"),
            make_task("Call mom", None, priority="high", category="other"),
            make_task("Pay rent", NOW + timedelta(days=1), priority="high", description="landlord"),
            make_task("Old chore", NOW - timedelta(days=3), completed=True),
            make_task("Read book", None, priority="low"),
            make_task("Water plants", NOW + timedelta(days=1), priority="low"),
        ]

    def test_only_personal_and_other(self):
        titles = [t.title for t in filter_todos(self._tasks())]
        assert "school thing" not in titles
        assert "Call mom" in titles

    def test_sort_completed_last_then_due_then_priority(self):
        titles = [t.title for t in filter_todos(self._tasks())]
        assert titles == ["Pay rent", "Water plants", "Buy milk", "Call mom", "Read book", "Old chore"]

    def test_search_title_and_description(self):
        assert [t.title for t in filter_todos(self._tasks(), "LANDLORD")] == ["Pay rent"]
        assert [t.title for t in filter_todos(self._tasks(), "mil")] == ["Buy milk"]

    def test_hide_completed(self):
        titles = [t.title for t in filter_todos(self._tasks(), show_completed=False)]
        assert "Old chore" not in titles

    def test_priority_filter(self):
        titles = [t.title for t in filter_todos(self._tasks(), priority="high")]
        assert titles == ["Pay rent", "Call mom"]
        assert len(filter_todos(self._tasks(), priority="all")) == 6


class TestProjectFilters:
    def _projects(self):
        return [
            make_project("a", status="planning", priority="high"),
            make_project("b", status="in-progress", priority="high"),
            make_project("c", status="in-progress", priority="low"),
        ]

    def test_all_means_no_filter(self):
        assert len(filter_projects(self._projects(), "all", "all")) == 3
        assert len(filter_projects(self._projects())) == 3

    def test_status_and_priority_combine(self):
        assert [p.title for p in filter_projects(self._projects(), "in-progress", None)] == ["b", "c"]
        assert [p.title for p in filter_projects(self._projects(), "in-progress", "high")] == ["b"]
        assert filter_projects(self._projects(), "on-hold", "high") == []
