"""Tests for priority triage."""

from pollhooks.models import Priority, Task
from pollhooks.triage import PRIORITY_ORDER, UNKNOWN_PRIORITY_RANK, priority_rank, triage


def make(task_id, priority):
    return Task(id=task_id, priority=priority)


class TestPriorityOrder:
    """Tests for the rank table."""

    def test_has_correct_ordering(self):
        assert PRIORITY_ORDER["interrupt"] == 0
        assert PRIORITY_ORDER["sprint"] == 1
        assert PRIORITY_ORDER["parallel"] == 2
        assert PRIORITY_ORDER["queue"] == 3
        assert PRIORITY_ORDER["backlog"] == 4

    def test_enum_members_rank_like_their_values(self):
        for priority in Priority:
            assert priority_rank(priority) == PRIORITY_ORDER[priority.value]

    def test_unknown_values_rank_last(self):
        assert priority_rank("urgent") == UNKNOWN_PRIORITY_RANK
        assert priority_rank(None) == UNKNOWN_PRIORITY_RANK
        assert priority_rank(["unhashable"]) == UNKNOWN_PRIORITY_RANK
        assert UNKNOWN_PRIORITY_RANK > max(PRIORITY_ORDER.values())


class TestTriage:
    """Tests for triage()."""

    def test_sorts_tasks_by_priority(self):
        tasks = [
            make("1", "backlog"),
            make("2", "interrupt"),
            make("3", "queue"),
            make("4", "sprint"),
            make("5", "parallel"),
        ]

        result = triage(tasks)

        assert [t.id for t in result] == ["2", "4", "5", "3", "1"]

    def test_equal_priorities_keep_input_order(self):
        tasks = [
            make("a", "queue"),
            make("b", "sprint"),
            make("c", "queue"),
            make("d", "sprint"),
        ]

        result = triage(tasks)

        assert [t.id for t in result] == ["b", "d", "a", "c"]

    def test_unknown_priority_sorts_last(self):
        tasks = [make("x", "someday"), make("y", "backlog"), make("z", "interrupt")]

        result = triage(tasks)

        assert [t.id for t in result] == ["z", "y", "x"]

    def test_does_not_mutate_input(self):
        tasks = [make("1", "backlog"), make("2", "interrupt")]
        original = list(tasks)

        result = triage(tasks)

        assert tasks == original
        assert result is not tasks

    def test_is_idempotent(self):
        tasks = [
            make("1", "queue"),
            make("2", "mystery"),
            make("3", "interrupt"),
            make("4", "queue"),
            make("5", "backlog"),
        ]

        once = triage(tasks)
        twice = triage(once)

        assert [t.id for t in twice] == [t.id for t in once]

    def test_accepts_mappings(self):
        tasks = [
            {"id": "1", "priority": "backlog"},
            {"id": "2"},
            {"id": "3", "priority": "interrupt"},
        ]

        result = triage(tasks)

        assert [t["id"] for t in result] == ["3", "1", "2"]

    def test_empty_input(self):
        assert triage([]) == []
