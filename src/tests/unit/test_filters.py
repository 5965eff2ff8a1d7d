"""Unit tests for task filtering and display ordering."""

from datetime import datetime, timedelta, timezone

import pytest

from taskflow.core.filters import (
    ALL_CATEGORIES,
    compare_tasks,
    filter_tasks,
    matches_search,
    priority_weight,
    sort_tasks,
)
from taskflow.models import Task
from tests.fixtures.factories import BASE_TIME, TaskFactory


def ids(tasks: list[Task]) -> list[str]:
    return [task.id for task in tasks]


class TestFilterTasks:
    """Tests for search and category filtering."""

    @pytest.fixture
    def tasks(self) -> list[Task]:
        return [
            TaskFactory.create(title="Urgent review", category="Work", id="urgent"),
            TaskFactory.create(title="Buy milk", id="milk"),
            TaskFactory.create(title="Gym", category="Health", id="gym"),
            TaskFactory.create(title="Standup", category="Work", id="standup"),
        ]

    def test_search_matches_title_case_insensitively(self, tasks: list[Task]) -> None:
        """Test "urgent" matches "Urgent review" but not an uncategorized "Buy milk"."""
        result = filter_tasks(tasks, search_query="urgent")

        assert ids(result) == ["urgent"]

    def test_search_matches_category_name(self, tasks: list[Task]) -> None:
        result = filter_tasks(tasks, search_query="WORK")

        assert ids(result) == ["urgent", "standup"]

    def test_uncategorized_task_still_matches_title(self, tasks: list[Task]) -> None:
        result = filter_tasks(tasks, search_query="milk")

        assert ids(result) == ["milk"]

    def test_empty_search_matches_everything(self, tasks: list[Task]) -> None:
        assert ids(filter_tasks(tasks)) == ["urgent", "milk", "gym", "standup"]

    def test_category_filter_exact_name(self, tasks: list[Task]) -> None:
        result = filter_tasks(tasks, selected_category="Work")

        assert ids(result) == ["urgent", "standup"]

    def test_category_filter_is_case_sensitive(self, tasks: list[Task]) -> None:
        assert filter_tasks(tasks, selected_category="work") == []

    def test_all_sentinel_disables_category_filter(self, tasks: list[Task]) -> None:
        assert len(filter_tasks(tasks, selected_category=ALL_CATEGORIES)) == 4

    def test_search_and_category_combine(self, tasks: list[Task]) -> None:
        result = filter_tasks(tasks, search_query="stand", selected_category="Work")

        assert ids(result) == ["standup"]

    def test_search_with_no_match(self, tasks: list[Task]) -> None:
        assert filter_tasks(tasks, search_query="nothing like this") == []

    def test_matches_search_without_category(self) -> None:
        task = TaskFactory.create(title="Read")

        assert matches_search(task, "work") is False


class TestPriorityWeight:
    @pytest.mark.parametrize(
        ("priority", "weight"),
        [("high", 3), ("medium", 2), ("low", 1), ("urgent", 0), ("", 0)],
    )
    def test_weights(self, priority: str, weight: int) -> None:
        assert priority_weight(priority) == weight


class TestSortTasks:
    """Tests for the display ordering."""

    def test_incomplete_before_completed(self) -> None:
        """Test completion state dominates every other key."""
        done = TaskFactory.create(priority="high", due_date="2020-01-01", completed=True, id="done")
        open_ = TaskFactory.create(priority="low", id="open")

        assert ids(sort_tasks([done, open_])) == ["open", "done"]
        assert compare_tasks(open_, done) < 0

    def test_priority_descending(self) -> None:
        tasks = [
            TaskFactory.create(priority="low", id="low-1"),
            TaskFactory.create(priority="medium", id="medium-1"),
            TaskFactory.create(priority="high", id="high-1"),
            TaskFactory.create(priority="low", id="low-2"),
            TaskFactory.create(priority="high", id="high-2"),
            TaskFactory.create(priority="medium", id="medium-2"),
        ]

        priorities = [t.priority for t in sort_tasks(tasks)]

        assert priorities == ["high", "high", "medium", "medium", "low", "low"]

    def test_unknown_priority_sorts_last(self) -> None:
        low = TaskFactory.create(priority="low", id="low")
        unknown = TaskFactory.create(id="unknown").model_copy(update={"priority": "someday"})

        assert ids(sort_tasks([unknown, low])) == ["low", "unknown"]

    def test_due_dates_ascending_when_both_present(self) -> None:
        later = TaskFactory.create(due_date="2024-01-05", id="later")
        earlier = TaskFactory.create(due_date="2024-01-01", id="earlier")

        assert ids(sort_tasks([later, earlier])) == ["earlier", "later"]

    def test_equal_due_dates_keep_input_order(self) -> None:
        """Test equal due dates tie instead of falling back to recency."""
        older = TaskFactory.create(due_date="2024-01-03", id="older")
        newer = TaskFactory.create(due_date="2024-01-03", id="newer")

        assert ids(sort_tasks([older, newer])) == ["older", "newer"]
        assert compare_tasks(older, newer) == 0

    def test_only_one_due_date_falls_back_to_created_at(self) -> None:
        """Test a dated task does not outrank a newer undated task."""
        dated = TaskFactory.create(
            due_date="2024-01-01",
            created_at=BASE_TIME,
            id="dated",
        )
        undated = TaskFactory.create(created_at=BASE_TIME + timedelta(hours=1), id="undated")

        assert ids(sort_tasks([dated, undated])) == ["undated", "dated"]

    def test_no_due_dates_newest_first(self) -> None:
        tasks = TaskFactory.create_batch(3)

        assert ids(sort_tasks(tasks)) == ["task-3", "task-2", "task-1"]

    def test_sort_does_not_mutate_input(self) -> None:
        tasks = TaskFactory.create_batch(3)
        original = list(tasks)

        sort_tasks(tasks)

        assert tasks == original

    def test_naive_and_aware_created_at_compare(self) -> None:
        """Test a seed record without an offset sorts next to a store-stamped one."""
        seeded = Task.model_validate({"id": "seeded", "title": "Old", "createdAt": "2024-01-10T09:00:00"})
        created = TaskFactory.create(created_at=datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc), id="created")

        assert ids(sort_tasks([seeded, created])) == ["created", "seeded"]
