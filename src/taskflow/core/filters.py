"""Filtering and display ordering of task lists."""

from collections.abc import Iterable
from functools import cmp_to_key

from taskflow.models import Task

# Category filter value that matches every task
ALL_CATEGORIES = "all"

PRIORITY_WEIGHTS: dict[str, int] = {"high": 3, "medium": 2, "low": 1}


def priority_weight(priority: str) -> int:
    """Sort weight of a priority; unrecognized values weigh 0."""
    return PRIORITY_WEIGHTS.get(priority, 0)


def matches_search(task: Task, search_query: str) -> bool:
    """Case-insensitive substring match on title or category name.

    An empty query matches every task. Tasks without a category can only
    match on their title.
    """
    if not search_query:
        return True
    needle = search_query.lower()
    if needle in task.title.lower():
        return True
    return bool(task.category) and needle in task.category.lower()


def matches_category(task: Task, selected_category: str) -> bool:
    return selected_category == ALL_CATEGORIES or task.category == selected_category


def filter_tasks(
    tasks: Iterable[Task],
    search_query: str = "",
    selected_category: str = ALL_CATEGORIES,
) -> list[Task]:
    """Keep tasks matching both the search query and the category filter.

    Args:
        tasks: Raw task collection
        search_query: Free text, matched case-insensitively
        selected_category: Category name, or ALL_CATEGORIES

    Returns:
        Matching tasks in their original order
    """
    return [
        task
        for task in tasks
        if matches_search(task, search_query) and matches_category(task, selected_category)
    ]


def compare_tasks(a: Task, b: Task) -> int:
    """Display-order comparator.

    1. Incomplete before completed.
    2. Higher priority weight first.
    3. When both have a due date, earlier due date first (equal dates tie);
       otherwise newer ``created_at`` first.

    A dated and an undated task in the same bucket are ordered by recency,
    not by due date.
    """
    if a.completed != b.completed:
        return 1 if a.completed else -1

    weight_a, weight_b = priority_weight(a.priority), priority_weight(b.priority)
    if weight_a != weight_b:
        return weight_b - weight_a

    if a.due_date and b.due_date:
        return (a.due_date > b.due_date) - (a.due_date < b.due_date)

    return (b.created_at > a.created_at) - (b.created_at < a.created_at)


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Stable sort into display order (see compare_tasks)."""
    return sorted(tasks, key=cmp_to_key(compare_tasks))
