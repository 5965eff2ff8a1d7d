"""Pytest fixtures for the TaskFlow tests."""

from datetime import datetime, timezone

import pytest

from taskflow.config import Settings
from taskflow.core import NotificationLog, TaskViewModel
from taskflow.models import Category, Task
from taskflow.storage import InMemoryCategoryStore, InMemoryTaskStore
from tests.fixtures.factories import CategoryFactory, TaskFactory, reset_all_factories

# Current time used by view-model tests: 2024-01-15 10:00 UTC
NOW = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_factories() -> None:
    """Reset factory counters before each test."""
    reset_all_factories()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings without latency or simulated failures."""
    return Settings(
        task_list_delay_ms=0,
        task_get_delay_ms=0,
        task_create_delay_ms=0,
        task_update_delay_ms=0,
        task_delete_delay_ms=0,
        category_list_delay_ms=0,
        category_get_delay_ms=0,
        category_create_delay_ms=0,
        category_update_delay_ms=0,
        category_delete_delay_ms=0,
        store_failure_rate=0.0,
        log_level="DEBUG",
        log_format="console",
    )


@pytest.fixture
def sample_categories() -> list[Category]:
    return [
        CategoryFactory.create(name="Work", color="#3B82F6", task_count=2, id="cat-work"),
        CategoryFactory.create(name="Personal", color="#10B981", task_count=1, id="cat-personal"),
    ]


@pytest.fixture
def sample_tasks() -> list[Task]:
    return [
        TaskFactory.create(title="Urgent review", category="Work", priority="high", id="t-urgent"),
        TaskFactory.create(title="Buy milk", priority="low", id="t-milk"),
        TaskFactory.create(
            title="Call mom",
            category="Personal",
            due_date="2024-01-14",
            id="t-call",
        ),
        TaskFactory.create(
            title="Write report",
            category="Work",
            completed=True,
            completed_at=NOW.replace(hour=8),
            id="t-report",
        ),
    ]


@pytest.fixture
def task_store(sample_tasks: list[Task]) -> InMemoryTaskStore:
    """Task store with no latency, fixed clock."""
    return InMemoryTaskStore(records=sample_tasks, clock=lambda: NOW)


@pytest.fixture
def category_store(sample_categories: list[Category]) -> InMemoryCategoryStore:
    return InMemoryCategoryStore(records=sample_categories, clock=lambda: NOW)


@pytest.fixture
def notifications() -> NotificationLog:
    return NotificationLog()


@pytest.fixture
def view_model(
    task_store: InMemoryTaskStore,
    category_store: InMemoryCategoryStore,
    notifications: NotificationLog,
) -> TaskViewModel:
    """View-model over the sample stores with a fixed clock, confirming bulk deletes."""
    return TaskViewModel(
        task_store,
        category_store,
        notifier=notifications,
        confirm=lambda count: True,
        clock=lambda: NOW,
    )
