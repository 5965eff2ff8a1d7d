"""Task view-model: derived view state plus the mutation contract.

The view-model owns a local copy of the task and category lists loaded
from the stores. Reads (filtering, ordering, display attributes, stats)
are pure derivations of that copy; writes go to the stores first and are
mirrored locally only for the parts that succeeded, so a failed call never
corrupts what is already rendered.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from taskflow.core.bulk import BulkResult, fan_out
from taskflow.core.display import (
    category_color,
    due_date_urgency,
    priority_style_class,
    urgency_style_class,
)
from taskflow.core.filters import ALL_CATEGORIES, filter_tasks, sort_tasks
from taskflow.core.notifications import Notification, NotificationLevel, NotificationLog, Notifier
from taskflow.core.stats import TaskStats, compute_stats
from taskflow.errors import ValidationError
from taskflow.models import DEFAULT_CATEGORY_COLOR, Category, Task, TaskFormData, UrgencyClass
from taskflow.storage.base import CategoryStore, TaskStore
from taskflow.utils.clock import Clock, local_now
from taskflow.utils.logging import get_logger
from taskflow.utils.metrics import get_metrics

logger = get_logger(__name__)
metrics = get_metrics()

Confirmer = Callable[[int], bool | Awaitable[bool]]


class LoadState(str, Enum):
    """Lifecycle of the initial data load."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class TaskRow:
    """A task with the attributes needed to render it."""

    task: Task
    priority_class: str
    category_color: str
    urgency: UrgencyClass | None
    """None when the task has no due date (no badge)."""

    urgency_class: str | None

    selected: bool


@dataclass(frozen=True)
class EmptyState:
    """Message shown when the filtered list is empty."""

    title: str
    description: str
    show_create_button: bool


@dataclass(frozen=True)
class TaskListView:
    """Everything the rendering layer needs for one frame."""

    load_state: LoadState
    error: str | None
    rows: list[TaskRow]
    stats: TaskStats
    empty_state: EmptyState | None
    category_options: list[tuple[str, str]]
    bulk_mode: bool
    selected_count: int


class TaskViewModel:
    """Derives view state from the stores and turns user intents into store calls.

    Provides:
    - Loading with an explicit error state and retry
    - Search and category filtering, display ordering, per-task attributes
    - Aggregate statistics over all tasks
    - Toggle, create/update, delete and concurrent bulk mutations
    - Bulk selection and edit-form state
    """

    def __init__(
        self,
        task_store: TaskStore,
        category_store: CategoryStore,
        notifier: Notifier | None = None,
        confirm: Confirmer | None = None,
        clock: Clock = local_now,
        fallback_color: str = DEFAULT_CATEGORY_COLOR,
    ) -> None:
        """Initialize the view-model.

        Args:
            task_store: Task store
            category_store: Category store
            notifier: Receives success/error notifications (in-memory log if None)
            confirm: Asked before bulk deletes with the number of tasks;
                bulk deletes are refused when no confirmer is given
            clock: Source of the current time
            fallback_color: Category color when no category matches
        """
        self.task_store = task_store
        self.category_store = category_store
        self.notifier: Notifier = notifier or NotificationLog()
        self.confirm = confirm
        self.clock = clock
        self.fallback_color = fallback_color

        # Loaded data
        self.tasks: list[Task] = []
        self.categories: list[Category] = []
        self.load_state = LoadState.IDLE
        self.error: str | None = None

        # Filters
        self.search_query = ""
        self.selected_category = ALL_CATEGORIES

        # Bulk selection
        self.bulk_mode = False
        self.selected_ids: set[str] = set()

        # Edit form
        self.form = TaskFormData()
        self.form_open = False
        self.editing_task_id: str | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """Fetch tasks and categories concurrently.

        Returns:
            True when both loaded; on failure the view-model enters the
            ERROR state and keeps its previous lists
        """
        self.load_state = LoadState.LOADING
        self.error = None
        try:
            tasks, categories = await asyncio.gather(
                self.task_store.list_tasks(),
                self.category_store.list_categories(),
            )
        except Exception as e:
            self.load_state = LoadState.ERROR
            self.error = getattr(e, "message", None) or str(e) or "Failed to load data"
            logger.error("view_model_load_failed", error=self.error)
            metrics.record_load("error")
            self._notify(NotificationLevel.ERROR, "Failed to load tasks")
            return False

        self.tasks = tasks
        self.categories = categories
        self.load_state = LoadState.READY
        metrics.record_load("success")
        logger.info("view_model_loaded", task_count=len(tasks), category_count=len(categories))
        return True

    async def retry(self) -> bool:
        """Re-run the full load after a failure."""
        return await self.load()

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def set_search_query(self, query: str) -> None:
        self.search_query = query

    def set_selected_category(self, category: str) -> None:
        self.selected_category = category

    @property
    def filters_active(self) -> bool:
        return bool(self.search_query) or self.selected_category != ALL_CATEGORIES

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def filtered_tasks(self) -> list[Task]:
        return filter_tasks(self.tasks, self.search_query, self.selected_category)

    @property
    def sorted_tasks(self) -> list[Task]:
        """Filtered tasks in display order."""
        return sort_tasks(self.filtered_tasks)

    def category_color(self, category_name: str | None) -> str:
        return category_color(category_name, self.categories, self.fallback_color)

    def urgency(self, task: Task, now: datetime | None = None) -> UrgencyClass | None:
        if task.due_date is None:
            return None
        return due_date_urgency(task.due_date, task.completed, now or self.clock())

    def stats(self, now: datetime | None = None) -> TaskStats:
        """Statistics over all loaded tasks, ignoring filters."""
        return compute_stats(self.tasks, now or self.clock())

    def empty_state(self) -> EmptyState:
        if self.filters_active:
            return EmptyState(
                title="No tasks found",
                description="Try adjusting your search or filter criteria.",
                show_create_button=False,
            )
        return EmptyState(
            title="No tasks yet",
            description="Start organizing your day by creating your first task.",
            show_create_button=True,
        )

    def category_options(self) -> list[tuple[str, str]]:
        """(value, label) pairs for the category filter."""
        return [(ALL_CATEGORIES, "All Categories")] + [
            (category.name, f"{category.name} ({category.task_count})")
            for category in self.categories
        ]

    def rows(self, now: datetime | None = None) -> list[TaskRow]:
        """Sorted, filtered tasks annotated for rendering."""
        now = now or self.clock()
        return [self._row(task, now) for task in self.sorted_tasks]

    def _row(self, task: Task, now: datetime) -> TaskRow:
        urgency = self.urgency(task, now)
        return TaskRow(
            task=task,
            priority_class=priority_style_class(task.priority),
            category_color=self.category_color(task.category),
            urgency=urgency,
            urgency_class=urgency_style_class(urgency) if urgency else None,
            selected=task.id in self.selected_ids,
        )

    def snapshot(self) -> TaskListView:
        """Derive the complete view state at a single instant."""
        now = self.clock()
        rows = self.rows(now)
        return TaskListView(
            load_state=self.load_state,
            error=self.error,
            rows=rows,
            stats=self.stats(now),
            empty_state=None if rows else self.empty_state(),
            category_options=self.category_options(),
            bulk_mode=self.bulk_mode,
            selected_count=len(self.selected_ids),
        )

    # ------------------------------------------------------------------
    # Bulk selection
    # ------------------------------------------------------------------

    def enter_bulk_mode(self) -> None:
        self.bulk_mode = True

    def cancel_bulk_mode(self) -> None:
        """Leave bulk mode and drop the selection."""
        self.bulk_mode = False
        self.selected_ids = set()

    def toggle_selection(self, task_id: str, selected: bool | None = None) -> None:
        """Add or remove a task from the selection.

        Args:
            task_id: Task to (de)select
            selected: Desired state; flips the current state if None
        """
        if selected is None:
            selected = task_id not in self.selected_ids
        if selected:
            self.selected_ids.add(task_id)
        else:
            self.selected_ids.discard(task_id)

    # ------------------------------------------------------------------
    # Edit form
    # ------------------------------------------------------------------

    def begin_create(self) -> None:
        self.form = TaskFormData()
        self.editing_task_id = None
        self.form_open = True

    def begin_edit(self, task: Task) -> None:
        """Open the form prefilled with ``task``."""
        self.form = TaskFormData.from_task(task)
        self.editing_task_id = task.id
        self.form_open = True

    def reset_form(self) -> None:
        self.form = TaskFormData()
        self.editing_task_id = None
        self.form_open = False

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def toggle_complete(self, task: Task) -> Task | None:
        """Flip completion of ``task`` and persist it.

        Returns:
            The stored task, or None if the store call failed
        """
        completing = not task.completed
        fields: dict[str, Any] = {
            "completed": completing,
            "completed_at": self.clock() if completing else None,
        }
        try:
            updated = await self.task_store.update_task(task.id, fields)
        except Exception as e:
            logger.error("toggle_complete_failed", task_id=task.id, error=str(e))
            self._notify(NotificationLevel.ERROR, "Failed to update task")
            return None

        self._replace_local(updated)
        if completing:
            self._notify(NotificationLevel.SUCCESS, "Task completed!")
        return updated

    async def create_or_update(
        self,
        form: TaskFormData,
        editing_task_id: str | None = None,
    ) -> Task | None:
        """Persist form values as a new task or over an existing one.

        Args:
            form: Form values; an empty due date is stored as None. Saving
                always leaves the task incomplete, so editing reopens it
            editing_task_id: Task to update; creates a task if None

        Returns:
            The stored task, or None if the store call failed

        Raises:
            ValidationError: If the title is blank (no store call is made)
        """
        if not form.title.strip():
            raise ValidationError("Task title is required", field="title")

        fields = {**form.to_fields(), "completed": False}
        try:
            if editing_task_id:
                task = await self.task_store.update_task(editing_task_id, fields)
            else:
                task = await self.task_store.create_task(fields)
        except Exception as e:
            logger.error("save_task_failed", task_id=editing_task_id, error=str(e))
            self._notify(NotificationLevel.ERROR, "Failed to save task")
            return None

        if editing_task_id:
            self._replace_local(task)
            self._notify(NotificationLevel.SUCCESS, "Task updated successfully")
        else:
            self.tasks = [task, *self.tasks]
            self._notify(NotificationLevel.SUCCESS, "Task created successfully")
        return task

    async def submit_form(self) -> Task | None:
        """Save the current form; closes and resets it on success."""
        task = await self.create_or_update(self.form, self.editing_task_id)
        if task is not None:
            self.reset_form()
        return task

    async def delete_task(self, task_id: str) -> bool:
        try:
            await self.task_store.delete_task(task_id)
        except Exception as e:
            logger.error("delete_task_failed", task_id=task_id, error=str(e))
            self._notify(NotificationLevel.ERROR, "Failed to delete task")
            return False

        self._remove_local({task_id})
        self._notify(NotificationLevel.SUCCESS, "Task deleted")
        return True

    async def bulk_complete(self, task_ids: Iterable[str] | None = None) -> BulkResult[Task]:
        """Mark tasks complete concurrently.

        Args:
            task_ids: Tasks to complete (current selection if None)

        Returns:
            Per-task outcomes; successes stay applied even if others failed.
            Empty when there is nothing to complete
        """
        ids = list(self.selected_ids if task_ids is None else task_ids)
        if not ids:
            return BulkResult()
        completed_at = self.clock()

        result = await fan_out(
            ids,
            lambda task_id: self.task_store.update_task(
                task_id, {"completed": True, "completed_at": completed_at}
            ),
        )

        for task in result.succeeded.values():
            self._replace_local(task)
        self._finish_bulk("complete", result, "tasks completed!", "Failed to complete tasks")
        return result

    async def bulk_delete(self, task_ids: Iterable[str] | None = None) -> BulkResult[bool] | None:
        """Delete tasks concurrently after confirmation.

        Args:
            task_ids: Tasks to delete (current selection if None)

        Returns:
            Per-task outcomes, or None if the deletion was not confirmed
        """
        ids = list(self.selected_ids if task_ids is None else task_ids)
        if not ids:
            return BulkResult()
        if not await self._confirm(len(ids)):
            logger.info("bulk_delete_not_confirmed", count=len(ids))
            return None

        result = await fan_out(ids, self.task_store.delete_task)

        self._remove_local(set(result.succeeded))
        self._finish_bulk("delete", result, "tasks deleted", "Failed to delete tasks")
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _finish_bulk(
        self,
        operation: str,
        result: BulkResult[Any],
        success_suffix: str,
        failure_message: str,
    ) -> None:
        """Update selection, metrics and notifications after a bulk call."""
        metrics.record_bulk_operation(operation, result.status, result.total)
        self.selected_ids -= set(result.succeeded)

        if result.ok:
            self.bulk_mode = False
            self.selected_ids = set()
            logger.info("bulk_operation_completed", operation=operation, count=result.total)
            self._notify(NotificationLevel.SUCCESS, f"{len(result.succeeded)} {success_suffix}")
            return

        logger.warning(
            "bulk_operation_failed",
            operation=operation,
            succeeded=len(result.succeeded),
            failed=len(result.failed),
            errors={task_id: str(e) for task_id, e in result.failed.items()},
        )
        self._notify(NotificationLevel.ERROR, failure_message)

    async def _confirm(self, count: int) -> bool:
        if self.confirm is None:
            return False
        answer = self.confirm(count)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    def _replace_local(self, updated: Task) -> None:
        self.tasks = [updated if t.id == updated.id else t for t in self.tasks]

    def _remove_local(self, task_ids: set[str]) -> None:
        self.tasks = [t for t in self.tasks if t.id not in task_ids]
        self.selected_ids -= task_ids

    def _notify(self, level: NotificationLevel, message: str) -> None:
        self.notifier.notify(Notification(level=level, message=message))
