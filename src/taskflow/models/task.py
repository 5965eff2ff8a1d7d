"""Task record and edit-form payload."""

from datetime import date, datetime, timezone
from typing import Any

from pydantic import Field, field_validator

from taskflow.models.base import Priority, RecordModel


class Task(RecordModel):
    """A to-do item.

    ``completed_at`` is set exactly while ``completed`` is true. Stores
    enforce this on every create and update; see
    ``taskflow.storage.memory.reconcile_completion``.
    """

    # Identity
    id: str = Field(..., min_length=1, description="Unique task identifier, immutable")

    # Content
    title: str = Field(..., min_length=1, description="Non-blank task title")
    category: str | None = Field(default=None, description="Category name (join by name)")
    priority: Priority = Field(default=Priority.MEDIUM, description="Task priority")
    due_date: date | None = Field(default=None, description="Optional calendar due date")

    # Completion
    completed: bool = Field(default=False, description="Completion flag")
    completed_at: datetime | None = Field(default=None, description="Completion timestamp")

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp, immutable",
    )

    @field_validator("category", mode="before")
    @classmethod
    def blank_category_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def coerce_due_date(cls, v: Any) -> Any:
        """Accept empty strings as "no due date" and drop time components."""
        if isinstance(v, str) and not v.strip():
            return None
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        return v

    @field_validator("created_at", "completed_at")
    @classmethod
    def naive_timestamps_are_utc(cls, v: datetime | None) -> datetime | None:
        """Treat timestamps without an offset as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class TaskFormData(RecordModel):
    """Values held by the task create/edit form.

    ``due_date`` stays a raw string because the form field may be empty.
    """

    title: str = ""
    category: str = ""
    priority: Priority = Priority.MEDIUM
    due_date: str = ""

    @classmethod
    def from_task(cls, task: Task) -> "TaskFormData":
        """Prefill the form from an existing task."""
        return cls(
            title=task.title,
            category=task.category or "",
            priority=task.priority,
            due_date=task.due_date.isoformat() if task.due_date else "",
        )

    def to_fields(self) -> dict[str, Any]:
        """Build the store payload, normalizing empty strings to None."""
        return {
            "title": self.title,
            "category": self.category or None,
            "priority": self.priority,
            "due_date": self.due_date or None,
        }
