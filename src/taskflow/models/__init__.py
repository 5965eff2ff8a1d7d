"""Data models for tasks and categories."""

from taskflow.models.base import Priority, RecordModel, UrgencyClass, normalize_fields
from taskflow.models.category import DEFAULT_CATEGORY_COLOR, Category
from taskflow.models.task import Task, TaskFormData

__all__ = [
    # Base
    "Priority",
    "RecordModel",
    "UrgencyClass",
    "normalize_fields",
    # Records
    "Task",
    "TaskFormData",
    "Category",
    "DEFAULT_CATEGORY_COLOR",
]
