"""View-model pipeline: filtering, ordering, display attributes, stats, mutations."""

from taskflow.core.bulk import BulkResult, fan_out
from taskflow.core.display import (
    PRIORITY_STYLE_CLASSES,
    UNKNOWN_PRIORITY_STYLE_CLASS,
    URGENCY_STYLE_CLASSES,
    category_color,
    due_date_urgency,
    priority_style_class,
    urgency_style_class,
)
from taskflow.core.filters import (
    ALL_CATEGORIES,
    PRIORITY_WEIGHTS,
    compare_tasks,
    filter_tasks,
    priority_weight,
    sort_tasks,
)
from taskflow.core.notifications import Notification, NotificationLevel, NotificationLog, Notifier
from taskflow.core.stats import TaskStats, completion_rate, compute_stats
from taskflow.core.view_model import (
    EmptyState,
    LoadState,
    TaskListView,
    TaskRow,
    TaskViewModel,
)

__all__ = [
    # Bulk
    "BulkResult",
    "fan_out",
    # Display
    "PRIORITY_STYLE_CLASSES",
    "UNKNOWN_PRIORITY_STYLE_CLASS",
    "URGENCY_STYLE_CLASSES",
    "category_color",
    "due_date_urgency",
    "priority_style_class",
    "urgency_style_class",
    # Filters
    "ALL_CATEGORIES",
    "PRIORITY_WEIGHTS",
    "compare_tasks",
    "filter_tasks",
    "priority_weight",
    "sort_tasks",
    # Notifications
    "Notification",
    "NotificationLevel",
    "NotificationLog",
    "Notifier",
    # Stats
    "TaskStats",
    "completion_rate",
    "compute_stats",
    # View-model
    "EmptyState",
    "LoadState",
    "TaskListView",
    "TaskRow",
    "TaskViewModel",
]
