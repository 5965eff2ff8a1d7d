"""Per-task display attributes derived for the rendering layer."""

from collections.abc import Iterable
from datetime import date, datetime

from taskflow.models import DEFAULT_CATEGORY_COLOR, Category, UrgencyClass
from taskflow.utils.clock import local_now

PRIORITY_STYLE_CLASSES: dict[str, str] = {
    "high": "text-error bg-error/10 border-error/20",
    "medium": "text-accent bg-accent/10 border-accent/20",
    "low": "text-info bg-info/10 border-info/20",
}
UNKNOWN_PRIORITY_STYLE_CLASS = "text-gray-500 bg-gray-100 border-gray-200"

URGENCY_STYLE_CLASSES: dict[UrgencyClass, str] = {
    UrgencyClass.OVERDUE: "bg-error/10 text-error border border-error/20",
    UrgencyClass.DUE_TODAY: "bg-accent/10 text-accent border border-accent/20",
    UrgencyClass.NORMAL: "bg-gray-100 text-gray-600 border border-gray-200",
}


def priority_style_class(priority: str) -> str:
    """Style token for a priority badge."""
    return PRIORITY_STYLE_CLASSES.get(priority, UNKNOWN_PRIORITY_STYLE_CLASS)


def urgency_style_class(urgency: UrgencyClass) -> str:
    """Style token for a due-date badge."""
    return URGENCY_STYLE_CLASSES[UrgencyClass(urgency)]


def category_color(
    category_name: str | None,
    categories: Iterable[Category],
    fallback: str = DEFAULT_CATEGORY_COLOR,
) -> str:
    """Color of the first category whose name equals ``category_name``.

    Args:
        category_name: Task category name (case-sensitive)
        categories: Known categories
        fallback: Color when nothing matches or the match has no color

    Returns:
        Hex color string
    """
    for category in categories:
        if category.name == category_name:
            return category.color or fallback
    return fallback


def due_date_urgency(
    due_date: date,
    completed: bool,
    now: datetime | None = None,
) -> UrgencyClass:
    """Classify a due date against the current calendar day.

    Only call this for tasks that have a due date; tasks without one get no
    badge at all.

    Args:
        due_date: Task due date
        completed: Whether the task is completed
        now: Current time (local now if omitted)

    Returns:
        OVERDUE for an incomplete task due before today, DUE_TODAY for a
        task due today, NORMAL otherwise
    """
    today = (now or local_now()).date()
    if due_date < today and not completed:
        return UrgencyClass.OVERDUE
    if due_date == today:
        return UrgencyClass.DUE_TODAY
    return UrgencyClass.NORMAL
