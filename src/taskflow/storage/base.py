"""Abstract store contracts consumed by the view-model."""

from abc import ABC, abstractmethod
from typing import Any

from taskflow.models import Category, Task


class TaskStore(ABC):
    """Async CRUD contract over task records.

    Implementations may suspend on every call and may raise
    ``TransportError`` for failures they cannot classify.
    """

    @abstractmethod
    async def list_tasks(self) -> list[Task]:
        """
        Get a snapshot of all tasks.

        Returns:
            Tasks, most recently created first.
        """

    @abstractmethod
    async def get_task(self, task_id: str) -> Task:
        """
        Get a task by its ID.

        Raises:
            NotFoundError: If no task has this ID.
        """

    @abstractmethod
    async def create_task(self, fields: dict[str, Any]) -> Task:
        """
        Create a task with a generated ID and creation timestamp.

        Args:
            fields: Task fields; ``completed`` defaults to False.

        Raises:
            ValidationError: If the title is blank or a field is invalid.
        """

    @abstractmethod
    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        """
        Shallow-merge ``fields`` over an existing task.

        Raises:
            NotFoundError: If no task has this ID.
            ValidationError: If the merged record is invalid.
        """

    @abstractmethod
    async def delete_task(self, task_id: str) -> bool:
        """
        Delete a task by its ID.

        Raises:
            NotFoundError: If no task has this ID.
        """


class CategoryStore(ABC):
    """Async CRUD contract over category records."""

    @abstractmethod
    async def list_categories(self) -> list[Category]:
        """Get a snapshot of all categories in insertion order."""

    @abstractmethod
    async def get_category(self, category_id: str) -> Category:
        """Get a category by its ID."""

    @abstractmethod
    async def create_category(self, fields: dict[str, Any]) -> Category:
        """Create a category; ``task_count`` always starts at 0."""

    @abstractmethod
    async def update_category(self, category_id: str, fields: dict[str, Any]) -> Category:
        """Shallow-merge ``fields`` over an existing category."""

    @abstractmethod
    async def delete_category(self, category_id: str) -> bool:
        """Delete a category. Tasks referencing its name are untouched."""
