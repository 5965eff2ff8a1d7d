"""In-memory stores with simulated network latency.

Both stores keep their records in a plain list owned by the store instance
and hand out copies, so callers can never mutate store state directly.
"""

import asyncio
import random
import time
from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from taskflow.config import Settings
from taskflow.errors import NotFoundError, TaskFlowError, TransportError, ValidationError
from taskflow.models import Category, RecordModel, Task, normalize_fields
from taskflow.storage.base import CategoryStore, TaskStore
from taskflow.utils.logging import get_logger
from taskflow.utils.metrics import get_metrics

logger = get_logger(__name__)
metrics = get_metrics()

R = TypeVar("R", bound=RecordModel)

IMMUTABLE_FIELDS = ("id", "created_at")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StoreLatency:
    """Artificial per-operation latency, in seconds."""

    list: float = 0.0
    get: float = 0.0
    create: float = 0.0
    update: float = 0.0
    delete: float = 0.0

    @classmethod
    def from_settings(cls, settings: Settings, prefix: str) -> "StoreLatency":
        """Build from the ``<prefix>_<operation>_delay_ms`` settings.

        Args:
            settings: Application settings
            prefix: Settings prefix ("task" or "category")
        """
        return cls(**{
            op: getattr(settings, f"{prefix}_{op}_delay_ms") / 1000
            for op in ("list", "get", "create", "update", "delete")
        })


def reconcile_completion(task: Task, now: datetime) -> Task:
    """Keep ``completed_at`` set exactly while ``completed`` is true.

    A task marked complete without a timestamp is stamped with ``now``;
    an incomplete task always loses its timestamp.
    """
    if not task.completed and task.completed_at is not None:
        return task.model_copy(update={"completed_at": None})
    if task.completed and task.completed_at is None:
        return task.model_copy(update={"completed_at": now})
    return task


class InMemoryStore(Generic[R]):
    """Shared machinery for the in-memory stores.

    Every operation sleeps for its configured latency, may fail with a
    simulated ``TransportError`` and is recorded in metrics. Unexpected
    exceptions surface as ``TransportError``.
    """

    entity = "Record"
    store_name = "records"
    model: type[R]

    def __init__(
        self,
        records: Iterable[R] | None = None,
        latency: StoreLatency | None = None,
        failure_rate: float = 0.0,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the store.

        Args:
            records: Initial records, in list order
            latency: Per-operation latency (none if omitted)
            failure_rate: Probability that a call raises TransportError
            rng: Random source for simulated failures
            clock: Timestamp source for generated fields
        """
        self.latency = latency or StoreLatency()
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()
        self._clock = clock
        self._records: list[R] = [self._normalize(r.model_copy()) for r in records or ()]

        logger.info(
            "store_initialized",
            store=self.store_name,
            record_count=len(self._records),
            failure_rate=failure_rate,
        )

    def __len__(self) -> int:
        return len(self._records)

    @asynccontextmanager
    async def _operation(self, operation: str) -> AsyncIterator[None]:
        start = time.perf_counter()
        status = "error"
        try:
            await asyncio.sleep(getattr(self.latency, operation))
            if self.failure_rate and self._rng.random() < self.failure_rate:
                raise TransportError(f"Simulated {self.store_name} {operation} failure")
            yield
            status = "success"
        except TaskFlowError as e:
            logger.warning(
                "store_operation_failed",
                store=self.store_name,
                operation=operation,
                code=e.code,
                error=e.message,
            )
            raise
        except Exception as e:
            logger.error(
                "store_operation_error",
                store=self.store_name,
                operation=operation,
                error=str(e),
            )
            raise TransportError(f"{self.store_name} {operation} failed: {e}") from e
        finally:
            metrics.record_store_operation(
                store=self.store_name,
                operation=operation,
                status=status,
                duration=time.perf_counter() - start,
            )

    def _normalize(self, record: R) -> R:
        """Hook applied to initial records."""
        return record

    def _index_of(self, record_id: str) -> int:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        raise NotFoundError(self.entity, record_id)

    def _validate(self, data: dict[str, Any]) -> R:
        """Validate a record payload, translating pydantic errors."""
        try:
            return self.model.model_validate(data)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or None
            label = field or "record"
            raise ValidationError(f"Invalid {self.entity.lower()} {label}: {first['msg']}", field=field) from e

    def _merge(self, record_id: str, fields: dict[str, Any]) -> tuple[int, R]:
        """Shallow-merge ``fields`` over the stored record, keeping immutable fields."""
        index = self._index_of(record_id)
        updates = normalize_fields(self.model, fields)
        for name in IMMUTABLE_FIELDS:
            updates.pop(name, None)
        return index, self._validate({**self._records[index].model_dump(), **updates})

    def _new_id(self) -> str:
        return str(uuid4())


class InMemoryTaskStore(InMemoryStore[Task], TaskStore):
    """Task store backed by a process-local list, newest first."""

    entity = "Task"
    store_name = "tasks"
    model = Task

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        tasks: Iterable[Task] | None = None,
    ) -> "InMemoryTaskStore":
        """Create a store configured from settings."""
        return cls(
            records=tasks,
            latency=StoreLatency.from_settings(settings, "task"),
            failure_rate=settings.store_failure_rate,
            rng=random.Random(settings.store_random_seed),
        )

    def _normalize(self, record: Task) -> Task:
        return reconcile_completion(record, self._clock())

    async def list_tasks(self) -> list[Task]:
        async with self._operation("list"):
            return [task.model_copy() for task in self._records]

    async def get_task(self, task_id: str) -> Task:
        async with self._operation("get"):
            return self._records[self._index_of(task_id)].model_copy()

    async def create_task(self, fields: dict[str, Any]) -> Task:
        async with self._operation("create"):
            data = normalize_fields(Task, fields)
            data.setdefault("completed", False)
            data.setdefault("completed_at", None)
            now = self._clock()
            data.update(id=self._new_id(), created_at=now)

            task = reconcile_completion(self._validate(data), now)
            self._records.insert(0, task)

            logger.info("task_created", task_id=task.id, priority=task.priority)
            return task.model_copy()

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        async with self._operation("update"):
            index, merged = self._merge(task_id, fields)
            task = reconcile_completion(merged, self._clock())
            self._records[index] = task

            logger.info("task_updated", task_id=task_id, fields=sorted(fields))
            return task.model_copy()

    async def delete_task(self, task_id: str) -> bool:
        async with self._operation("delete"):
            del self._records[self._index_of(task_id)]
            logger.info("task_deleted", task_id=task_id)
            return True


class InMemoryCategoryStore(InMemoryStore[Category], CategoryStore):
    """Category store backed by a process-local list, in insertion order.

    ``task_count`` is reset to 0 on create and otherwise only changes when
    a caller updates it.
    """

    entity = "Category"
    store_name = "categories"
    model = Category

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        categories: Iterable[Category] | None = None,
    ) -> "InMemoryCategoryStore":
        """Create a store configured from settings."""
        return cls(
            records=categories,
            latency=StoreLatency.from_settings(settings, "category"),
            failure_rate=settings.store_failure_rate,
            rng=random.Random(settings.store_random_seed),
        )

    async def list_categories(self) -> list[Category]:
        async with self._operation("list"):
            return [category.model_copy() for category in self._records]

    async def get_category(self, category_id: str) -> Category:
        async with self._operation("get"):
            return self._records[self._index_of(category_id)].model_copy()

    async def create_category(self, fields: dict[str, Any]) -> Category:
        async with self._operation("create"):
            data = normalize_fields(Category, fields)
            data.update(id=self._new_id(), task_count=0)
            category = self._validate(data)
            self._records.append(category)

            logger.info("category_created", category_id=category.id, name=category.name)
            return category.model_copy()

    async def update_category(self, category_id: str, fields: dict[str, Any]) -> Category:
        async with self._operation("update"):
            index, category = self._merge(category_id, fields)
            self._records[index] = category

            logger.info("category_updated", category_id=category_id, fields=sorted(fields))
            return category.model_copy()

    async def delete_category(self, category_id: str) -> bool:
        async with self._operation("delete"):
            del self._records[self._index_of(category_id)]
            logger.info("category_deleted", category_id=category_id)
            return True
