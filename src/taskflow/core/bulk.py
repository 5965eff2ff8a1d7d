"""Concurrent fan-out for bulk operations with partial-success results."""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from taskflow.errors import BulkOperationError

T = TypeVar("T")


@dataclass
class BulkResult(Generic[T]):
    """Per-item outcomes of a bulk operation.

    Successful items stay applied even when others failed; nothing is
    rolled back.
    """

    succeeded: dict[str, T] = field(default_factory=dict)
    failed: dict[str, Exception] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def status(self) -> str:
        """Metrics label: success, partial or error."""
        if not self.failed:
            return "success"
        return "partial" if self.succeeded else "error"

    def raise_for_failures(self, operation: str) -> None:
        """Raise BulkOperationError if any item failed."""
        if self.failed:
            raise BulkOperationError(operation, self)


async def fan_out(
    ids: Iterable[str],
    operation: Callable[[str], Awaitable[T]],
) -> BulkResult[T]:
    """Start ``operation`` for every id at once and wait for all of them.

    Args:
        ids: Item ids, duplicates ignored
        operation: Coroutine function applied to each id

    Returns:
        BulkResult collecting every individual outcome
    """
    unique_ids = list(dict.fromkeys(ids))
    outcomes = await asyncio.gather(
        *(operation(item_id) for item_id in unique_ids),
        return_exceptions=True,
    )

    result: BulkResult[T] = BulkResult()
    for item_id, outcome in zip(unique_ids, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            result.failed[item_id] = outcome
        else:
            result.succeeded[item_id] = outcome
    return result
