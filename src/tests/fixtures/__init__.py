"""Test fixtures including task and category data factories."""

from tests.fixtures.factories import (
    CategoryFactory,
    RecordFactory,
    TaskFactory,
    reset_all_factories,
)

__all__ = [
    "RecordFactory",
    "TaskFactory",
    "CategoryFactory",
    "reset_all_factories",
]
