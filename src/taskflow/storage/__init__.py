"""Task and category stores."""

from taskflow.storage.base import CategoryStore, TaskStore
from taskflow.storage.memory import (
    InMemoryCategoryStore,
    InMemoryTaskStore,
    StoreLatency,
    reconcile_completion,
)
from taskflow.storage.seed import SeedData, build_stores, load_seed, parse_seed

__all__ = [
    "TaskStore",
    "CategoryStore",
    "InMemoryTaskStore",
    "InMemoryCategoryStore",
    "StoreLatency",
    "reconcile_completion",
    "SeedData",
    "build_stores",
    "load_seed",
    "parse_seed",
]
