"""Seed documents for the in-memory stores."""

import json
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from taskflow.config import Settings
from taskflow.errors import ValidationError
from taskflow.models import Category, Task
from taskflow.storage.memory import InMemoryCategoryStore, InMemoryTaskStore
from taskflow.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SeedData:
    """Initial records for both stores."""

    tasks: list[Task] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)


def parse_seed(document: dict[str, Any]) -> SeedData:
    """Validate a seed document.

    Args:
        document: Mapping with optional "tasks" and "categories" lists,
            keyed in camelCase or snake_case

    Returns:
        Validated seed records

    Raises:
        ValidationError: If any record is invalid
    """
    try:
        return SeedData(
            tasks=[Task.model_validate(t) for t in document.get("tasks", [])],
            categories=[Category.model_validate(c) for c in document.get("categories", [])],
        )
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid seed document: {e.errors()[0]['msg']}") from e


def load_seed(path: str | Path | None = None) -> SeedData:
    """Load a seed document from ``path`` or the bundled sample data."""
    if path is None:
        text = resources.files("taskflow").joinpath("data/seed.json").read_text(encoding="utf-8")
        source = "bundled"
    else:
        text = Path(path).expanduser().read_text(encoding="utf-8")
        source = str(path)

    seed = parse_seed(json.loads(text))
    logger.info(
        "seed_loaded",
        source=source,
        task_count=len(seed.tasks),
        category_count=len(seed.categories),
    )
    return seed


def build_stores(
    settings: Settings,
    seed: SeedData | None = None,
) -> tuple[InMemoryTaskStore, InMemoryCategoryStore]:
    """Construct both stores for the lifetime of the application.

    Args:
        settings: Application settings (latency, failure rate, seed file)
        seed: Records to start with; loaded from settings.seed_file or the
            bundled sample data if omitted

    Returns:
        Tuple of (task_store, category_store)
    """
    seed = seed if seed is not None else load_seed(settings.seed_file)
    return (
        InMemoryTaskStore.from_settings(settings, seed.tasks),
        InMemoryCategoryStore.from_settings(settings, seed.categories),
    )
