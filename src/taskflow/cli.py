"""Command-line front end for the task view-model.

Every invocation builds fresh in-memory stores from a seed document, loads
the view-model and prints the derived state as JSON.

Usage:
    taskflow tasks --search report --category Work
    taskflow stats
    taskflow categories
    taskflow complete 1 4
    taskflow metrics
    taskflow init-config
"""

import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from dataclasses import asdict
from pathlib import Path
from typing import Any, TypeVar

import click
from prometheus_client import generate_latest

from taskflow import __version__
from taskflow.config import Settings, get_config_path, load_settings_with_toml
from taskflow.core import ALL_CATEGORIES, LoadState, TaskRow, TaskViewModel
from taskflow.errors import BulkOperationError
from taskflow.storage import build_stores
from taskflow.utils.logging import setup_logging

T = TypeVar("T")

DEFAULT_CONFIG_TOML = """\
# TaskFlow configuration

[task_store]
list_delay_ms = 300
get_delay_ms = 200
create_delay_ms = 300
update_delay_ms = 300
delete_delay_ms = 250

[category_store]
list_delay_ms = 250

[store]
failure_rate = 0.0
# seed_file = "~/tasks.json"

[display]
fallback_category_color = "#8B5CF6"

[logging]
level = "WARNING"
format = "console"
"""


def row_to_payload(row: TaskRow) -> dict[str, Any]:
    """Convert a rendered row to a JSON-compatible dictionary."""
    return {
        **row.task.to_payload(),
        "priorityClass": row.priority_class,
        "categoryColor": row.category_color,
        "urgency": row.urgency.value if row.urgency else None,
        "urgencyClass": row.urgency_class,
        "selected": row.selected,
    }


def run_with_view_model(
    settings: Settings,
    action: Callable[[TaskViewModel], Awaitable[T]],
) -> T:
    """Build stores, load a view-model and run ``action`` against it.

    Raises:
        click.ClickException: If the initial load fails
    """

    async def _run() -> T:
        task_store, category_store = build_stores(settings)
        view_model = TaskViewModel(
            task_store,
            category_store,
            confirm=lambda count: True,
            fallback_color=settings.fallback_category_color,
        )
        await view_model.load()
        if view_model.load_state == LoadState.ERROR:
            raise click.ClickException(f"Failed to load tasks: {view_model.error}")
        return await action(view_model)

    return asyncio.run(_run())


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


@click.group()
@click.version_option(__version__, prog_name="taskflow")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/taskflow/config.toml)",
)
@click.option("--seed", "seed_file", type=click.Path(exists=True, dir_okay=False), help="JSON seed document")
@click.option("--no-latency", is_flag=True, help="Disable simulated store latency")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    config_path: Path | None,
    seed_file: str | None,
    no_latency: bool,
) -> None:
    """TaskFlow - inspect the task view-model from the command line."""
    overrides: dict[str, Any] = {"seed_file": seed_file}
    if verbose:
        overrides["log_level"] = "DEBUG"
    if no_latency:
        for prefix in ("task", "category"):
            for op in ("list", "get", "create", "update", "delete"):
                overrides[f"{prefix}_{op}_delay_ms"] = 0

    settings = load_settings_with_toml(config_path, **overrides)
    setup_logging(settings, use_stderr=True)
    ctx.obj = settings


@cli.command()
@click.option("--search", "-s", default="", help="Case-insensitive title/category search")
@click.option("--category", "-c", default=ALL_CATEGORIES, show_default=True, help="Category name filter")
@click.pass_obj
def tasks(settings: Settings, search: str, category: str) -> None:
    """Print tasks in display order with their display attributes."""

    async def _tasks(view_model: TaskViewModel) -> dict[str, Any]:
        view_model.set_search_query(search)
        view_model.set_selected_category(category)
        view = view_model.snapshot()
        return {
            "tasks": [row_to_payload(row) for row in view.rows],
            "emptyState": asdict(view.empty_state) if view.empty_state else None,
        }

    echo_json(run_with_view_model(settings, _tasks))


@cli.command()
@click.pass_obj
def stats(settings: Settings) -> None:
    """Print completion statistics over all tasks."""

    async def _stats(view_model: TaskViewModel) -> dict[str, Any]:
        return asdict(view_model.stats())

    echo_json(run_with_view_model(settings, _stats))


@cli.command()
@click.pass_obj
def categories(settings: Settings) -> None:
    """Print category filter options."""

    async def _categories(view_model: TaskViewModel) -> list[dict[str, str]]:
        return [{"value": value, "label": label} for value, label in view_model.category_options()]

    echo_json(run_with_view_model(settings, _categories))


@cli.command()
@click.argument("task_ids", nargs=-1, required=True)
@click.pass_obj
def complete(settings: Settings, task_ids: tuple[str, ...]) -> None:
    """Complete TASK_IDS concurrently and print the resulting statistics.

    Exits non-zero if any task could not be completed; the others stay
    completed.
    """

    async def _complete(view_model: TaskViewModel) -> dict[str, Any]:
        result = await view_model.bulk_complete(task_ids)
        try:
            result.raise_for_failures("complete")
        except BulkOperationError as e:
            failures = ", ".join(f"{task_id}: {err}" for task_id, err in e.result.failed.items())
            raise click.ClickException(f"{e.message} ({failures})") from e
        return {"completed": sorted(result.succeeded), "stats": asdict(view_model.stats())}

    echo_json(run_with_view_model(settings, _complete))


@cli.command()
@click.pass_obj
def metrics(settings: Settings) -> None:
    """Load the view-model once and print Prometheus metrics."""

    async def _noop(view_model: TaskViewModel) -> None:
        return None

    run_with_view_model(settings, _noop)
    click.echo(generate_latest().decode("utf-8"))


@cli.command("init-config")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.option(
    "--path",
    "target",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the config (default: ~/.config/taskflow/config.toml)",
)
def init_config(force: bool, target: Path | None) -> None:
    """Write a default configuration file."""
    target = target or get_config_path()
    if target.exists() and not force:
        click.echo(f"Config already exists at {target} (use --force to overwrite)", err=True)
        sys.exit(1)

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_CONFIG_TOML, encoding="utf-8")
    click.echo(f"Wrote config to {target}")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
