"""Configuration management using pydantic-settings.

Configuration is loaded with the following precedence:
1. CLI arguments (highest priority)
2. Environment variables (TASKFLOW_* prefix)
3. Global config file (~/.config/taskflow/config.toml)
4. Built-in defaults (lowest priority)
"""

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_config_path() -> Path:
    """Get the global config file path (XDG compliant).

    Returns:
        Path to config file:
        - Linux/macOS: ~/.config/taskflow/config.toml
        - Windows: %APPDATA%/taskflow/config.toml
    """
    if os.name == "nt":  # Windows
        base = Path(os.environ.get("APPDATA", Path.home()))
    else:  # Linux/macOS
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "taskflow" / "config.toml"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Environment variables use the TASKFLOW_ prefix:
    - TASKFLOW_LOG_LEVEL
    - TASKFLOW_TASK_LIST_DELAY_MS
    - TASKFLOW_STORE_FAILURE_RATE
    etc.
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Task store latency, milliseconds
    task_list_delay_ms: int = Field(default=300, ge=0, description="Latency of listing tasks")
    task_get_delay_ms: int = Field(default=200, ge=0, description="Latency of fetching one task")
    task_create_delay_ms: int = Field(default=300, ge=0, description="Latency of creating a task")
    task_update_delay_ms: int = Field(default=300, ge=0, description="Latency of updating a task")
    task_delete_delay_ms: int = Field(default=250, ge=0, description="Latency of deleting a task")

    # Category store latency, milliseconds
    category_list_delay_ms: int = Field(default=250, ge=0, description="Latency of listing categories")
    category_get_delay_ms: int = Field(default=200, ge=0, description="Latency of fetching one category")
    category_create_delay_ms: int = Field(default=300, ge=0, description="Latency of creating a category")
    category_update_delay_ms: int = Field(default=300, ge=0, description="Latency of updating a category")
    category_delete_delay_ms: int = Field(default=250, ge=0, description="Latency of deleting a category")

    # Simulated transport failures
    store_failure_rate: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Probability that any store call raises TransportError",
    )
    store_random_seed: int | None = Field(default=None, description="Seed for simulated failures")

    # Seed data
    seed_file: str | None = Field(default=None, description="JSON seed document for the stores")

    # Presentation
    fallback_category_color: str = Field(
        default="#8B5CF6",
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Badge color when no category matches",
    )

    # Logging Configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )
    log_file: str | None = Field(default=None, description="Log file path (optional)")


def load_toml_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        path: Path to config file (uses default if None)

    Returns:
        Configuration dictionary (empty if file doesn't exist)
    """
    config_path = path or get_config_path()
    if config_path.exists():
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    return {}


def flatten_toml_config(toml_config: dict[str, Any]) -> dict[str, Any]:
    """Flatten nested TOML config to flat dictionary for Settings.

    Args:
        toml_config: Nested TOML configuration

    Returns:
        Flattened configuration dictionary
    """
    overrides: dict[str, Any] = {}

    for section in ("task_store", "category_store"):
        prefix = section.split("_")[0]
        if section in toml_config:
            for op in ("list", "get", "create", "update", "delete"):
                key = f"{op}_delay_ms"
                if key in toml_config[section]:
                    overrides[f"{prefix}_{key}"] = toml_config[section][key]

    if "store" in toml_config:
        if "failure_rate" in toml_config["store"]:
            overrides["store_failure_rate"] = toml_config["store"]["failure_rate"]
        if "random_seed" in toml_config["store"]:
            overrides["store_random_seed"] = toml_config["store"]["random_seed"]
        if "seed_file" in toml_config["store"]:
            overrides["seed_file"] = toml_config["store"]["seed_file"]

    if "display" in toml_config and "fallback_category_color" in toml_config["display"]:
        overrides["fallback_category_color"] = toml_config["display"]["fallback_category_color"]

    if "logging" in toml_config:
        for key in ("level", "format", "file"):
            if key in toml_config["logging"]:
                overrides[f"log_{key}"] = toml_config["logging"][key]

    return overrides


def load_settings_with_toml(config_path: Path | None = None, **cli_overrides: Any) -> Settings:
    """Load settings with TOML config as base, env vars and CLI as override.

    Args:
        config_path: Optional path to TOML config file
        **cli_overrides: Values from CLI arguments; None values are ignored

    Returns:
        Settings instance with merged configuration
    """
    toml_values = flatten_toml_config(load_toml_config(config_path))
    env_values = Settings().model_dump(exclude_unset=True)
    merged = {**toml_values, **env_values}
    merged.update({k: v for k, v in cli_overrides.items() if v is not None})
    return Settings(**merged)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance (defaults plus environment).

    Returns:
        Settings instance (cached)
    """
    return Settings()
