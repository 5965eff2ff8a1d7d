"""Shared utilities."""

from taskflow.utils.clock import is_same_local_day, local_now
from taskflow.utils.logging import get_logger, setup_logging
from taskflow.utils.metrics import get_metrics

__all__ = [
    "get_logger",
    "setup_logging",
    "get_metrics",
    "local_now",
    "is_same_local_day",
]
