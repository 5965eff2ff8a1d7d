"""Prometheus metrics for store and view-model operations."""

from functools import lru_cache

from prometheus_client import Counter, Histogram, Info


class Metrics:
    """Prometheus metrics for TaskFlow."""

    def __init__(self) -> None:
        """Initialize all metrics."""
        self.info = Info(
            "taskflow",
            "TaskFlow information",
        )
        self.info.info({"version": "0.1.0"})

        # Store operations
        self.store_operations_total = Counter(
            "taskflow_store_operations_total",
            "Total number of store operations",
            ["store", "operation", "status"],
        )

        self.store_operation_duration_seconds = Histogram(
            "taskflow_store_operation_duration_seconds",
            "Duration of store operations in seconds",
            ["store", "operation"],
            buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

        # Bulk operations
        self.bulk_operations_total = Counter(
            "taskflow_bulk_operations_total",
            "Total number of bulk operations",
            ["operation", "status"],
        )

        self.bulk_operation_items = Histogram(
            "taskflow_bulk_operation_items",
            "Number of tasks per bulk operation",
            ["operation"],
            buckets=[1, 2, 5, 10, 25, 50, 100],
        )

        # View-model loads
        self.view_model_loads_total = Counter(
            "taskflow_view_model_loads_total",
            "Total number of view-model data loads",
            ["status"],
        )

    def record_store_operation(
        self,
        store: str,
        operation: str,
        status: str,
        duration: float,
    ) -> None:
        """Record a store operation metric.

        Args:
            store: Store name (tasks, categories)
            operation: Operation name (list, get, create, update, delete)
            status: Operation status (success, error)
            duration: Operation duration in seconds
        """
        self.store_operations_total.labels(
            store=store,
            operation=operation,
            status=status,
        ).inc()
        self.store_operation_duration_seconds.labels(
            store=store,
            operation=operation,
        ).observe(duration)

    def record_bulk_operation(self, operation: str, status: str, item_count: int) -> None:
        """Record a bulk operation metric.

        Args:
            operation: Bulk operation name (complete, delete)
            status: success, partial or error
            item_count: Number of tasks targeted
        """
        self.bulk_operations_total.labels(operation=operation, status=status).inc()
        self.bulk_operation_items.labels(operation=operation).observe(item_count)

    def record_load(self, status: str) -> None:
        self.view_model_loads_total.labels(status=status).inc()


@lru_cache
def get_metrics() -> Metrics:
    """Get cached metrics instance."""
    return Metrics()
