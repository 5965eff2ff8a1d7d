"""Error taxonomy shared by stores and the view-model."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taskflow.core.bulk import BulkResult


class TaskFlowError(Exception):
    """Base exception for TaskFlow errors."""

    def __init__(self, message: str, code: str = "TASKFLOW_ERROR") -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message
            code: Error code for programmatic handling
        """
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(TaskFlowError):
    """Raised when a record or form payload fails validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class NotFoundError(TaskFlowError):
    """Raised when an id is absent from a store."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found: {entity_id}", code="NOT_FOUND")
        self.entity = entity
        self.entity_id = entity_id


class TransportError(TaskFlowError):
    """Raised for store failures not otherwise classified."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="TRANSPORT_ERROR")


class BulkOperationError(TaskFlowError):
    """Raised when one or more items of a bulk operation failed.

    Items that succeeded stay applied; ``result`` holds both sides.
    """

    def __init__(self, operation: str, result: "BulkResult") -> None:
        super().__init__(
            f"{operation} failed for {len(result.failed)} of {result.total} tasks",
            code="BULK_OPERATION_FAILED",
        )
        self.operation = operation
        self.result = result
