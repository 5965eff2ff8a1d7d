"""Base record model and common types."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Priority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UrgencyClass(str, Enum):
    """Due-date urgency relative to the current calendar day."""

    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    NORMAL = "normal"


class RecordModel(BaseModel):
    """Base model shared by store records and form payloads.

    Fields use snake_case names in Python and accept the camelCase aliases
    used by JSON seed documents (``dueDate``, ``completedAt``, ...).
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        use_enum_values=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def normalize_fields(model: type[BaseModel], fields: dict[str, Any]) -> dict[str, Any]:
    """Map alias keys in a partial payload onto field names.

    Unknown keys are passed through unchanged so model validation can
    report them.

    Args:
        model: Model class whose fields and aliases are used
        fields: Partial payload keyed by field name or alias

    Returns:
        Payload keyed by field name
    """
    by_alias = {
        info.alias: name
        for name, info in model.model_fields.items()
        if info.alias and info.alias != name
    }
    return {by_alias.get(key, key): value for key, value in fields.items()}
