"""Category record."""

from pydantic import Field

from taskflow.models.base import RecordModel

# Badge color used when a category has no color or no category matches
DEFAULT_CATEGORY_COLOR = "#8B5CF6"


class Category(RecordModel):
    """A named grouping of tasks with a display color.

    Tasks reference categories by ``name`` (case-sensitive string equality),
    not by id. ``task_count`` is a denormalized counter maintained by
    callers; stores never recompute it.
    """

    id: str = Field(..., min_length=1, description="Unique category identifier")
    name: str = Field(..., min_length=1, description="Display label and join key from Task.category")
    color: str | None = Field(default=None, description="Badge color (hex)")
    task_count: int = Field(default=0, ge=0, description="Caller-maintained task counter")
