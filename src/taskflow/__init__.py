"""TaskFlow task management core.

An async, in-memory task and category store pair plus the view-model that
derives filtered, sorted and annotated task lists and completion statistics
for a rendering layer.
"""

__version__ = "0.1.0"
