"""User-visible, non-fatal notifications raised by the view-model."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A single message for the rendering layer to show."""

    level: NotificationLevel
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier(Protocol):
    """Receives notifications from the view-model."""

    def notify(self, notification: Notification) -> None: ...


class NotificationLog:
    """Notifier that keeps notifications in memory, oldest first."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def last(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None

    def messages(self, level: NotificationLevel | None = None) -> list[str]:
        """Messages in order, optionally restricted to one level."""
        return [n.message for n in self.notifications if level is None or n.level == level]

    def clear(self) -> None:
        self.notifications.clear()
