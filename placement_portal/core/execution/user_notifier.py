"""User notifier for the portal client.

Turns terminal errors into one human-readable notification each.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from placement_portal.core.errors import ClassifiedError
from placement_portal.core.logging import logger
from placement_portal.core.retry_config import ErrorKind

VALIDATION_PREFIX = "Validation error: "
GENERIC_FALLBACK = "An error occurred"

MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.AUTH: "Invalid credentials or session expired",
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.RATE_LIMITED: "Too many requests. Please slow down.",
    ErrorKind.SERVER: "Server error. Please try again later.",
    ErrorKind.NETWORK: "Network error. Please check your connection.",
    ErrorKind.TIMEOUT: "Request timeout. Please try again.",
}


@dataclass(frozen=True)
class Notification:
    """A message surfaced to the user."""

    message: str
    kind: Optional[ErrorKind] = None
    level: str = "error"  # 'error', 'warning', 'success', 'info'


NotificationSink = Callable[[Notification], None]


def log_sink(notification: Notification) -> None:
    """Default sink: write the notification to the structured log."""
    logger.warning(
        "user_notification",
        level=notification.level,
        kind=notification.kind.value if notification.kind else None,
        message=notification.message,
    )


class CollectingSink:
    """Sink that keeps every notification, for tests and headless callers."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def __call__(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def messages(self) -> List[str]:
        return [n.message for n in self.notifications]


def message_for(error: ClassifiedError) -> str:
    """Pick the user-facing message for a classified error."""
    if error.kind == ErrorKind.VALIDATION:
        return VALIDATION_PREFIX + (error.detail or "Invalid request")
    if error.kind == ErrorKind.UNKNOWN:
        return error.detail or GENERIC_FALLBACK
    return MESSAGES[error.kind]


class UserNotifier:
    """Emits notifications through a pluggable sink."""

    def __init__(self, sink: Optional[NotificationSink] = None):
        self.sink = sink or log_sink

    def notify_error(self, error: ClassifiedError) -> Notification:
        notification = Notification(message=message_for(error), kind=error.kind)
        self.sink(notification)
        return notification

    def notify_message(self, message: str, level: str = "error") -> Notification:
        notification = Notification(message=message, level=level)
        self.sink(notification)
        return notification
