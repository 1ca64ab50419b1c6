from abc import ABC, abstractmethod
from dataclasses import dataclass

from docanalyzer.logging.logger import Log


@dataclass(frozen=True)
class Notification:
    """Short user-facing message about one file."""

    title: str
    description: str
    level: str = "info"


class Notifier(ABC):
    """Contract for delivering notifications to the user."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Deliver a notification. Must not raise."""


class LogNotifier(Notifier):
    """Writes notifications to the application log."""

    def notify(self, notification: Notification) -> None:
        message = f"{notification.title}: {notification.description}"
        if notification.level == "error":
            Log.error(message)
        else:
            Log.info(message)


def notify_safely(notifier: Notifier, notification: Notification) -> None:
    """Deliver a notification, logging instead of raising if the notifier fails."""
    try:
        notifier.notify(notification)
    except Exception:
        Log.exception(f"Notifier failed to deliver '{notification.title}'")
