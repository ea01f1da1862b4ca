# projectshelf/services/notifications.py
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from loguru import logger

class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error" # Shown as a destructive toast in the web client

@dataclass(frozen=True)
class Notice:
    """A transient user-facing message."""
    title: str
    description: str
    severity: Severity = Severity.INFO

class Notifier(ABC):
    """Fire-and-forget delivery of notices to the user."""

    @abstractmethod
    def notify(self, notice: Notice) -> None:
        pass

class LogNotifier(Notifier):
    """Delivers notices to the log only. Default when no UI is attached."""

    def notify(self, notice: Notice) -> None:
        level = "ERROR" if notice.severity is Severity.ERROR else "INFO"
        logger.log(level, f"{notice.title}: {notice.description}")

class RecordingNotifier(Notifier):
    """Keeps every notice in order; useful for headless callers and tests."""

    def __init__(self):
        self.notices: list[Notice] = []

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)

    @property
    def titles(self) -> list[str]:
        return [n.title for n in self.notices]
