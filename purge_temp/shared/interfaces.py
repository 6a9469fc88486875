"""Abstract capabilities consumed by the rotation engine.

The engine only talks to these interfaces. Concrete sinks live in
``purge_temp.loggers``; tests pass recording fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class NotificationStatus(Enum):
    """Severity of a user notification."""

    GENERAL = "general"
    OK = "ok"
    SKIP = "skip"
    ERROR = "error"


class AppLogger(ABC):
    """Application log sink."""

    @abstractmethod
    def info(self, message: str) -> None:
        """Write an informational line."""

    @abstractmethod
    def warning(self, message: str) -> None:
        """Write a warning line."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Write an error line."""


class PurgeLogger(ABC):
    """Activity log sink for the file operations of a rotation."""

    @abstractmethod
    def report_purge(self, folder: str, relative_file: str) -> None:
        """A file under ``folder`` is about to be deleted permanently."""

    @abstractmethod
    def report_move(self, from_folder: str, to_folder: str, relative_file: str) -> None:
        """A file is about to move with its stage folder into the next slot."""

    @abstractmethod
    def report_skipped_purge(self, folder: str, skipped_count: int, all_skipped: bool) -> None:
        """Aggregate line for purged files that were not reported individually."""

    @abstractmethod
    def report_skipped_move(
        self,
        from_folder: str,
        to_folder: str,
        skipped_count: int,
        all_skipped: bool,
    ) -> None:
        """Aggregate line for moved files that were not reported individually."""


class DesktopNotification(ABC):
    """User notifier."""

    @abstractmethod
    def show_notification(self, title: str, message: str, status: NotificationStatus) -> None:
        """Show ``message`` to the user; implementations honour ``show_purge_message``."""


class NullAppLogger(AppLogger):
    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass


class NullPurgeLogger(PurgeLogger):
    def report_purge(self, folder: str, relative_file: str) -> None:
        pass

    def report_move(self, from_folder: str, to_folder: str, relative_file: str) -> None:
        pass

    def report_skipped_purge(self, folder: str, skipped_count: int, all_skipped: bool) -> None:
        pass

    def report_skipped_move(
        self,
        from_folder: str,
        to_folder: str,
        skipped_count: int,
        all_skipped: bool,
    ) -> None:
        pass


class NullNotification(DesktopNotification):
    def show_notification(self, title: str, message: str, status: NotificationStatus) -> None:
        pass
