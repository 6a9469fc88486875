"""Builds the log and notification sinks for one purge invocation."""

from __future__ import annotations

from typing import Optional

from purge_temp.config.settings import StageSettings
from purge_temp.loggers.app_logger import AppLogWriter
from purge_temp.loggers.notification import ConsoleNotification
from purge_temp.loggers.purge_logger import PurgeLogWriter
from purge_temp.shared.interfaces import AppLogger, DesktopNotification, PurgeLogger
from purge_temp.utils.paths import PathResolver


class LoggerFactory:
    """
    Deferred-once construction of the three sinks.

    A sink is only built when first requested, so a run that never reports
    file activity never opens ``purgeLog.txt``.
    """

    def __init__(self, settings: StageSettings, resolver: PathResolver):
        self.settings = settings
        self.resolver = resolver
        self._app_logger: Optional[AppLogWriter] = None
        self._purge_logger: Optional[PurgeLogWriter] = None
        self._notification: Optional[DesktopNotification] = None

    def log_folder(self) -> Optional[str]:
        return self.resolver.resolve(self.settings.logging_folder)

    @property
    def app_logger(self) -> AppLogger:
        if self._app_logger is None:
            self._app_logger = AppLogWriter(self.settings, self.log_folder())
        return self._app_logger

    @property
    def purge_logger(self) -> PurgeLogger:
        if self._purge_logger is None:
            self._purge_logger = PurgeLogWriter(self.settings, self.log_folder())
        return self._purge_logger

    @property
    def notification(self) -> DesktopNotification:
        if self._notification is None:
            self._notification = ConsoleNotification(self.settings, self.resolver)
        return self._notification

    def close(self) -> None:
        """Close the file handlers that were opened."""
        if self._app_logger is not None:
            self._app_logger.close()
        if self._purge_logger is not None:
            self._purge_logger.close()
