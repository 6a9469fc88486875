"""Application log sink backed by the standard ``logging`` module."""

from __future__ import annotations

import itertools
import logging
import os
from datetime import date, datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

from purge_temp.config.settings import StageSettings
from purge_temp.shared.interfaces import AppLogger

sink_logger = logging.getLogger(__name__)

APP_LOG_FILE_NAME = "appLog.txt"
LINE_FORMAT = "%(asctime)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_instance_counter = itertools.count(1)


class DailyRotatingFileHandler(RotatingFileHandler):
    """
    Size-bounded log file that also rolls over when the calendar day changes.

    The day of an existing file is taken from its modification time.
    """

    def __init__(self, filename: str, **kwargs):
        super().__init__(filename, **kwargs)
        self.current_day = date.today()
        if os.path.exists(self.baseFilename):
            self.current_day = date.fromtimestamp(os.path.getmtime(self.baseFilename))

    def shouldRollover(self, record: logging.LogRecord) -> bool:
        record_day = datetime.fromtimestamp(record.created).date()
        if record_day != self.current_day:
            self.current_day = record_day
            if os.path.exists(self.baseFilename) and os.path.getsize(self.baseFilename) > 0:
                return True
        return bool(super().shouldRollover(record))


def build_sink_logger(kind: str, log_file: Optional[str], settings: StageSettings) -> logging.Logger:
    """
    Create an isolated logger writing plain ``<timestamp> <message>`` lines.

    With ``log_file`` the lines go to a ``DailyRotatingFileHandler`` sized by
    ``log_rotation_bytes`` / ``log_rotation_versions``; without it, or when
    the log folder cannot be created, they go to stderr.
    """
    logger = logging.getLogger(f"purge_temp.sink.{kind}.{next(_instance_counter)}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    handler: logging.Handler
    if log_file:
        try:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            handler = DailyRotatingFileHandler(
                log_file,
                maxBytes=max(settings.log_rotation_bytes, 0),
                backupCount=max(settings.log_rotation_versions, 0),
                encoding="utf-8",
                delay=True,
            )
        except OSError as exc:
            sink_logger.warning(f"Cannot open log file {log_file}, logging to console: {exc}")
            handler = logging.StreamHandler()
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter(LINE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def close_sink_logger(logger: logging.Logger) -> None:
    """Flush and detach every handler of ``logger``."""
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class AppLogWriter(AppLogger):
    """Writes application events to ``appLog.txt`` or to the console."""

    def __init__(self, settings: StageSettings, log_folder: Optional[str]):
        self.log_file = None
        if settings.log_enabled and log_folder:
            self.log_file = os.path.join(log_folder, APP_LOG_FILE_NAME)
        self.logger = build_sink_logger("app", self.log_file, settings)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def close(self) -> None:
        close_sink_logger(self.logger)
