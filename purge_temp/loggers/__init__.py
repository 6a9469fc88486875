"""Concrete log and notification sinks."""

from .app_logger import AppLogWriter
from .factory import LoggerFactory
from .notification import ConsoleNotification
from .purge_logger import PurgeLogWriter

__all__ = [
    "AppLogWriter",
    "ConsoleNotification",
    "LoggerFactory",
    "PurgeLogWriter",
]
