"""Shared types: error codes, results and sink interfaces."""

from .error_codes import ErrorCode
from .interfaces import (
    AppLogger,
    DesktopNotification,
    NotificationStatus,
    NullAppLogger,
    NullNotification,
    NullPurgeLogger,
    PurgeLogger,
)
from .result import Result

__all__ = [
    "AppLogger",
    "DesktopNotification",
    "ErrorCode",
    "NotificationStatus",
    "NullAppLogger",
    "NullNotification",
    "NullPurgeLogger",
    "PurgeLogger",
    "Result",
]
