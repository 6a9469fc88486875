"""Timestamp helpers for the last-purge token."""

from __future__ import annotations

import re
from datetime import datetime
from functools import lru_cache
from typing import Optional

DEFAULT_TIME_STAMP_FORMAT = "yyyy-MM-dd HH:mm:ss"

# Longest tokens first so "yyyy" wins over "yy".
_DOTNET_TOKENS = [
    ("yyyy", "%Y"),
    ("yy", "%y"),
    ("MM", "%m"),
    ("dd", "%d"),
    ("HH", "%H"),
    ("hh", "%I"),
    ("mm", "%M"),
    ("ss", "%S"),
    ("fff", "%f"),
    ("tt", "%p"),
]
_TOKEN_PATTERN = re.compile("|".join(re.escape(token) for token, _ in _DOTNET_TOKENS))
_TOKEN_MAP = dict(_DOTNET_TOKENS)


@lru_cache(maxsize=32)
def to_strftime(fmt: str) -> str:
    """
    Translate a .NET-style custom format (``yyyy-MM-dd HH:mm:ss``) to strftime.

    Formats that already contain ``%`` are treated as strftime formats.
    """
    if "%" in fmt:
        return fmt
    return _TOKEN_PATTERN.sub(lambda match: _TOKEN_MAP[match.group(0)], fmt)


def format_timestamp(moment: datetime, fmt: str = DEFAULT_TIME_STAMP_FORMAT) -> str:
    """
    Format ``moment`` with a .NET-style or strftime format.

    ``fff`` maps to ``%f`` and therefore renders microseconds.
    """
    return moment.strftime(to_strftime(fmt))


def parse_timestamp(value: str, fmt: str = DEFAULT_TIME_STAMP_FORMAT) -> Optional[datetime]:
    """Parse ``value`` exactly with ``fmt``; returns None when it does not match."""
    candidate = value.strip()
    if not candidate:
        return None
    try:
        return datetime.strptime(candidate, to_strftime(fmt))
    except ValueError:
        return None


def now() -> datetime:
    """Local wall-clock time, the reference for the staging delay."""
    return datetime.now()
