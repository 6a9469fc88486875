"""Configuration package: settings snapshot and its loader."""

from __future__ import annotations

from .loader import SettingsFileError, load_settings
from .settings import Keys, StageSettings

__all__ = [
    "Keys",
    "SettingsFileError",
    "StageSettings",
    "load_settings",
]
