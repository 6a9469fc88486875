"""Settings layering: defaults, .env, settings file, environment, overrides.

Settings files may be YAML (``.yaml`` / ``.yml``) or JSON. Values are read
from an ``AppSettings`` mapping when present, otherwise from the top level,
so the original ``appsettings.json`` layout loads unchanged.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from dotenv import load_dotenv

from purge_temp.config.settings import StageSettings, field_name_for_key

config_logger = logging.getLogger(__name__)

ENV_PREFIX = "PURGE_TEMP_"
HOME_ENV = "PURGE_TEMP_HOME"
SETTINGS_SECTION = "AppSettings"


class SettingsFileError(Exception):
    """Raised when a settings file is missing or cannot be parsed."""


def app_home() -> Path:
    """Directory that relative administrative paths are resolved against."""
    raw = os.environ.get(HOME_ENV)
    if raw:
        return Path(raw).expanduser()
    return Path.cwd()


def read_settings_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Return the raw settings mapping stored in ``path``."""
    path = Path(path).expanduser()
    if not path.is_file():
        raise SettingsFileError(f"Settings file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as handle:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(handle) or {}
            else:
                data = json.load(handle)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SettingsFileError(f"Settings file {path} could not be parsed: {exc}") from exc

    if not isinstance(data, dict):
        raise SettingsFileError(f"Settings file {path} must contain a mapping")

    section = data.get(SETTINGS_SECTION)
    if isinstance(section, dict):
        data = section

    config_logger.debug(f"Loaded {len(data)} setting(s) from {path}")
    return data


def environment_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect ``PURGE_TEMP_<FIELD>`` variables that name a known setting."""
    environ = os.environ if environ is None else environ
    known = set(StageSettings.field_types())
    overrides: Dict[str, str] = {}
    for name, value in environ.items():
        if not name.startswith(ENV_PREFIX) or name == HOME_ENV:
            continue
        field_name = field_name_for_key(name[len(ENV_PREFIX):])
        if field_name in known:
            overrides[field_name] = value
    return overrides


def load_settings(
    settings_file: Optional[Union[str, Path]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    use_environment: bool = True,
    environ: Optional[Mapping[str, str]] = None,
) -> StageSettings:
    """
    Resolve the settings snapshot for one purge invocation.

    Args:
        settings_file: Optional YAML/JSON settings file
        overrides: Highest-priority values (e.g. parsed CLI options)
        use_environment: Read ``.env`` and ``PURGE_TEMP_*`` variables
        environ: Environment mapping to read instead of ``os.environ``

    Raises:
        SettingsFileError: If ``settings_file`` is missing or malformed
        KeyError / ValueError: If a key is unknown or a value has the wrong type
    """
    settings = StageSettings()

    if use_environment and environ is None:
        load_dotenv()

    if settings_file:
        file_values = read_settings_file(settings_file)
        unknown = [key for key in file_values if field_name_for_key(key) not in StageSettings.field_types()]
        for key in unknown:
            config_logger.warning(f"Ignoring unknown setting '{key}' in {settings_file}")
            file_values.pop(key)
        settings = settings.with_overrides(file_values)

    if use_environment:
        settings = settings.with_overrides(environment_overrides(environ))

    if overrides:
        settings = settings.with_overrides(overrides)

    return settings
