"""Resolved settings snapshot for one purge invocation."""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

KEY_PREFIX = "AppSettings:"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class Keys:
    """Setting keys in the ``AppSettings:<FieldName>`` convention."""

    APPEND_NUMBER_ON_FIRST_STAGE = "AppSettings:AppendNumberOnFirstStage"
    CONFIG_FOLDER = "AppSettings:ConfigFolder"
    FILE_LOG_AMOUNT_THRESHOLD = "AppSettings:FileLogAmountThreshold"
    LOG_ALL_FILES = "AppSettings:LogAllFiles"
    LOG_ENABLED = "AppSettings:LogEnabled"
    LOGGING_FOLDER = "AppSettings:LoggingFolder"
    LOG_ROTATION_BYTES = "AppSettings:LogRotationBytes"
    LOG_ROTATION_VERSIONS = "AppSettings:LogRotationVersions"
    PURGE_MESSAGE_LOGO_FILE = "AppSettings:PurgeMessageLogoFile"
    REMOVE_EMPTY_STAGE_FOLDERS = "AppSettings:RemoveEmptyStageFolders"
    SHOW_PURGE_MESSAGE = "AppSettings:ShowPurgeMessage"
    SKIP_TOKEN_FILE = "AppSettings:SkipTokenFile"
    STAGE_LAST_NAME_SUFFIX = "AppSettings:StageLastNameSuffix"
    STAGE_NAME_PREFIX = "AppSettings:StageNamePrefix"
    STAGE_ROOT_FOLDER = "AppSettings:StageRootFolder"
    STAGE_VERSIONS = "AppSettings:StageVersions"
    STAGE_VERSION_DELIMITER = "AppSettings:StageVersionDelimiter"
    STAGING_DELAY_SECONDS = "AppSettings:StagingDelaySeconds"
    STAGING_TIMESTAMP_FILE = "AppSettings:StagingTimestampFile"
    TEMP_FOLDER = "AppSettings:TempFolder"
    TIME_STAMP_FORMAT = "AppSettings:TimeStampFormat"


def field_name_for_key(key: str) -> str:
    """
    Map ``AppSettings:StageVersions``, ``StageVersions`` or ``stage_versions``
    to the dataclass field name ``stage_versions``.
    """
    name = key.strip()
    if name.startswith(KEY_PREFIX):
        name = name[len(KEY_PREFIX):]
    if "_" not in name:
        name = _CAMEL_BOUNDARY.sub("_", name)
    return name.lower()


def _default_stage_root() -> str:
    return str(Path.home() / "purge-temp")


@dataclass(frozen=True)
class StageSettings:
    """Immutable settings snapshot consumed by the rotation engine."""

    append_number_on_first_stage: bool = True
    config_folder: str = "./config"
    file_log_amount_threshold: int = 1000
    log_all_files: bool = True
    log_enabled: bool = True
    logging_folder: str = "./log"
    log_rotation_bytes: int = 10 * 1024 * 1024
    log_rotation_versions: int = 10
    purge_message_logo_file: str = ""
    remove_empty_stage_folders: bool = False
    show_purge_message: bool = True
    skip_token_file: str = "SKIP.txt"
    stage_last_name_suffix: str = "LAST"
    stage_name_prefix: str = "purge-temp"
    stage_root_folder: str = dataclasses.field(default_factory=_default_stage_root)
    stage_versions: int = 4
    stage_version_delimiter: str = "-"
    staging_delay_seconds: int = 21600
    staging_timestamp_file: str = "last-purge.txt"
    temp_folder: str = "./temp"
    time_stamp_format: str = "yyyy-MM-dd HH:mm:ss"

    @classmethod
    def field_types(cls) -> Dict[str, type]:
        """Return the declared python type of every field."""
        types = {"bool": bool, "int": int, "str": str}
        return {f.name: types.get(str(f.type), str) for f in dataclasses.fields(cls)}

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "StageSettings":
        """Build settings from a mapping of keys (any supported spelling) to values."""
        return cls().with_overrides(values)

    def with_override(self, key: str, value: Any) -> "StageSettings":
        """Return a copy with one setting replaced."""
        return self.with_overrides({key: value})

    def with_overrides(self, values: Mapping[str, Any]) -> "StageSettings":
        """Return a copy with several settings replaced."""
        types = self.field_types()
        changes: Dict[str, Any] = {}
        for key, value in values.items():
            name = field_name_for_key(key)
            if name not in types:
                raise KeyError(f"Unknown setting '{key}'")
            changes[name] = coerce_value(value, types[name], name)
        return dataclasses.replace(self, **changes)


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def coerce_value(value: Any, target: type, name: str = "value") -> Any:
    """Coerce a raw config value (often a string) to ``target``."""
    if target is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
        raise ValueError(f"Setting '{name}' expects a boolean, got {value!r}")

    if target is int:
        if isinstance(value, bool):
            raise ValueError(f"Setting '{name}' expects an integer, got {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise ValueError(f"Setting '{name}' expects an integer, got {value!r}")

    if value is None:
        return ""
    return str(value)
