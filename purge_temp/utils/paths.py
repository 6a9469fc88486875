"""Path resolution and folder-name validation for stage and admin folders.

``PathValidator`` guards every folder the rotation touches: it rejects empty
names, names with characters that are illegal in file names, reserved device
names (``CON``, ``NUL``, ``LPT1`` ...), names ending with a space or a dot, and
protected system directories. The Windows rules are applied on every platform
so a stage tree stays portable.
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Tuple, Union

from purge_temp.shared.error_codes import ErrorCode
from purge_temp.shared.interfaces import AppLogger, NullAppLogger
from purge_temp.shared.result import Result

DEFAULT_DELIMITER = "-"
DEFAULT_TEMP_FOLDER_NAME = "purge-temp"
DEFAULT_LAST_FOLDER_NAME_TOKEN = "LAST"

ILLEGAL_NAME_CHARACTERS: FrozenSet[str] = frozenset('<>:"/\\|?*' + "".join(chr(i) for i in range(32)))

RESERVED_NAMES: FrozenSet[str] = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

TEST_SYSTEM_PATH = os.path.join(tempfile.gettempdir(), "purge-temp-protected-system-dir")

_SEPARATORS = "/\\"
_SPLIT_SEPARATORS = re.compile(r"[\\/]")
_RELATIVE_MARKERS = ("./", ".\\")
_PARENT_MARKERS = ("../", "..\\")

PathLike = Union[str, os.PathLike]


def is_reserved_name(name: str) -> bool:
    """Case-insensitive check against the reserved device names."""
    return name.strip().upper() in RESERVED_NAMES


def last_component(name: str) -> str:
    """Return the last path component, accepting both separator styles."""
    return _SPLIT_SEPARATORS.split(name.rstrip(_SEPARATORS))[-1]


def has_illegal_characters(name: str) -> bool:
    return any(char in ILLEGAL_NAME_CHARACTERS for char in name)


def normalize_path(path: PathLike) -> str:
    """Absolute path without trailing separators (the root keeps its separator)."""
    full = os.path.abspath(os.fspath(path))
    stripped = full.rstrip(_SEPARATORS)
    if not stripped or stripped.endswith(":"):
        return full
    return stripped


def _comparable(path: PathLike) -> str:
    return os.path.normcase(normalize_path(path))


def default_protected_paths() -> FrozenSet[str]:
    """
    Collect the directories a stage or administrative folder must never be.

    Computed once when an executor is built and handed to ``PathValidator``.
    """
    candidates = [TEST_SYSTEM_PATH]
    if os.name == "nt":
        env = os.environ
        system_root = env.get("SystemRoot") or env.get("WINDIR")
        if system_root:
            candidates.extend([system_root, os.path.join(system_root, "System32")])
        for name in ("ProgramFiles", "ProgramFiles(x86)", "CommonProgramFiles", "USERPROFILE"):
            if env.get(name):
                candidates.append(env[name])
        public = env.get("PUBLIC")
        if public:
            candidates.extend([os.path.join(public, "Documents"), os.path.join(public, "Desktop")])
    else:
        candidates.extend(
            ["/", "/bin", "/boot", "/dev", "/etc", "/lib", "/proc", "/sbin", "/sys", "/usr", "/var"]
        )
        candidates.append(str(Path.home()))
    return frozenset(_comparable(candidate) for candidate in candidates if candidate)


class PathResolver:
    """Resolve configured path tokens against the application home directory."""

    def __init__(self, home: PathLike, app_logger: Optional[AppLogger] = None):
        self.home = os.path.abspath(os.fspath(home))
        self.app_logger = app_logger or NullAppLogger()

    def resolve(self, token: Optional[str]) -> Optional[str]:
        """Resolve ``token`` against the home directory."""
        return self.get_path(self.home, token)

    def resolve_file(self, folder_token: Optional[str], file_token: Optional[str]) -> Optional[str]:
        """Place ``file_token`` inside ``folder_token`` after resolving the folder against home."""
        folder = self.resolve(folder_token)
        if folder is None:
            return None
        return self.get_path(folder, file_token)

    def get_path(self, base_path: Optional[str], token: Optional[str]) -> Optional[str]:
        """
        Combine ``base_path`` and ``token``.

        Returns None when both are empty or the token climbs above a root.
        Absolute tokens are returned unchanged; ``./x`` and plain names are
        joined to the base, ``../x`` to the parent of the base.
        """
        try:
            if not base_path and not token:
                return None

            if base_path and base_path.startswith(_RELATIVE_MARKERS + _PARENT_MARKERS):
                base_path = self.get_path(self.home, base_path)

            if not token:
                return base_path

            if os.path.isabs(token) or token.startswith(("/", "\\")):
                return token

            if token.startswith(_RELATIVE_MARKERS):
                return os.path.join(base_path or self.home, token[2:])

            if token.startswith(_PARENT_MARKERS):
                base = Path(base_path or self.home)
                parent = base.parent
                if parent == base:
                    raise ValueError(f"'{base_path}' has no parent directory")
                return os.path.join(str(parent), token[3:])

            return os.path.join(base_path or self.home, token)
        except (TypeError, ValueError, OSError) as exc:
            self.app_logger.error(f"Error occurred while retrieving path: {exc}")
            return None


class PathValidator:
    """Folder-name legality checks, system-directory protection and sanitization."""

    def __init__(
        self,
        app_logger: Optional[AppLogger] = None,
        protected_paths: Optional[Iterable[str]] = None,
    ):
        self.app_logger = app_logger or NullAppLogger()
        if protected_paths is None:
            protected_paths = default_protected_paths()
        self.protected_paths: FrozenSet[str] = frozenset(_comparable(p) for p in protected_paths)

    def _log(self, message: str, is_warning: bool) -> None:
        if is_warning:
            self.app_logger.warning(message)
        else:
            self.app_logger.error(message)

    def check_name(self, name: Optional[str]) -> Result:
        """Name-level rules only (no system-directory lookup)."""
        if name is None or not name.rstrip(_SEPARATORS).strip():
            return Result.fail(ErrorCode.EMPTY_FOLDER_NAME)
        component = last_component(name)
        if has_illegal_characters(component):
            return Result.fail(ErrorCode.ILLEGAL_CHARACTERS_IN_FOLDER_NAME)
        if is_reserved_name(component):
            return Result.fail(ErrorCode.RESERVED_NAME_AS_FOLDER_NAME)
        if name.endswith((" ", ".")):
            return Result.fail(ErrorCode.INVALID_FOLDER_NAME_SUFFIX)
        return Result.success()

    def is_valid_folder_name(self, name: Optional[str], is_warning: bool = False) -> Result:
        """
        Validate a folder name or path.

        ``is_warning`` only lowers the log severity; the error code is the same.
        """
        result = self.check_name(name)
        if result.is_not_valid:
            messages = {
                ErrorCode.EMPTY_FOLDER_NAME: "The folder name cannot be empty",
                ErrorCode.ILLEGAL_CHARACTERS_IN_FOLDER_NAME: f"The folder name '{name}' contains illegal characters",
                ErrorCode.RESERVED_NAME_AS_FOLDER_NAME: f"The folder name '{name}' is a reserved name",
                ErrorCode.INVALID_FOLDER_NAME_SUFFIX: f"The folder name '{name}' cannot end with a space or a dot",
            }
            self._log(messages[result.error_code], is_warning)
            return result
        return self.check_system_relevant_folder(name, log_error=True, is_warning=is_warning)

    def is_valid_file_name(self, name: Optional[str]) -> bool:
        """File names follow the folder rules, but must not end with a separator."""
        if not name or name.endswith(tuple(_SEPARATORS)):
            return False
        return self.check_name(name).is_valid

    def check_system_relevant_folder(
        self,
        path: Optional[str],
        log_error: bool = True,
        is_warning: bool = False,
    ) -> Result:
        """Fail with PATH_IS_SYSTEM_DIRECTORY when ``path`` is a protected directory."""
        if not path:
            return Result.fail(ErrorCode.EMPTY_FOLDER_NAME)
        if _comparable(path) in self.protected_paths:
            if log_error:
                self._log(f"The path '{path}' is a protected system directory", is_warning)
            return Result.fail(ErrorCode.PATH_IS_SYSTEM_DIRECTORY)
        return Result.success()

    def sanitize_delimiter(self, delimiter: Optional[str]) -> str:
        if not delimiter:
            return ""
        if has_illegal_characters(delimiter) or is_reserved_name(delimiter):
            self.app_logger.warning(
                f"Invalid delimiter '{delimiter}' detected. Replacing with '{DEFAULT_DELIMITER}'."
            )
            return DEFAULT_DELIMITER
        return delimiter

    def sanitize_prefix(self, prefix: Optional[str]) -> str:
        if self.check_name(prefix).is_not_valid or _SPLIT_SEPARATORS.search(prefix or ""):
            self.app_logger.warning(
                f"Invalid prefix '{prefix}' detected. Replacing with '{DEFAULT_TEMP_FOLDER_NAME}'."
            )
            return DEFAULT_TEMP_FOLDER_NAME
        return prefix

    def sanitize_last_suffix(self, suffix: Optional[str]) -> str:
        if self.check_name(suffix).is_not_valid or _SPLIT_SEPARATORS.search(suffix or ""):
            self.app_logger.warning(
                f"Invalid suffix for last '{suffix}' detected. Replacing with '{DEFAULT_LAST_FOLDER_NAME_TOKEN}'."
            )
            return DEFAULT_LAST_FOLDER_NAME_TOKEN
        return suffix

    def sanitize_settings(
        self,
        delimiter: Optional[str],
        prefix: Optional[str],
        last_suffix: Optional[str] = DEFAULT_LAST_FOLDER_NAME_TOKEN,
    ) -> Tuple[str, str, str]:
        """
        Replace invalid name components with safe defaults.

        Never fails. The composed folder name can still be invalid (``LP`` +
        ``T1`` is ``LPT1``), so planned folders are validated again as a whole.
        """
        return (
            self.sanitize_delimiter(delimiter),
            self.sanitize_prefix(prefix),
            self.sanitize_last_suffix(last_suffix),
        )
