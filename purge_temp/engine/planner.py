"""Ordered stage-folder planning from the naming settings."""

from __future__ import annotations

import os
from typing import List

from purge_temp.config.settings import StageSettings
from purge_temp.shared.error_codes import ErrorCode
from purge_temp.shared.result import Result
from purge_temp.utils.paths import PathResolver, PathValidator


class StageFolderPlanner:
    """
    Build the absolute stage-folder paths, newest first.

    Index 0 is the init (newest) stage, the last index the oldest stage that
    is purged on rotation. The list is rebuilt on every call because the
    settings can change between calls.
    """

    def __init__(self, settings: StageSettings, resolver: PathResolver, validator: PathValidator):
        self.settings = settings
        self.resolver = resolver
        self.validator = validator

    def _stage_root(self) -> Result[str]:
        raw_root = self.settings.stage_root_folder
        if not raw_root or not raw_root.strip():
            return Result.fail(ErrorCode.EMPTY_FOLDER_NAME)
        root = self.resolver.resolve(raw_root)
        if root is None:
            return Result.fail(ErrorCode.INVALID_ARGUMENTS)
        return Result.success(os.path.abspath(root))

    def get_init_stage_folder(self) -> Result[str]:
        """Return ``root/prefix`` or ``root/prefix{delimiter}1``."""
        root = self._stage_root()
        if root.is_not_valid:
            return Result.fail(root.error_code)

        delimiter = self.validator.sanitize_delimiter(self.settings.stage_version_delimiter)
        prefix = self.validator.sanitize_prefix(self.settings.stage_name_prefix)

        if self.settings.append_number_on_first_stage and self.settings.stage_versions > 0:
            name = f"{prefix}{delimiter}1"
        else:
            name = prefix
        return Result.success(os.path.join(root.value, name))

    def get_stage_folders(self) -> Result[List[str]]:
        """Return ``[init, prefix{d}2, ..., prefix{d}{n-1}, prefix{d}{last}]``."""
        init_folder = self.get_init_stage_folder()
        if init_folder.is_not_valid:
            return Result.fail(init_folder.error_code)

        folders = [init_folder.value]
        stage_versions = self.settings.stage_versions
        if stage_versions <= 1:
            return Result.success(folders)

        root = os.path.dirname(init_folder.value)
        delimiter, prefix, last_suffix = self.validator.sanitize_settings(
            self.settings.stage_version_delimiter,
            self.settings.stage_name_prefix,
            self.settings.stage_last_name_suffix,
        )
        for index in range(2, stage_versions):
            folders.append(os.path.join(root, f"{prefix}{delimiter}{index}"))
        folders.append(os.path.join(root, f"{prefix}{delimiter}{last_suffix}"))
        return Result.success(folders)
