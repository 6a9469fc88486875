"""Decide whether a rotation may run right now."""

from __future__ import annotations

import os
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from purge_temp.config.settings import StageSettings
from purge_temp.engine.planner import StageFolderPlanner
from purge_temp.shared.interfaces import AppLogger, NullAppLogger
from purge_temp.utils.paths import PathResolver
from purge_temp.utils.time import format_timestamp, now, parse_timestamp


class ExecutionState(Enum):
    """Terminal outcome of one gate evaluation."""

    CAN_EXECUTE = "can_execute"
    INVALID_ARGUMENTS = "invalid_arguments"
    TIME_SINCE_LAST_PURGE_TOO_SHORT = "time_since_last_purge_too_short"
    SKIPPED_BY_TOKEN = "skipped_by_token"
    OTHER_ERRORS = "other_errors"


class ExecutionGate:
    """
    Evaluate the skip token and the last-purge timestamp.

    The skip token is a file inside the newest stage folder; its presence
    pauses the next rotation. The timestamp token lives in the config folder
    and enforces ``staging_delay_seconds`` between two rotations.
    """

    def __init__(
        self,
        settings: StageSettings,
        planner: StageFolderPlanner,
        resolver: PathResolver,
        app_logger: Optional[AppLogger] = None,
        clock: Callable[[], datetime] = now,
    ):
        self.settings = settings
        self.planner = planner
        self.resolver = resolver
        self.app_logger = app_logger or NullAppLogger()
        self.clock = clock

    def skip_token_path(self, init_folder: Optional[str]) -> Optional[str]:
        if not init_folder:
            return None
        return self.resolver.get_path(init_folder, self.settings.skip_token_file)

    def timestamp_token_path(self) -> Optional[str]:
        return self.resolver.resolve_file(self.settings.config_folder, self.settings.staging_timestamp_file)

    def can_execute_purge(self) -> ExecutionState:
        """Return exactly one ``ExecutionState``; never raises."""
        try:
            init_folder = self.planner.get_init_stage_folder()
            if init_folder.is_not_valid:
                return ExecutionState.INVALID_ARGUMENTS

            skip_token = self.skip_token_path(init_folder.value)
            timestamp_token = self.timestamp_token_path()
            if skip_token is None or timestamp_token is None or init_folder.value is None:
                self.app_logger.error(
                    "At least one mandatory argument was not defined: "
                    f"skipTokenPath:{skip_token}, lastPurgeToken:{timestamp_token}, "
                    f"initStageFolder:{init_folder.value}"
                )
                return ExecutionState.INVALID_ARGUMENTS

            if os.path.isfile(skip_token):
                self.app_logger.info("Purge skipped due to skip token file presence.")
                return ExecutionState.SKIPPED_BY_TOKEN

            if os.path.exists(timestamp_token):
                raw_timestamp = Path(timestamp_token).read_text(encoding="utf-8", errors="replace")
                last_purge = parse_timestamp(raw_timestamp, self.settings.time_stamp_format)
                if last_purge is None:
                    self.app_logger.error(
                        "Failed to parse last purge timestamp. Please check the settings and manually "
                        f"delete or fix the token, defined at: {timestamp_token}"
                    )
                    return ExecutionState.INVALID_ARGUMENTS

                current = self.clock()
                elapsed = (current - last_purge).total_seconds()
                if elapsed < self.settings.staging_delay_seconds:
                    self.app_logger.info(
                        "Purge skipped due to insufficient time elapsed since last purge. "
                        f"Last purge: {raw_timestamp.strip()}, "
                        f"Now: {format_timestamp(current, self.settings.time_stamp_format)}, "
                        f"Min. seconds: {self.settings.staging_delay_seconds}, "
                        f"Actual seconds: {elapsed}"
                    )
                    return ExecutionState.TIME_SINCE_LAST_PURGE_TOO_SHORT

            return ExecutionState.CAN_EXECUTE
        except Exception as exc:
            self.app_logger.error(f"An unknown error occurred: {exc}")
            return ExecutionState.OTHER_ERRORS
