"""
The purge pipeline.

``RotationExecutor.execute_purge`` validates the settings, prepares the
administrative folders, asks the ``ExecutionGate`` for permission and then
rotates the stage folders:

    delete oldest -> shift every other stage one slot older -> recreate newest

Every step returns a ``Result``; the first failure ends the run with its
``ErrorCode``. Unexpected exceptions are converted to ``UNKNOWN_ERROR`` at the
top of ``execute_purge`` and never leave it.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from purge_temp.config.loader import app_home
from purge_temp.config.settings import StageSettings
from purge_temp.engine.gate import ExecutionGate, ExecutionState
from purge_temp.engine.planner import StageFolderPlanner
from purge_temp.engine.reporter import ActivityReporter, FolderReport
from purge_temp.loggers.factory import LoggerFactory
from purge_temp.shared.error_codes import ErrorCode
from purge_temp.shared.interfaces import (
    AppLogger,
    DesktopNotification,
    NotificationStatus,
    PurgeLogger,
)
from purge_temp.shared.result import Result
from purge_temp.utils.files import (
    create_folder,
    delete_folder_tree,
    move_folder,
    remove_folder_if_no_files,
)
from purge_temp.utils.paths import (
    PathResolver,
    PathValidator,
    default_protected_paths,
    normalize_path,
)
from purge_temp.utils.time import format_timestamp, now

executor_logger = logging.getLogger(__name__)

# Gate outcome -> (error code, log/notification message, status)
_GATE_OUTCOMES = {
    ExecutionState.INVALID_ARGUMENTS: (
        ErrorCode.INVALID_ARGUMENTS,
        "The purge execution cannot be performed due to invalid argument(s)",
        NotificationStatus.ERROR,
    ),
    ExecutionState.TIME_SINCE_LAST_PURGE_TOO_SHORT: (
        ErrorCode.EXECUTION_TOO_FREQUENT,
        "The time since the last purge is too short. The purge was skipped",
        NotificationStatus.SKIP,
    ),
    ExecutionState.SKIPPED_BY_TOKEN: (
        ErrorCode.SKIP_TOKEN_FOUND,
        "The purge was skipped by a token ({token}), manually added to the primary purge folder",
        NotificationStatus.SKIP,
    ),
    ExecutionState.OTHER_ERRORS: (
        ErrorCode.UNKNOWN_ERROR,
        "The purge execution cannot be performed due to other errors",
        NotificationStatus.ERROR,
    ),
}


def error_code_for_state(state: ExecutionState) -> ErrorCode:
    """Exit code that a gate outcome ends a purge with."""
    if state is ExecutionState.CAN_EXECUTE:
        return ErrorCode.SUCCESS
    return _GATE_OUTCOMES[state][0]


class RotationExecutor:
    """
    Orchestrates one purge invocation.

    Sinks that are not passed explicitly are taken from a ``LoggerFactory``
    built from the same settings. ``protected_paths`` defaults to
    ``default_protected_paths()``, computed once per executor.
    """

    def __init__(
        self,
        settings: StageSettings,
        *,
        home: Optional[Union[str, os.PathLike]] = None,
        app_logger: Optional[AppLogger] = None,
        purge_logger: Optional[PurgeLogger] = None,
        notification: Optional[DesktopNotification] = None,
        logger_factory: Optional[LoggerFactory] = None,
        protected_paths: Optional[Iterable[str]] = None,
        clock: Callable[[], datetime] = now,
    ):
        self.settings = settings
        if home is None:
            home = app_home()
        deferred_logger = _DeferredAppLogger(self)
        self.resolver = PathResolver(home, deferred_logger)
        self.logger_factory = logger_factory or LoggerFactory(settings, self.resolver)
        self._app_logger = app_logger
        self._purge_logger = purge_logger
        self._notification = notification
        self.clock = clock

        if protected_paths is None:
            protected_paths = default_protected_paths()
        self.validator = PathValidator(deferred_logger, protected_paths=protected_paths)
        self.planner = StageFolderPlanner(settings, self.resolver, self.validator)
        self.execution_state: Optional[ExecutionState] = None
        self.folder_reports: List[FolderReport] = []

    @property
    def app_logger(self) -> AppLogger:
        if self._app_logger is None:
            self._app_logger = self.logger_factory.app_logger
        return self._app_logger

    @property
    def purge_logger(self) -> PurgeLogger:
        if self._purge_logger is None:
            self._purge_logger = self.logger_factory.purge_logger
        return self._purge_logger

    @property
    def notification(self) -> DesktopNotification:
        if self._notification is None:
            self._notification = self.logger_factory.notification
        return self._notification

    def notify(self, title: str, message: str, status: NotificationStatus) -> None:
        self.notification.show_notification(title, message, status)

    # ------------------------------------------------------------------ #
    # Entry points
    # ------------------------------------------------------------------ #

    def execute_purge(self) -> int:
        """Run the whole pipeline and return the ``ErrorCode`` as an int."""
        try:
            return int(self._execute_purge())
        except Exception as exc:
            executor_logger.debug("Purge aborted by an unexpected exception", exc_info=True)
            message = f"An error occurred during purge execution: {exc}"
            self.app_logger.error(message)
            self.notify("Purge not executed", message, NotificationStatus.ERROR)
            return int(ErrorCode.UNKNOWN_ERROR)

    def can_execute_purge(self) -> ExecutionState:
        """Evaluate skip token and staging delay without touching any folder."""
        gate = ExecutionGate(
            self.settings,
            self.planner,
            self.resolver,
            app_logger=self.app_logger,
            clock=self.clock,
        )
        return gate.can_execute_purge()

    def _execute_purge(self) -> ErrorCode:
        result = self.validate_general_settings()
        if result.is_not_valid:
            self.execution_state = ExecutionState.INVALID_ARGUMENTS
            self.notify(
                "Settings validation failed",
                f"The validation of the settings failed with code {int(result.error_code)}. "
                "Enable/see logs for details.",
                NotificationStatus.ERROR,
            )
            return result.error_code

        result = self.maintain_administrative_folders()
        if result.is_not_valid:
            self.execution_state = ExecutionState.INVALID_ARGUMENTS
            self.notify(
                "Preparation failed",
                f"The administrative preparation failed with code {int(result.error_code)}. "
                "Enable/see logs for details.",
                NotificationStatus.ERROR,
            )
            return result.error_code

        result = self.check_stage_folders()
        if result.is_not_valid:
            self.execution_state = ExecutionState.INVALID_ARGUMENTS
            self.notify(
                "Preparation failed",
                f"The purge folder definition is invalid and returned code {int(result.error_code)}. "
                "Enable/see logs for details.",
                NotificationStatus.ERROR,
            )
            return result.error_code

        self.execution_state = self.can_execute_purge()
        if self.execution_state is not ExecutionState.CAN_EXECUTE:
            error_code, message, status = _GATE_OUTCOMES[self.execution_state]
            message = message.format(token=self.settings.skip_token_file)
            if status is NotificationStatus.ERROR:
                self.app_logger.error(message)
            else:
                self.app_logger.info(message)
            self.notify("Purge not executed", message, status)
            return error_code

        planned = self.planner.get_stage_folders()
        if planned.is_not_valid:
            return planned.error_code

        for folder in planned.value:
            created = create_folder(folder, is_stage_folder=True)
            if created.is_not_valid:
                message = f"Could not create the stage folder '{folder}' (error code {int(created.error_code)})"
                self.app_logger.error(message)
                self.notify("Purge not executed", message, NotificationStatus.ERROR)
                return created.error_code

        stage_folders = [folder for folder in planned.value if os.path.isdir(folder)]
        result = self.rotate(stage_folders)
        if result.is_not_valid:
            return result.error_code

        init_folder = self.planner.get_init_stage_folder()
        if init_folder.is_not_valid:
            return init_folder.error_code
        result = create_folder(init_folder.value, is_stage_folder=True)
        if result.is_not_valid:
            message = f"Could not create initial purge folder {init_folder.value} (error code {int(result.error_code)})"
            self.app_logger.error(message)
            self.notify("Purge not executed", message, NotificationStatus.ERROR)
            return result.error_code

        result = self.write_last_purge_token()
        if result.is_not_valid:
            message = f"Could not write the last purge token (error code {int(result.error_code)})"
            self.app_logger.error(message)
            self.notify("Purge execution incomplete", message, NotificationStatus.ERROR)
            return result.error_code

        purged = sum(report.total_files for report in self.folder_reports if report.is_purge)
        moved = sum(report.total_files for report in self.folder_reports if not report.is_purge)
        self.app_logger.info(f"Purged {purged} file(s), moved {moved} file(s) one stage older")
        self.app_logger.info("Purge was executed successfully")
        self.notify("Purge completed", "Purge was executed successfully", NotificationStatus.OK)
        return ErrorCode.SUCCESS

    # ------------------------------------------------------------------ #
    # Pipeline steps
    # ------------------------------------------------------------------ #

    def validate_general_settings(self) -> Result:
        """Numeric ranges and the names of the logo and skip-token files."""
        settings = self.settings
        if settings.stage_versions < 1:
            self.app_logger.error("The number of stages cannot be zero or negative")
            return Result.fail(ErrorCode.INVALID_NUMBER_OF_STAGES)
        if settings.file_log_amount_threshold < -1:
            self.app_logger.error("The number of files to log on purge cannot be lower than -1")
            return Result.fail(ErrorCode.INVALID_FILE_LOG_AMOUNT)
        if settings.log_rotation_bytes < 0:
            self.app_logger.error("The number of bytes for log rotation cannot be negative")
            return Result.fail(ErrorCode.INVALID_LOG_ROTATION_BYTES)
        if settings.log_rotation_versions < 0:
            self.app_logger.error("The number of log rotation versions cannot be negative")
            return Result.fail(ErrorCode.INVALID_LOG_ROTATION_VERSIONS)
        if (
            settings.show_purge_message
            and settings.purge_message_logo_file
            and not self.validator.is_valid_file_name(settings.purge_message_logo_file)
        ):
            self.app_logger.error(f"The purge message logo file '{settings.purge_message_logo_file}' is invalid")
            return Result.fail(ErrorCode.INVALID_PURGE_MESSAGE_LOGO_FILE)
        if not self.validator.is_valid_file_name(settings.skip_token_file):
            self.app_logger.error(f"The skip token file name '{settings.skip_token_file}' is invalid")
            return Result.fail(ErrorCode.INVALID_SKIP_TOKEN_FILE)
        return Result.success()

    def maintain_administrative_folders(self) -> Result:
        """Validate and create the config, temp and (if enabled) log folders."""
        tokens = [self.settings.config_folder, self.settings.temp_folder]
        if self.settings.log_enabled:
            tokens.append(self.settings.logging_folder)

        for token in tokens:
            folder = self.resolver.resolve(token)
            result = self.check_administrative_folder(folder)
            if result.is_not_valid:
                return result
            result = create_folder(folder, is_stage_folder=False)
            if result.is_not_valid:
                self.app_logger.error(f"Could not create the administrative folder '{folder}'")
                return result
        return Result.success()

    def check_administrative_folder(self, folder: Optional[str]) -> Result:
        result = self.validator.is_valid_folder_name(folder)
        if result.is_not_valid:
            return result

        planned = self.planner.get_stage_folders()
        if planned.is_not_valid:
            return Result.fail(planned.error_code)

        normalized = os.path.normcase(normalize_path(folder))
        if any(os.path.normcase(normalize_path(stage)) == normalized for stage in planned.value):
            self.app_logger.error(
                f"Specified administrative path would lead to a conflict with a defined stage folder: {folder}"
            )
            return Result.fail(ErrorCode.ADMINISTRATIVE_PATH_CONFLICTS_WITH_STAGE_PATH)
        return Result.success()

    def check_stage_folders(self) -> Result:
        """Validate every composed stage folder path, including the assembled names."""
        planned = self.planner.get_stage_folders()
        if planned.is_not_valid:
            return Result.fail(planned.error_code)

        for stage_folder in planned.value:
            result = self.validator.is_valid_folder_name(stage_folder)
            if result.is_valid:
                continue
            if result.error_code is ErrorCode.PATH_IS_SYSTEM_DIRECTORY:
                self.app_logger.error(
                    f"Specified stage folder path would lead to a protected system folder: {stage_folder}"
                )
                return Result.fail(ErrorCode.STAGE_FOLDER_IS_SYSTEM_DIRECTORY)
            if result.error_code is ErrorCode.RESERVED_NAME_AS_FOLDER_NAME:
                self.app_logger.error(
                    f"Specified stage folder path would lead to a folder with a reserved name: {stage_folder}"
                )
                return Result.fail(ErrorCode.STAGE_FOLDER_HAS_RESERVED_FOLDER_NAME)
            self.app_logger.error(f"Specified stage folder path is invalid: {stage_folder}")
            return Result.fail(result.error_code)
        return Result.success()

    def rotate(self, stage_folders: List[str]) -> Result:
        """
        Delete the oldest folder, then shift the others one slot older.

        ``stage_folders`` holds the existing folders, newest first. Stops at
        the first delete or rename failure; nothing is rolled back.
        """
        if not stage_folders:
            return Result.success()

        reporter = ActivityReporter(self.purge_logger, self.settings.file_log_amount_threshold)
        self.folder_reports = []

        last_folder = stage_folders[-1]
        self.folder_reports.append(reporter.report_folder_contents(stage_folders, last_folder))
        try:
            delete_folder_tree(last_folder)
        except OSError as exc:
            message = f"Failed to delete the last folder '{last_folder}': {exc}"
            self.app_logger.error(message)
            self.notify("Error during purge", message, NotificationStatus.ERROR)
            return Result.fail(ErrorCode.COULD_NOT_DELETE_LAST_FOLDER)

        for index in range(len(stage_folders) - 1, 0, -1):
            current_folder = stage_folders[index - 1]
            next_folder = stage_folders[index]
            self.folder_reports.append(reporter.report_folder_contents(stage_folders, current_folder))
            try:
                move_folder(current_folder, next_folder)
            except OSError as exc:
                message = f"Failed to rename folder '{current_folder}' to '{next_folder}': {exc}"
                self.app_logger.error(message)
                self.notify("Error during purge", message, NotificationStatus.ERROR)
                return Result.fail(ErrorCode.COULD_NOT_RENAME_STAGE_FOLDER)

        if self.settings.remove_empty_stage_folders:
            for folder in stage_folders[1:]:
                if remove_folder_if_no_files(folder):
                    executor_logger.debug(f"Removed empty stage folder {folder}")

        return Result.success()

    def timestamp_token_path(self) -> Optional[str]:
        return self.resolver.resolve_file(self.settings.config_folder, self.settings.staging_timestamp_file)

    def write_last_purge_token(self) -> Result:
        """Persist the current time in ``time_stamp_format``."""
        try:
            token_path = self.timestamp_token_path()
            if token_path is None:
                raise ValueError("The last purge token path could not be resolved")
            timestamp = format_timestamp(self.clock(), self.settings.time_stamp_format)
            Path(token_path).write_text(timestamp, encoding="utf-8")
        except (OSError, ValueError) as exc:
            self.app_logger.error(f"Failed to write last purge token: {exc}")
            return Result.fail(ErrorCode.COULD_NOT_CREATE_LAST_PURGE_TOKEN)
        return Result.success()

    def close(self) -> None:
        self.logger_factory.close()


class _DeferredAppLogger(AppLogger):
    """Forwards to the executor's application logger once it is needed."""

    def __init__(self, executor: RotationExecutor):
        self.executor = executor

    def info(self, message: str) -> None:
        self.executor.app_logger.info(message)

    def warning(self, message: str) -> None:
        self.executor.app_logger.warning(message)

    def error(self, message: str) -> None:
        self.executor.app_logger.error(message)
