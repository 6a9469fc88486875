"""Activity log sink: one line per purged or moved file."""

from __future__ import annotations

import os
from typing import Optional

from purge_temp.config.settings import StageSettings
from purge_temp.loggers.app_logger import build_sink_logger, close_sink_logger
from purge_temp.shared.interfaces import PurgeLogger

PURGE_LOG_FILE_NAME = "purgeLog.txt"

PURGE_ACTION = "P"
MOVE_ACTION = "M"


def skipped_text(skipped_count: int, all_skipped: bool) -> str:
    """Wording of the aggregate line for files that were not listed individually."""
    if all_skipped:
        return f"(all {skipped_count} files not logged individually)"
    if skipped_count == 1:
        return "(1 file not logged)"
    return f"({skipped_count} files not logged)"


class PurgeLogWriter(PurgeLogger):
    """
    Tab separated activity lines.

    ``P\\t<folder>\\t<file>`` for deleted files and
    ``M\\t<from> => <to>\\t<file>`` for moved ones. The file sink is only used
    when both ``log_enabled`` and ``log_all_files`` are set.
    """

    def __init__(self, settings: StageSettings, log_folder: Optional[str]):
        self.log_file = None
        if settings.log_enabled and settings.log_all_files and log_folder:
            self.log_file = os.path.join(log_folder, PURGE_LOG_FILE_NAME)
        self.logger = build_sink_logger("purge", self.log_file, settings)

    def report_purge(self, folder: str, relative_file: str) -> None:
        self.logger.info(f"{PURGE_ACTION}\t{folder}\t{relative_file}")

    def report_move(self, from_folder: str, to_folder: str, relative_file: str) -> None:
        self.logger.info(f"{MOVE_ACTION}\t{from_folder} => {to_folder}\t{relative_file}")

    def report_skipped_purge(self, folder: str, skipped_count: int, all_skipped: bool) -> None:
        self.logger.info(f"{PURGE_ACTION}\t{folder}\t{skipped_text(skipped_count, all_skipped)}")

    def report_skipped_move(
        self,
        from_folder: str,
        to_folder: str,
        skipped_count: int,
        all_skipped: bool,
    ) -> None:
        self.logger.info(
            f"{MOVE_ACTION}\t{from_folder} => {to_folder}\t{skipped_text(skipped_count, all_skipped)}"
        )

    def close(self) -> None:
        close_sink_logger(self.logger)
