"""Threshold-aware reporting of the files a rotation is about to touch."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional, Sequence

from purge_temp.shared.interfaces import PurgeLogger
from purge_temp.utils.files import list_files_recursive

LOG_ALL_FILES = -1


@dataclass(frozen=True)
class FolderReport:
    """What was told to the activity sink for one folder."""

    folder: str
    target: Optional[str]
    total_files: int
    reported_files: int
    skipped_files: int

    @property
    def is_purge(self) -> bool:
        return self.target is None


class ActivityReporter:
    """
    Decide which file operations are reported individually.

    Read-only: it lists files and talks to the ``PurgeLogger``; deleting and
    moving is left to the executor.
    """

    def __init__(self, purge_logger: PurgeLogger, file_log_amount_threshold: int = LOG_ALL_FILES):
        self.purge_logger = purge_logger
        self.threshold = file_log_amount_threshold

    def report_folder_contents(self, stage_folders: Sequence[str], current_folder: str) -> FolderReport:
        """
        Report the files under ``current_folder``.

        Files in the last (oldest) folder are reported as purged, files in any
        other folder as moved to the next folder of ``stage_folders``.
        """
        folders: List[str] = list(stage_folders)
        index = folders.index(current_folder)
        is_last_folder = index == len(folders) - 1
        target = None if is_last_folder else folders[index + 1]

        files = list_files_recursive(current_folder)
        total = len(files)
        if self.threshold < 0:
            to_report = total
        else:
            to_report = min(self.threshold, total)

        for file_path in files[:to_report]:
            relative = os.path.relpath(file_path, current_folder)
            if is_last_folder:
                self.purge_logger.report_purge(current_folder, relative)
            else:
                self.purge_logger.report_move(current_folder, target, relative)

        skipped = total - to_report
        if skipped > 0:
            all_skipped = self.threshold == 0
            if is_last_folder:
                self.purge_logger.report_skipped_purge(current_folder, skipped, all_skipped)
            else:
                self.purge_logger.report_skipped_move(current_folder, target, skipped, all_skipped)

        return FolderReport(
            folder=current_folder,
            target=target,
            total_files=total,
            reported_files=to_report,
            skipped_files=skipped,
        )
