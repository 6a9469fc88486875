"""Filesystem helpers used by the rotation: folder creation, listing, pruning."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import List, Union

from purge_temp.shared.error_codes import ErrorCode
from purge_temp.shared.result import Result

files_logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def create_folder(path: PathLike, is_stage_folder: bool = True) -> Result:
    """
    Create ``path`` (and parents) unless it already exists.

    Failures map to COULD_NOT_CREATE_NEW_STAGE_FOLDER for stage folders and
    COULD_NOT_CREATE_ADMINISTRATIVE_FOLDER for config/temp/log folders.
    """
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
        return Result.success()
    except (OSError, ValueError) as exc:
        files_logger.debug(f"Failed to create folder {path}: {exc}")
        if is_stage_folder:
            return Result.fail(ErrorCode.COULD_NOT_CREATE_NEW_STAGE_FOLDER)
        return Result.fail(ErrorCode.COULD_NOT_CREATE_ADMINISTRATIVE_FOLDER)


def list_files_recursive(folder: PathLike) -> List[Path]:
    """All files below ``folder``, sorted for a stable report order."""
    root = Path(folder)
    if not root.is_dir():
        return []
    return sorted(item for item in root.rglob("*") if item.is_file())


def count_top_level_files(folder: PathLike) -> int:
    """Number of files directly inside ``folder``; sub-directories are ignored."""
    with os.scandir(folder) as entries:
        return sum(1 for entry in entries if entry.is_file())


def delete_folder_tree(folder: PathLike) -> None:
    """Delete ``folder`` with all of its contents."""
    shutil.rmtree(folder)


def move_folder(source: PathLike, target: PathLike) -> None:
    """Rename ``source`` to ``target``; ``target`` must not exist."""
    if os.path.exists(target):
        raise FileExistsError(f"Cannot rename '{source}': '{target}' already exists")
    os.rename(source, target)


def remove_folder_if_no_files(folder: PathLike) -> bool:
    """
    Remove ``folder`` when it has no files directly inside it.

    Only the top-level file count is inspected: a folder holding only
    sub-directories is kept. Returns True if the folder was removed.
    """
    if not os.path.isdir(folder):
        return False
    if count_top_level_files(folder) != 0:
        return False
    try:
        os.rmdir(folder)
    except OSError as exc:
        files_logger.debug(f"Kept stage folder {folder}: {exc}")
        return False
    return True
