"""Utility helpers."""

from .files import create_folder, list_files_recursive, remove_folder_if_no_files
from .paths import PathResolver, PathValidator, default_protected_paths
from .time import format_timestamp, parse_timestamp

__all__ = [
    "create_folder",
    "list_files_recursive",
    "remove_folder_if_no_files",
    "PathResolver",
    "PathValidator",
    "default_protected_paths",
    "format_timestamp",
    "parse_timestamp",
]
