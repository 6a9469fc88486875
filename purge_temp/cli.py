#!/usr/bin/env python3
"""Command line front-end: ``purge-temp`` / ``python -m purge_temp``."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Dict, Optional, Sequence

from rich.console import Console

from purge_temp import __version__
from purge_temp.config.loader import SettingsFileError, load_settings
from purge_temp.config.settings import StageSettings
from purge_temp.engine.executor import RotationExecutor, error_code_for_state
from purge_temp.engine.gate import ExecutionState
from purge_temp.shared.error_codes import ErrorCode
from purge_temp.shared.interfaces import NullNotification

cli_logger = logging.getLogger(__name__)

# (short flag, long flag, settings field, help)
SETTING_OPTIONS = [
    ("-v", "--stage-versions", "stage_versions", "Number of stage folders (>= 1)"),
    ("-p", "--stage-name-prefix", "stage_name_prefix", "Name prefix of every stage folder"),
    ("-d", "--stage-version-delimiter", "stage_version_delimiter", "Delimiter between prefix and stage number"),
    ("-a", "--append-number-on-first-stage", "append_number_on_first_stage", "Append '1' to the newest stage (true/false)"),
    ("-t", "--staging-delay-seconds", "staging_delay_seconds", "Minimum seconds between two purges"),
    ("-m", "--show-purge-message", "show_purge_message", "Show a notification after the purge (true/false)"),
    ("-i", "--purge-message-logo", "purge_message_logo_file", "Text file shown as banner in notifications"),
    ("-f", "--logging-folder", "logging_folder", "Folder of appLog.txt and purgeLog.txt"),
    ("-e", "--log-enabled", "log_enabled", "Write log files instead of console output (true/false)"),
    ("-b", "--log-rotation-bytes", "log_rotation_bytes", "Maximum size of a log file before it rotates"),
    ("-o", "--log-rotation-versions", "log_rotation_versions", "Number of rotated log files to keep"),
    (None, "--log-all-files", "log_all_files", "Write purged/moved files to purgeLog.txt (true/false)"),
    ("-g", "--staging-timestamp-file", "staging_timestamp_file", "Name of the last-purge token in the config folder"),
    ("-r", "--stage-root-folder", "stage_root_folder", "Folder that holds the stage folders"),
    ("-c", "--config-folder", "config_folder", "Folder of the last-purge token"),
    ("-z", "--temp-folder", "temp_folder", "Temporary working folder"),
    ("-k", "--skip-token-file", "skip_token_file", "File name that pauses the next purge when found in the newest stage"),
    ("-y", "--timestamp-format", "time_stamp_format", "Format of the last-purge token (e.g. yyyy-MM-dd HH:mm:ss)"),
    ("-l", "--stage-last-name-suffix", "stage_last_name_suffix", "Suffix of the oldest stage folder"),
    ("-u", "--remove-empty-stage-folders", "remove_empty_stage_folders", "Remove stage folders without files (true/false)"),
    ("-q", "--file-log-amount-threshold", "file_log_amount_threshold", "Files logged individually per folder (-1 = all)"),
]


class CliArgumentError(Exception):
    """Raised instead of exiting when the command line cannot be parsed."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise CliArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="purge-temp",
        description="Staged temp-file purge: rotates a chain of stage folders and deletes the oldest one",
    )
    parser.add_argument(
        "-s", "--settings-file",
        help="YAML or JSON settings file (values under 'AppSettings')"
    )
    for short_flag, long_flag, field_name, help_text in SETTING_OPTIONS:
        flags = [flag for flag in (short_flag, long_flag) if flag]
        parser.add_argument(*flags, dest=field_name, metavar="VALUE", help=help_text)
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the planned stage folders and whether a purge would run, without rotating"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress the purge notification"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print internal diagnostics to stderr"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser


def cli_overrides(args: argparse.Namespace) -> Dict[str, str]:
    """Settings given on the command line, keyed by field name."""
    overrides: Dict[str, str] = {}
    for _, _, field_name, _ in SETTING_OPTIONS:
        value = getattr(args, field_name, None)
        if value is not None:
            overrides[field_name] = value
    return overrides


def dry_run(executor: RotationExecutor, console: Console) -> int:
    """Print the plan and the gate decision; nothing on disk changes."""
    result = executor.validate_general_settings()
    if result.is_valid:
        result = executor.check_stage_folders()
    if result.is_not_valid:
        console.print(f"❌ Invalid settings (error code {int(result.error_code)})")
        return int(result.error_code)

    planned = executor.planner.get_stage_folders()
    console.print("📂 Stage folders (newest first):")
    for index, folder in enumerate(planned.value, start=1):
        exists = "exists" if os.path.isdir(folder) else "missing"
        console.print(f"  {index}. {folder} ({exists})", soft_wrap=True, markup=False, highlight=False)

    state = executor.can_execute_purge()
    emoji = "✅" if state is ExecutionState.CAN_EXECUTE else "⏭️"
    console.print(f"{emoji} Gate decision: {state.name}")
    return int(error_code_for_state(state))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point; returns the ``ErrorCode`` used as exit status."""
    parser = build_parser()
    console = Console(stderr=True)
    try:
        args = parser.parse_args(argv)
    except CliArgumentError as exc:
        parser.print_usage(sys.stderr)
        console.print(f"❌ {exc}")
        return int(ErrorCode.INVALID_ARGUMENTS)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        settings: StageSettings = load_settings(args.settings_file, cli_overrides(args))
    except SettingsFileError as exc:
        console.print(f"❌ {exc}")
        return int(ErrorCode.INVALID_ARGUMENTS)
    except (KeyError, ValueError) as exc:
        console.print(f"❌ Invalid setting: {exc}")
        return int(ErrorCode.INVALID_ARGUMENTS)

    executor_kwargs = {}
    if args.quiet:
        executor_kwargs["notification"] = NullNotification()
    executor = RotationExecutor(settings, **executor_kwargs)
    try:
        if args.dry_run:
            return dry_run(executor, Console())
        exit_code = executor.execute_purge()
        cli_logger.debug(f"Purge finished with code {exit_code}")
        return exit_code
    finally:
        executor.close()


if __name__ == "__main__":
    sys.exit(main())
