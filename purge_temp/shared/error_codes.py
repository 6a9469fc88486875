"""Closed error-code taxonomy for purge executions.

Codes are grouped by range so callers (and the shell running the CLI) can
branch on them:

- 0: success
- 1-99: benign non-execution (too frequent, skipped by token)
- 100-199: invalid configuration or arguments
- 200-299: operational failures during the rotation and the catch-all
"""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Exit and result codes of a purge attempt."""

    SUCCESS = 0

    # Execution-related codes (1-99)
    EXECUTION_TOO_FREQUENT = 1
    SKIP_TOKEN_FOUND = 2

    # Argument-related codes (100-199)
    INVALID_ARGUMENTS = 100
    EMPTY_FOLDER_NAME = 101
    ILLEGAL_CHARACTERS_IN_FOLDER_NAME = 102
    RESERVED_NAME_AS_FOLDER_NAME = 103
    INVALID_FOLDER_NAME_SUFFIX = 104
    PATH_IS_SYSTEM_DIRECTORY = 105
    ADMINISTRATIVE_PATH_CONFLICTS_WITH_STAGE_PATH = 106
    STAGE_FOLDER_IS_SYSTEM_DIRECTORY = 107
    STAGE_FOLDER_HAS_RESERVED_FOLDER_NAME = 108
    INVALID_NUMBER_OF_STAGES = 109
    INVALID_FILE_LOG_AMOUNT = 110
    INVALID_LOG_ROTATION_BYTES = 111
    INVALID_LOG_ROTATION_VERSIONS = 112
    INVALID_PURGE_MESSAGE_LOGO_FILE = 113
    INVALID_SKIP_TOKEN_FILE = 114

    # Operational codes (200-299)
    UNKNOWN_ERROR = 200
    COULD_NOT_DELETE_LAST_FOLDER = 201
    COULD_NOT_RENAME_STAGE_FOLDER = 202
    COULD_NOT_CREATE_NEW_STAGE_FOLDER = 203
    COULD_NOT_CREATE_ADMINISTRATIVE_FOLDER = 204
    COULD_NOT_CREATE_LAST_PURGE_TOKEN = 205

    @property
    def category(self) -> str:
        """Return the range bucket of this code."""
        value = int(self)
        if value == 0:
            return "success"
        if value < 100:
            return "skipped"
        if value < 200:
            return "invalid"
        return "failure"

    @property
    def is_success(self) -> bool:
        return self is ErrorCode.SUCCESS
