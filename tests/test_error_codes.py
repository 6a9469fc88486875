#!/usr/bin/env python3
"""Tests for ErrorCode and Result."""

import pytest

from purge_temp.shared.error_codes import ErrorCode
from purge_temp.shared.result import Result


class TestErrorCode:
    def test_values(self):
        assert ErrorCode.SUCCESS == 0
        assert ErrorCode.EXECUTION_TOO_FREQUENT == 1
        assert ErrorCode.SKIP_TOKEN_FOUND == 2
        assert ErrorCode.INVALID_ARGUMENTS == 100
        assert ErrorCode.STAGE_FOLDER_HAS_RESERVED_FOLDER_NAME == 108
        assert ErrorCode.INVALID_FILE_LOG_AMOUNT == 110
        assert ErrorCode.UNKNOWN_ERROR == 200
        assert ErrorCode.COULD_NOT_CREATE_LAST_PURGE_TOKEN == 205

    def test_values_unique(self):
        values = [int(code) for code in ErrorCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        "code,category",
        [
            (ErrorCode.SUCCESS, "success"),
            (ErrorCode.SKIP_TOKEN_FOUND, "skipped"),
            (ErrorCode.PATH_IS_SYSTEM_DIRECTORY, "invalid"),
            (ErrorCode.INVALID_SKIP_TOKEN_FILE, "invalid"),
            (ErrorCode.COULD_NOT_RENAME_STAGE_FOLDER, "failure"),
        ],
    )
    def test_category(self, code, category):
        assert code.category == category

    def test_is_success(self):
        assert ErrorCode.SUCCESS.is_success
        assert not ErrorCode.UNKNOWN_ERROR.is_success


class TestResult:
    def test_success(self):
        result = Result.success("value")
        assert result.is_valid
        assert not result.is_not_valid
        assert result.error_code == ErrorCode.SUCCESS
        assert result.value == "value"

    def test_fail_defaults_to_unknown(self):
        result = Result.fail()
        assert result.is_not_valid
        assert result.error_code == ErrorCode.UNKNOWN_ERROR
        assert result.value is None

    def test_fail_with_int_code(self):
        result = Result.fail(101)
        assert result.error_code is ErrorCode.EMPTY_FOLDER_NAME

    def test_immutable(self):
        result = Result.success()
        with pytest.raises(Exception):
            result.is_valid = False

    def test_to_dict(self):
        assert Result.fail(ErrorCode.INVALID_ARGUMENTS).to_dict() == {"ok": False, "error_code": 100}
        assert Result.success([1]).to_dict() == {"ok": True, "error_code": 0, "value": [1]}
