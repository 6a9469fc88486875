"""Outcome wrapper for operations that fail with a classified error code."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from purge_temp.shared.error_codes import ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Result of a check or operation.

    Carries the validity, an ``ErrorCode`` and an optional payload. Instances
    are created through ``success`` / ``fail`` and never mutated afterwards.
    """

    is_valid: bool
    error_code: ErrorCode
    value: Optional[T] = None

    @property
    def is_not_valid(self) -> bool:
        return not self.is_valid

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        """Create a valid result with an optional payload."""
        return cls(is_valid=True, error_code=ErrorCode.SUCCESS, value=value)

    @classmethod
    def fail(
        cls,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        value: Optional[T] = None,
    ) -> "Result[T]":
        """Create an invalid result; the payload is optional."""
        return cls(is_valid=False, error_code=ErrorCode(error_code), value=value)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "ok": self.is_valid,
            "error_code": int(self.error_code),
        }
        if self.value is not None:
            payload["value"] = self.value
        return payload
