"""Staged temp-file purge: a chain of stage folders that ages files before deleting them."""

from __future__ import annotations

__version__ = "1.0.0"

from .config.settings import Keys, StageSettings
from .engine.executor import RotationExecutor
from .engine.gate import ExecutionGate, ExecutionState
from .engine.planner import StageFolderPlanner
from .engine.reporter import ActivityReporter
from .shared.error_codes import ErrorCode
from .shared.result import Result

__all__ = [
    "__version__",
    "ActivityReporter",
    "ErrorCode",
    "ExecutionGate",
    "ExecutionState",
    "Keys",
    "Result",
    "RotationExecutor",
    "StageFolderPlanner",
    "StageSettings",
]
