"""Rotation planning and execution."""

from .executor import RotationExecutor
from .gate import ExecutionGate, ExecutionState
from .planner import StageFolderPlanner
from .reporter import ActivityReporter

__all__ = [
    "ActivityReporter",
    "ExecutionGate",
    "ExecutionState",
    "RotationExecutor",
    "StageFolderPlanner",
]
