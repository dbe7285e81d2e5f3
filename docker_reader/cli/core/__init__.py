"""Shared core layer for the docker-reader CLI and MCP tools.

This package provides reusable primitives that both MCP tools and CLI commands
import from, preventing logic duplication across interfaces.
"""

from .classify import classify_error, classify_failures
from .container_ops import (
    do_container_stats,
    do_exec_command,
    do_inspect_container,
    do_list_containers,
    do_read_logs,
)
from .guards import validate_args
from .result import (
    ExecOutcome,
    InspectResult,
    ListResult,
    LogsResult,
    OperationResult,
    StatsResult,
    Timer,
    error_from_exception,
    make_error,
    make_result,
)

__all__ = [
    # classify.py
    "classify_error",
    "classify_failures",
    # container_ops.py
    "do_container_stats",
    "do_exec_command",
    "do_inspect_container",
    "do_list_containers",
    "do_read_logs",
    # guards.py
    "validate_args",
    # result.py
    "ExecOutcome",
    "InspectResult",
    "ListResult",
    "LogsResult",
    "OperationResult",
    "StatsResult",
    "Timer",
    "error_from_exception",
    "make_error",
    "make_result",
]
