"""Helpers shared by the MCP tool modules.

Tools import from here; the canonical implementations live in core/ and container/.
"""

from __future__ import annotations

from typing import Any

import structlog

from docker_reader.cli.container import BaseContainerRuntime, ContainerRuntimeFactory
from docker_reader.cli.core.classify import classify_error
from docker_reader.cli.core.result import Timer, error_from_exception, make_error, make_result

LOG = structlog.get_logger(__name__)


def get_runtime() -> BaseContainerRuntime:
    return ContainerRuntimeFactory.get_runtime()


def error_result(action: str, error: Exception, timer: Timer) -> dict[str, Any]:
    """Turn any exception raised by an operation into a failure envelope."""
    classified = classify_error(error)
    if classified is not error:
        LOG.warning("Unexpected failure in tool", action=action, error=str(error), exc_info=True)
    return make_result(action, ok=False, timing_ms=timer.timing_ms, error=error_from_exception(classified))


__all__ = [
    "Timer",
    "error_result",
    "get_runtime",
    "make_error",
    "make_result",
]
