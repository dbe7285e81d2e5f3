"""Map raw runtime failures onto the closed error taxonomy."""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

import structlog

from docker_reader.exceptions import (
    ClassifiedError,
    ContainerNotFoundError,
    ContainerNotRunningError,
    DaemonUnavailableError,
    DockerReaderException,
    RuntimeNotInstalledError,
    UnclassifiedError,
)

LOG = structlog.get_logger(__name__)

PERMISSION_DENIED_PATTERNS = ("permission denied",)
DAEMON_UNREACHABLE_PATTERNS = (
    "cannot connect to the docker daemon",
    "is the docker daemon running",
    "cannot connect to podman",
)
NOT_RUNNING_PATTERNS = ("is not running",)
NOT_FOUND_PATTERNS = ("no such container",)
NOT_INSTALLED_PATTERNS = ("command not found",)

P = ParamSpec("P")
R = TypeVar("R")


def _matches(text: str, patterns: tuple[str, ...]) -> bool:
    return any(pattern in text for pattern in patterns)


def classify_error(error: BaseException | str) -> ClassifiedError:
    """Return the taxonomy entry for a failure, checking the most specific patterns first.

    Already-classified errors are returned unchanged. Unknown failures become
    UnclassifiedError carrying the failure text verbatim.
    """
    if isinstance(error, ClassifiedError):
        return error

    text = error if isinstance(error, str) else str(error)
    lowered = text.lower()

    if _matches(lowered, PERMISSION_DENIED_PATTERNS):
        return DaemonUnavailableError(
            "Docker permission denied. Please ensure your user has permission to access Docker "
            "or run with appropriate privileges.",
            code="DOCKER_PERMISSION_DENIED",
        )
    if _matches(lowered, DAEMON_UNREACHABLE_PATTERNS):
        return DaemonUnavailableError()
    if _matches(lowered, NOT_RUNNING_PATTERNS):
        return ContainerNotRunningError('Container is not running. Use "all: true" to include stopped containers.')
    if _matches(lowered, NOT_FOUND_PATTERNS):
        return ContainerNotFoundError(
            "",
            message="Container not found. Check the container name or ID and try again.",
        )
    if _matches(lowered, NOT_INSTALLED_PATTERNS):
        return RuntimeNotInstalledError()

    return UnclassifiedError(text or "An unknown error occurred")


def classify_failures(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Re-raise raw runtime failures from an operation as classified errors."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except ClassifiedError:
            raise
        except DockerReaderException as e:
            classified = classify_error(e)
            LOG.info(
                "Classified runtime failure",
                operation=func.__name__,
                kind=classified.kind.value,
                code=classified.code,
            )
            raise classified from e

    return wrapper
