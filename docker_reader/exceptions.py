from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    """Closed set of failure kinds surfaced to callers."""

    INVALID_ARGUMENT = "InvalidArgument"
    DAEMON_UNAVAILABLE = "DaemonUnavailable"
    CONTAINER_NOT_FOUND = "ContainerNotFound"
    CONTAINER_NOT_RUNNING = "ContainerNotRunning"
    RUNTIME_NOT_INSTALLED = "RuntimeNotInstalled"
    UNCLASSIFIED = "Unclassified"


class DockerReaderException(Exception):
    def __init__(self, message: str | None = None):
        self.message = message
        super().__init__(message)


class RuntimeCommandError(DockerReaderException):
    """Raw failure of a runtime CLI invocation, before classification."""

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        exit_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ):
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message)


class ClassifiedError(DockerReaderException):
    kind: ErrorKind = ErrorKind.UNCLASSIFIED
    default_hint: str = ""

    def __init__(self, message: str, code: str | None = None, hint: str | None = None):
        self.code = code
        self.hint = self.default_hint if hint is None else hint
        super().__init__(message)


class UnclassifiedError(ClassifiedError):
    kind = ErrorKind.UNCLASSIFIED


@dataclass(frozen=True)
class FieldViolation:
    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}" if self.path else self.reason


class InvalidArgumentError(ClassifiedError):
    kind = ErrorKind.INVALID_ARGUMENT
    default_hint = "Fix the fields listed in the message and call the tool again."

    def __init__(self, violations: list[FieldViolation]):
        self.violations = violations
        super().__init__(
            "Invalid arguments: " + ", ".join(str(v) for v in violations),
            code="INVALID_ARGUMENT",
        )


class DaemonUnavailableError(ClassifiedError):
    kind = ErrorKind.DAEMON_UNAVAILABLE
    default_hint = "Start the container runtime daemon and make sure the current user may access its socket."

    def __init__(self, message: str | None = None, code: str = "DOCKER_NOT_AVAILABLE"):
        super().__init__(
            message or "Docker is not available. Please ensure Docker is installed and running.",
            code=code,
        )


class RuntimeNotInstalledError(ClassifiedError):
    kind = ErrorKind.RUNTIME_NOT_INSTALLED
    default_hint = "Install Docker (or Podman) and make sure its CLI is on PATH, or set RUNTIME_BINARY."

    def __init__(self, binary: str = "docker"):
        self.binary = binary
        super().__init__(
            f"{binary} command not found. Please ensure it is installed and in your PATH.",
            code="RUNTIME_NOT_INSTALLED",
        )


class ContainerNotFoundError(ClassifiedError):
    kind = ErrorKind.CONTAINER_NOT_FOUND
    default_hint = "Check the container name or ID. Use docker_list_containers with all=true to see every container."

    def __init__(self, container_identifier: str, *, running_only: bool = False, message: str | None = None):
        self.container_identifier = container_identifier
        self.running_only = running_only
        if message is None:
            message = f"Container '{container_identifier}' not found"
            if running_only:
                message += " among running containers (stopped containers are not searched)"
        super().__init__(message, code="CONTAINER_NOT_FOUND")


class ContainerNotRunningError(ClassifiedError):
    kind = ErrorKind.CONTAINER_NOT_RUNNING
    default_hint = 'Use "all: true" to include stopped containers, or start the container first.'

    def __init__(self, message: str = "Container is not running."):
        super().__init__(message, code="CONTAINER_NOT_RUNNING")


class CommandTimeoutError(ClassifiedError):
    kind = ErrorKind.UNCLASSIFIED
    default_hint = "Raise COMMAND_TIMEOUT_SECONDS / EXEC_TIMEOUT_SECONDS or run a shorter command."

    def __init__(self, command: str, timeout: float):
        self.command = command
        self.timeout = timeout
        super().__init__(f"Command timed out after {timeout:g} seconds: {command}", code="COMMAND_TIMEOUT")
