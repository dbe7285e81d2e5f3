from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from typing import Any

import structlog

from docker_reader.config import settings
from docker_reader.exceptions import (
    CommandTimeoutError,
    DaemonUnavailableError,
    DockerReaderException,
    RuntimeCommandError,
)

from .commands import (
    RuntimeCommand,
    build_exec_command,
    build_inspect_command,
    build_list_command,
    build_logs_command,
    build_stats_command,
    build_version_command,
)
from .executor import raise_for_status, run_command
from .models import CommandOutput, ContainerRecord, ContainerRuntime, ExecRequest, ExecResult, LogQuery
from .parsing import combine_log_streams, parse_container_list, parse_inspect_output, parse_stats_output

LOG = structlog.get_logger(__name__)

# Messages the runtime CLI prints when the exec never started. Docker exits 1 (or 126/127) for these.
RUNTIME_ERROR_PREFIXES = (
    "Error response from daemon",
    "OCI runtime exec failed",
    "the input device is not a TTY",
)
# Podman reserves 125 for its own failures and prefixes them with a bare "Error: ".
RUNTIME_FAILURE_EXIT_CODE = 125
RUNTIME_FAILURE_PREFIX = "Error: "


def _is_runtime_failure(output: CommandOutput) -> bool:
    if output.stderr.startswith(RUNTIME_ERROR_PREFIXES):
        return True
    return output.exit_code == RUNTIME_FAILURE_EXIT_CODE and output.stderr.startswith(RUNTIME_FAILURE_PREFIX)


class BaseContainerRuntime(ABC):
    """Read and exec operations shared by CLI-compatible container runtimes.

    Every method re-queries the runtime; nothing is cached between calls.
    """

    def __init__(
        self,
        binary: str | None = None,
        *,
        command_timeout: float | None = None,
        exec_timeout: float | None = None,
        probe_timeout: float | None = None,
    ) -> None:
        self._binary = binary
        self._command_timeout = command_timeout
        self._exec_timeout = exec_timeout
        self._probe_timeout = probe_timeout

    @property
    @abstractmethod
    def runtime_type(self) -> ContainerRuntime:
        """Return the runtime type identifier."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Return a human-readable name for the runtime."""

    @property
    def binary(self) -> str:
        return self._binary or self.runtime_type.value

    @property
    def command_timeout(self) -> float:
        if self._command_timeout is None:
            return settings.COMMAND_TIMEOUT_SECONDS
        return self._command_timeout

    @property
    def exec_timeout(self) -> float:
        if self._exec_timeout is None:
            return settings.EXEC_TIMEOUT_SECONDS
        return self._exec_timeout

    @property
    def probe_timeout(self) -> float:
        if self._probe_timeout is None:
            return settings.PROBE_TIMEOUT_SECONDS
        return self._probe_timeout

    def is_available(self) -> bool:
        """Check if the runtime binary is available on the system."""
        return shutil.which(self.binary) is not None

    def unavailable_message(self, output: CommandOutput) -> str:
        if "permission denied" in output.stderr.lower():
            return (
                f"{self.display_name} permission denied. Please ensure your user has permission to access "
                f"{self.display_name} or run with appropriate privileges."
            )
        return f"{self.display_name} is not available. Please ensure {self.display_name} is installed and running."

    async def ensure_running(self) -> None:
        """Probe the CLI and daemon with a version query.

        Raises:
            RuntimeNotInstalledError: the CLI binary is missing.
            DaemonUnavailableError: the CLI runs but cannot reach the daemon.
        """
        command = build_version_command(self.binary)
        try:
            output = await run_command(command, timeout=self.probe_timeout)
        except CommandTimeoutError as e:
            raise DaemonUnavailableError(
                f"{self.display_name} did not respond within {self.probe_timeout:g} seconds."
            ) from e
        except RuntimeCommandError as e:
            raise DaemonUnavailableError(str(e)) from e

        if output.exit_code != 0:
            LOG.warning(
                "Container runtime probe failed",
                runtime=self.runtime_type.value,
                exit_code=output.exit_code,
                stderr=output.stderr.strip(),
            )
            raise DaemonUnavailableError(self.unavailable_message(output))

    async def is_running(self) -> bool:
        """Check if the runtime daemon/service is running and accessible."""
        try:
            await self.ensure_running()
        except DockerReaderException:
            return False
        return True

    async def _run_checked(self, command: RuntimeCommand, action: str) -> CommandOutput:
        output = await run_command(command, timeout=self.command_timeout)
        return raise_for_status(output, action, command)

    async def list_containers(self, all: bool = False) -> list[ContainerRecord]:
        command = build_list_command(self.binary, all=all)
        output = await self._run_checked(command, "list containers")
        return parse_container_list(output.stdout)

    async def get_container_logs(self, query: LogQuery) -> str:
        command = build_logs_command(self.binary, query)
        output = await self._run_checked(command, "get container logs")
        return combine_log_streams(output.stdout, output.stderr)

    async def inspect_container(self, container_id: str) -> dict[str, Any]:
        command = build_inspect_command(self.binary, container_id)
        output = await self._run_checked(command, "inspect container")
        return parse_inspect_output(output.stdout, container_id)

    async def get_container_stats(self, container_id: str) -> str:
        command = build_stats_command(self.binary, container_id)
        output = await self._run_checked(command, "get container stats")
        return parse_stats_output(output.stdout)

    async def exec_in_container(self, request: ExecRequest) -> ExecResult:
        """Execute a command inside a running container.

        A non-zero exit status is the command's own status and is returned, not raised, unless
        stderr opens with one of the runtime's own error messages, which means the command never ran.
        """
        command = build_exec_command(self.binary, request)
        output = await run_command(command, timeout=self.exec_timeout)

        if output.exit_code != 0 and _is_runtime_failure(output):
            raise_for_status(output, "execute command in container", command)

        if output.exit_code != 0:
            LOG.info(
                "Command in container exited non-zero",
                container_id=request.container_id,
                exit_code=output.exit_code,
            )
        return ExecResult(exit_code=output.exit_code, stdout=output.stdout, stderr=output.stderr)
