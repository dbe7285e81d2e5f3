from __future__ import annotations

import asyncio
import contextlib

import structlog

from docker_reader.exceptions import CommandTimeoutError, RuntimeCommandError, RuntimeNotInstalledError

from .commands import RuntimeCommand
from .models import CommandOutput

LOG = structlog.get_logger(__name__)


def _decode(data: bytes | None) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


async def _kill_and_reap(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        with contextlib.suppress(ProcessLookupError):
            process.kill()
    # wait() also drains and closes the pipe transports
    await process.wait()


async def run_command(command: RuntimeCommand, *, timeout: float) -> CommandOutput:
    """Run a runtime CLI command and capture stdout, stderr and the exit status.

    A non-zero exit status is returned, not raised; callers decide what it means.
    The child process is always reaped, including on timeout and cancellation.

    Raises:
        RuntimeNotInstalledError: the CLI binary does not exist.
        RuntimeCommandError: the process could not be launched for another reason.
        CommandTimeoutError: the process did not finish within ``timeout`` seconds.
    """
    rendered = command.render()
    LOG.debug("Running runtime command", command=rendered, timeout=timeout)
    try:
        process = await asyncio.create_subprocess_exec(
            *command.argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise RuntimeNotInstalledError(command.binary) from e
    except OSError as e:
        raise RuntimeCommandError(f"Failed to launch {command.binary}: {e}", command=rendered) from e

    try:
        async with asyncio.timeout(timeout):
            stdout_bytes, stderr_bytes = await process.communicate()
    except TimeoutError as e:
        LOG.warning("Runtime command timed out", command=rendered, timeout=timeout)
        await _kill_and_reap(process)
        raise CommandTimeoutError(rendered, timeout) from e
    except asyncio.CancelledError:
        LOG.info("Runtime command cancelled, terminating child process", command=rendered)
        await asyncio.shield(_kill_and_reap(process))
        raise

    returncode = process.returncode if process.returncode is not None else 1
    if returncode != 0:
        LOG.debug("Runtime command exited non-zero", command=rendered, exit_code=returncode)
    return CommandOutput(stdout=_decode(stdout_bytes), stderr=_decode(stderr_bytes), exit_code=returncode)


def raise_for_status(output: CommandOutput, action: str, command: RuntimeCommand) -> CommandOutput:
    """Turn a non-zero exit into a RuntimeCommandError carrying the runtime's own error text."""
    if output.exit_code == 0:
        return output
    detail = output.stderr.strip() or output.stdout.strip() or f"exit status {output.exit_code}"
    raise RuntimeCommandError(
        f"Failed to {action}: {detail}",
        command=command.render(),
        exit_code=output.exit_code,
        stdout=output.stdout,
        stderr=output.stderr,
    )
