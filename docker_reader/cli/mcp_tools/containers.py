"""MCP tools for reading container state.

Each tool validates its arguments, probes the runtime daemon, resolves the target
container and runs one runtime CLI command. Tools never raise; every failure comes
back as an envelope with ``ok=false`` and a classified error.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import Field

from docker_reader.cli.core.container_ops import (
    do_container_stats,
    do_exec_command,
    do_inspect_container,
    do_list_containers,
    do_read_logs,
)

from ._common import Timer, error_result, get_runtime, make_result


async def docker_list_containers(
    all: Annotated[bool, Field(description="Include stopped containers (default shows only running)")] = False,
) -> dict[str, Any]:
    """List Docker containers with their ID, name, image, status, ports and creation time.

    Shows running containers by default. Set all=true to include stopped ones.
    """
    action = "docker_list_containers"
    with Timer() as timer:
        try:
            result = await do_list_containers(get_runtime(), all=all)
            timer.mark("runtime")
        except Exception as e:
            return error_result(action, e, timer)

    return make_result(action, data=result.to_dict(), timing_ms=timer.timing_ms)


async def docker_read_logs(
    container: Annotated[str, Field(description="Container name or ID")],
    lines: Annotated[
        int | None, Field(description="Number of lines to read from the end (1-10000, default 100)")
    ] = None,
    since: Annotated[
        str | None,
        Field(description="Show logs since timestamp (e.g. 2024-01-01T00:00:00, 42m, 1h, or a Unix timestamp)"),
    ] = None,
    until: Annotated[str | None, Field(description="Show logs until timestamp (same formats as since)")] = None,
    timestamps: Annotated[bool, Field(description="Prefix each log line with its timestamp")] = False,
) -> dict[str, Any]:
    """Read logs from a Docker container. Works for stopped containers too.

    stdout and stderr are merged into one text block.
    """
    action = "docker_read_logs"
    warnings: list[str] = []
    with Timer() as timer:
        try:
            result = await do_read_logs(
                get_runtime(),
                container=container,
                lines=lines,
                since=since,
                until=until,
                timestamps=timestamps,
            )
            timer.mark("runtime")
        except Exception as e:
            return error_result(action, e, timer)

    if not result.logs:
        warnings.append("Container produced no log output for the requested range")
    return make_result(action, data=result.to_dict(), timing_ms=timer.timing_ms, warnings=warnings)


async def docker_inspect_container(
    container: Annotated[str, Field(description="Container name or ID")],
) -> dict[str, Any]:
    """Get detailed information about a container: configuration, state, mounts and networking."""
    action = "docker_inspect_container"
    with Timer() as timer:
        try:
            result = await do_inspect_container(get_runtime(), container=container)
            timer.mark("runtime")
        except Exception as e:
            return error_result(action, e, timer)

    return make_result(action, data=result.to_dict(), timing_ms=timer.timing_ms)


async def docker_container_stats(
    container: Annotated[str, Field(description="Container name or ID (must be running)")],
) -> dict[str, Any]:
    """Get a one-shot snapshot of CPU, memory, network and block I/O usage for a running container."""
    action = "docker_container_stats"
    with Timer() as timer:
        try:
            result = await do_container_stats(get_runtime(), container=container)
            timer.mark("runtime")
        except Exception as e:
            return error_result(action, e, timer)

    return make_result(action, data=result.to_dict(), timing_ms=timer.timing_ms)


async def docker_exec_command(
    container: Annotated[str, Field(description="Container name or ID (must be running)")],
    command: Annotated[
        list[str],
        Field(description='Command and arguments, one element per argument (e.g. ["ls", "-la", "/app"])'),
    ],
    working_dir: Annotated[str | None, Field(description="Absolute working directory inside the container")] = None,
    env: Annotated[list[str] | None, Field(description="Environment variables as KEY=VALUE entries")] = None,
    user: Annotated[str | None, Field(description="Run as this user (name, uid, or uid:gid)")] = None,
    privileged: Annotated[bool, Field(description="Give extended privileges to the command")] = False,
    interactive: Annotated[bool, Field(description="Allocate a TTY and keep stdin open")] = False,
) -> dict[str, Any]:
    """Execute a command inside a running container and return its exit code, stdout and stderr.

    A non-zero exit code is reported in the result, not as an error.
    Arguments are passed to the runtime as-is, never through a shell.
    """
    action = "docker_exec_command"
    warnings: list[str] = []
    with Timer() as timer:
        try:
            outcome = await do_exec_command(
                get_runtime(),
                container=container,
                command=command,
                working_dir=working_dir,
                env=env,
                user=user,
                privileged=privileged,
                interactive=interactive,
            )
            timer.mark("runtime")
        except Exception as e:
            return error_result(action, e, timer)

    if not outcome.result.success:
        warnings.append(f"Command exited with code {outcome.result.exit_code}")
    return make_result(action, data=outcome.to_dict(), timing_ms=timer.timing_ms, warnings=warnings)
