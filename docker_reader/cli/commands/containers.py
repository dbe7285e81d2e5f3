from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable
from typing import Any

import typer

from docker_reader.cli.mcp_tools.containers import (
    docker_container_stats,
    docker_exec_command,
    docker_inspect_container,
    docker_list_containers,
    docker_read_logs,
)

from ._output import emit_json, output, output_containers, output_error, output_warnings

containers_app = typer.Typer(help="Read container state.", no_args_is_help=True)


def _run_tool(coro: Awaitable[dict[str, Any]], *, json_output: bool) -> dict[str, Any]:
    result = asyncio.run(coro)  # type: ignore[arg-type]
    if json_output:
        emit_json(result)
        if not result.get("ok", False):
            raise SystemExit(1)
        return result

    if not result.get("ok", False):
        err = result.get("error") or {}
        output_error(
            str(err.get("message") or "Unknown error"),
            kind=str(err.get("kind") or ""),
            hint=str(err.get("hint") or ""),
        )
    output_warnings(result.get("warnings") or [])
    return result


@containers_app.command("list")
def list_containers(
    all: bool = typer.Option(False, "--all", "-a", help="Include stopped containers."),
    json_output: bool = typer.Option(False, "--json", help="Output the result envelope as JSON."),
) -> None:
    """List containers."""
    result = _run_tool(docker_list_containers(all=all), json_output=json_output)
    if not json_output:
        output_containers(result["data"]["containers"])


@containers_app.command("logs")
def logs(
    container: str = typer.Argument(..., help="Container name or ID."),
    lines: int | None = typer.Option(None, "--lines", "-n", help="Number of lines from the end (1-10000)."),
    since: str | None = typer.Option(None, help="Show logs since timestamp (ISO, relative like 42m, or Unix)."),
    until: str | None = typer.Option(None, help="Show logs until timestamp."),
    timestamps: bool = typer.Option(False, "--timestamps", "-t", help="Prefix lines with timestamps."),
    json_output: bool = typer.Option(False, "--json", help="Output the result envelope as JSON."),
) -> None:
    """Print container logs, stdout and stderr merged."""
    result = _run_tool(
        docker_read_logs(container=container, lines=lines, since=since, until=until, timestamps=timestamps),
        json_output=json_output,
    )
    if not json_output:
        output(result["data"])


@containers_app.command("inspect")
def inspect(
    container: str = typer.Argument(..., help="Container name or ID."),
    json_output: bool = typer.Option(False, "--json", help="Output the result envelope as JSON."),
) -> None:
    """Show the full inspection document of a container."""
    result = _run_tool(docker_inspect_container(container=container), json_output=json_output)
    if not json_output:
        output(result["data"])


@containers_app.command("stats")
def stats(
    container: str = typer.Argument(..., help="Running container name or ID."),
    json_output: bool = typer.Option(False, "--json", help="Output the result envelope as JSON."),
) -> None:
    """Show a resource usage snapshot of a running container."""
    result = _run_tool(docker_container_stats(container=container), json_output=json_output)
    if not json_output:
        output(result["data"])


@containers_app.command("exec", context_settings={"allow_interspersed_args": False})
def exec_command(
    container: str = typer.Argument(..., help="Running container name or ID."),
    command: list[str] = typer.Argument(..., help="Command and its arguments."),
    workdir: str | None = typer.Option(None, "--workdir", "-w", help="Absolute working directory."),
    env: list[str] = typer.Option([], "--env", "-e", help="KEY=VALUE, repeatable."),
    user: str | None = typer.Option(None, "--user", "-u", help="User name, uid or uid:gid."),
    privileged: bool = typer.Option(False, "--privileged", help="Give extended privileges."),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Allocate a TTY and keep stdin open."),
    json_output: bool = typer.Option(False, "--json", help="Output the result envelope as JSON."),
) -> None:
    """Run a command in a running container and exit with its exit code."""
    result = _run_tool(
        docker_exec_command(
            container=container,
            command=command,
            working_dir=workdir,
            env=env or None,
            user=user,
            privileged=privileged,
            interactive=interactive,
        ),
        json_output=json_output,
    )
    if json_output:
        return

    data = result["data"]
    sys.stdout.write(data["stdout"])
    sys.stderr.write(data["stderr"])
    if data["exit_code"] != 0:
        raise SystemExit(data["exit_code"])
