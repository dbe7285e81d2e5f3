"""Shared container operations for MCP tools and CLI commands.

Every operation follows the same order: validate arguments, probe the runtime, resolve the
target container against a fresh listing, run the command, parse the output. Failures leave
as ClassifiedError subclasses.
"""

from __future__ import annotations

from docker_reader.cli.container.base import BaseContainerRuntime
from docker_reader.cli.container.models import ContainerRecord, ExecRequest, LogQuery
from docker_reader.cli.container.resolver import resolve_container

from .classify import classify_failures
from .guards import (
    ContainerStatsArgs,
    ExecCommandArgs,
    InspectContainerArgs,
    ListContainersArgs,
    ReadLogsArgs,
    validate_args,
)
from .result import ExecOutcome, InspectResult, ListResult, LogsResult, StatsResult


async def resolve_target(runtime: BaseContainerRuntime, identifier: str, *, running_only: bool) -> ContainerRecord:
    """Resolve an identifier against all containers, or only running ones."""
    containers = await runtime.list_containers(all=not running_only)
    return resolve_container(containers, identifier, running_only=running_only)


@classify_failures
async def do_list_containers(runtime: BaseContainerRuntime, *, all: bool = False) -> ListResult:
    args = validate_args(ListContainersArgs, all=all)
    await runtime.ensure_running()
    containers = await runtime.list_containers(all=args.all)
    return ListResult(containers=containers, all=args.all)


@classify_failures
async def do_read_logs(
    runtime: BaseContainerRuntime,
    *,
    container: str,
    lines: int | None = None,
    since: str | None = None,
    until: str | None = None,
    timestamps: bool = False,
) -> LogsResult:
    args = validate_args(
        ReadLogsArgs,
        container=container,
        lines=lines,
        since=since,
        until=until,
        timestamps=timestamps,
    )
    await runtime.ensure_running()
    # stopped containers keep their logs
    target = await resolve_target(runtime, args.container, running_only=False)
    logs = await runtime.get_container_logs(
        LogQuery(
            container_id=target.id,
            lines=args.lines,
            since=args.since,
            until=args.until,
            timestamps=args.timestamps,
        )
    )
    return LogsResult(container=target, logs=logs)


@classify_failures
async def do_inspect_container(runtime: BaseContainerRuntime, *, container: str) -> InspectResult:
    args = validate_args(InspectContainerArgs, container=container)
    await runtime.ensure_running()
    target = await resolve_target(runtime, args.container, running_only=False)
    document = await runtime.inspect_container(target.id)
    return InspectResult(container=target, document=document)


@classify_failures
async def do_container_stats(runtime: BaseContainerRuntime, *, container: str) -> StatsResult:
    args = validate_args(ContainerStatsArgs, container=container)
    await runtime.ensure_running()
    # stats are undefined for stopped containers
    target = await resolve_target(runtime, args.container, running_only=True)
    stats = await runtime.get_container_stats(target.id)
    return StatsResult(container=target, stats=stats)


@classify_failures
async def do_exec_command(
    runtime: BaseContainerRuntime,
    *,
    container: str,
    command: list[str],
    working_dir: str | None = None,
    env: list[str] | None = None,
    user: str | None = None,
    privileged: bool = False,
    interactive: bool = False,
) -> ExecOutcome:
    args = validate_args(
        ExecCommandArgs,
        container=container,
        command=command,
        working_dir=working_dir,
        env=env,
        user=user,
        privileged=privileged,
        interactive=interactive,
    )
    await runtime.ensure_running()
    target = await resolve_target(runtime, args.container, running_only=True)
    result = await runtime.exec_in_container(
        ExecRequest(
            container_id=target.id,
            command=list(args.command),
            working_dir=args.working_dir,
            env=list(args.env or []),
            user=args.user,
            privileged=args.privileged,
            interactive=args.interactive,
        )
    )
    return ExecOutcome(container=target, command=list(args.command), result=result)
