"""Tests for the shared container operations (validate, probe, resolve, run)."""

from __future__ import annotations

import pytest

from docker_reader.cli.core.container_ops import (
    do_container_stats,
    do_exec_command,
    do_inspect_container,
    do_list_containers,
    do_read_logs,
)
from docker_reader.exceptions import (
    CommandTimeoutError,
    ContainerNotFoundError,
    ContainerNotRunningError,
    DaemonUnavailableError,
    ErrorKind,
    InvalidArgumentError,
    RuntimeNotInstalledError,
    UnclassifiedError,
)
from tests.unit.helpers import INSPECT_DOCUMENT, STATS_TABLE, WEB_ID, WORKER_ID, ScriptedRunner, failed, ok

ALL_OPERATIONS = [
    pytest.param(lambda rt: do_list_containers(rt), id="list"),
    pytest.param(lambda rt: do_read_logs(rt, container="web"), id="logs"),
    pytest.param(lambda rt: do_inspect_container(rt, container="web"), id="inspect"),
    pytest.param(lambda rt: do_container_stats(rt, container="web"), id="stats"),
    pytest.param(lambda rt: do_exec_command(rt, container="web", command=["ls"]), id="exec"),
]


class TestListContainers:
    @pytest.mark.asyncio
    async def test_running_only_by_default(self, runtime, runner: ScriptedRunner) -> None:
        result = await do_list_containers(runtime)
        assert [c.name for c in result.containers] == ["web"]
        assert "-a" not in runner.last("ps").argv
        assert result.to_dict()["count"] == 1

    @pytest.mark.asyncio
    async def test_all_includes_stopped(self, runtime, runner: ScriptedRunner) -> None:
        result = await do_list_containers(runtime, all=True)
        assert [c.name for c in result.containers] == ["web", "worker"]
        assert result.to_dict()["text"].startswith("Found 2 containers:")

    @pytest.mark.asyncio
    async def test_empty_listing(self, runtime, runner: ScriptedRunner) -> None:
        runner.rows = []
        result = await do_list_containers(runtime)
        assert result.containers == []
        assert result.to_dict()["text"].startswith("Found 0 containers:")


class TestReadLogs:
    @pytest.mark.asyncio
    async def test_logs_of_stopped_container(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["logs"] = ok("started\nfinished\n", "")
        result = await do_read_logs(runtime, container="worker", lines=50, since="1h", timestamps=True)

        assert result.container.id == WORKER_ID
        assert result.logs == "started\nfinished\n"
        assert runner.subcommands == ["version", "ps", "logs"]
        assert "-a" in runner.last("ps").argv
        logs_argv = runner.last("logs").argv
        assert logs_argv == ["docker", "logs", "--tail", "50", "--since", "1h", "--timestamps", WORKER_ID]

    @pytest.mark.asyncio
    async def test_streams_are_merged(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["logs"] = ok("to stdout", "to stderr")
        result = await do_read_logs(runtime, container="web")
        assert result.logs == "to stdout\nto stderr"
        assert "--tail" in runner.last("logs").argv
        assert runner.last("logs").argv[runner.last("logs").argv.index("--tail") + 1] == "100"

    @pytest.mark.asyncio
    async def test_empty_stderr_adds_no_blank_line(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["logs"] = ok("only stdout", "")
        result = await do_read_logs(runtime, container="web")
        assert result.logs == "only stdout"


class TestInspect:
    @pytest.mark.asyncio
    async def test_inspect_by_id_prefix(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["inspect"] = ok(INSPECT_DOCUMENT)
        result = await do_inspect_container(runtime, container="abc123")
        assert result.document["Name"] == "/web"
        assert runner.last("inspect").argv == ["docker", "inspect", WEB_ID]
        assert '"Running": true' in result.to_dict()["text"]

    @pytest.mark.asyncio
    async def test_inspect_by_slash_prefixed_name(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["inspect"] = ok(INSPECT_DOCUMENT)
        result = await do_inspect_container(runtime, container="/web")
        assert result.container.id == WEB_ID

    @pytest.mark.asyncio
    async def test_unknown_container(self, runtime, runner: ScriptedRunner) -> None:
        with pytest.raises(ContainerNotFoundError) as exc_info:
            await do_inspect_container(runtime, container="nope")
        assert exc_info.value.message == "Container 'nope' not found"
        assert "inspect" not in runner.subcommands

    @pytest.mark.asyncio
    async def test_container_removed_between_listing_and_inspect(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["inspect"] = failed(f"Error: No such object: {WEB_ID}\n", stdout="[]")
        with pytest.raises(UnclassifiedError) as exc_info:
            await do_inspect_container(runtime, container="web")
        assert "No such object" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_no_such_container_is_classified(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["inspect"] = failed(f"Error: No such container: {WEB_ID}")
        with pytest.raises(ContainerNotFoundError):
            await do_inspect_container(runtime, container="web")


class TestStats:
    @pytest.mark.asyncio
    async def test_stats_of_running_container(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["stats"] = ok(STATS_TABLE)
        result = await do_container_stats(runtime, container="web")
        assert result.stats == STATS_TABLE
        assert "-a" not in runner.last("ps").argv
        assert result.to_dict()["text"].startswith("Resource usage statistics for container 'web'")

    @pytest.mark.asyncio
    async def test_stopped_container_is_not_found(self, runtime, runner: ScriptedRunner) -> None:
        with pytest.raises(ContainerNotFoundError) as exc_info:
            await do_container_stats(runtime, container="worker")
        assert "stopped containers are not searched" in exc_info.value.message
        assert "stats" not in runner.subcommands

    @pytest.mark.asyncio
    async def test_container_stopped_after_listing(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["stats"] = failed("Error response from daemon: Container web is not running")
        with pytest.raises(ContainerNotRunningError):
            await do_container_stats(runtime, container="web")


class TestExec:
    @pytest.mark.asyncio
    async def test_non_zero_exit_is_a_result(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["exec"] = failed("boom", exit_code=7, stdout="partial")
        outcome = await do_exec_command(runtime, container="web", command=["sh", "-c", "exit 7"])

        assert outcome.result.exit_code == 7
        assert not outcome.result.success
        assert outcome.result.stdout == "partial"
        assert outcome.result.stderr == "boom"
        assert outcome.to_dict()["exit_code"] == 7

    @pytest.mark.asyncio
    async def test_exec_uses_exec_timeout(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["exec"] = ok("hi\n")
        await do_exec_command(runtime, container="web", command=["echo", "hi"])
        assert runner.timeouts[-1] == 300
        assert runner.timeouts[:2] == [10, 60]

    @pytest.mark.asyncio
    async def test_arguments_reach_the_runtime_unjoined(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["exec"] = ok()
        await do_exec_command(
            runtime,
            container="web",
            command=["echo", "a; rm -rf /", "$(id)"],
            env=["GREETING=it's"],
            working_dir="/srv",
            user="www-data",
        )
        assert runner.last("exec").argv == [
            "docker",
            "exec",
            "--workdir",
            "/srv",
            "--user",
            "www-data",
            "--env",
            "GREETING=it's",
            WEB_ID,
            "echo",
            "a; rm -rf /",
            "$(id)",
        ]

    @pytest.mark.asyncio
    async def test_stopped_container_is_not_found(self, runtime, runner: ScriptedRunner) -> None:
        with pytest.raises(ContainerNotFoundError):
            await do_exec_command(runtime, container="worker", command=["ls"])
        assert "exec" not in runner.subcommands

    @pytest.mark.asyncio
    async def test_runtime_failure_status_is_an_error(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["exec"] = failed(f"Error response from daemon: Container {WEB_ID} is not running", 125)
        with pytest.raises(ContainerNotRunningError):
            await do_exec_command(runtime, container="web", command=["ls"])

    @pytest.mark.asyncio
    async def test_docker_not_running_with_status_1_is_an_error(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["exec"] = failed(f"Error response from daemon: Container {WEB_ID} is not running\n", 1)
        with pytest.raises(ContainerNotRunningError):
            await do_exec_command(runtime, container="web", command=["ls"])

    @pytest.mark.asyncio
    async def test_docker_no_such_container_with_status_1_is_an_error(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["exec"] = failed(f"Error response from daemon: No such container: {WEB_ID}\n", 1)
        with pytest.raises(ContainerNotFoundError):
            await do_exec_command(runtime, container="web", command=["ls"])

    @pytest.mark.asyncio
    async def test_interactive_without_tty_is_an_error(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["exec"] = failed("the input device is not a TTY\n", 1)
        with pytest.raises(UnclassifiedError) as exc_info:
            await do_exec_command(runtime, container="web", command=["sh"], interactive=True)
        assert "the input device is not a TTY" in exc_info.value.message
        assert "-it" in runner.last("exec").argv

    @pytest.mark.asyncio
    async def test_command_printing_error_with_status_1_is_a_result(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["exec"] = failed("Error: config file missing", 1)
        outcome = await do_exec_command(runtime, container="web", command=["mytool"])
        assert outcome.result.exit_code == 1
        assert outcome.result.stderr == "Error: config file missing"

    @pytest.mark.asyncio
    async def test_exit_125_from_the_command_itself_is_a_result(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["exec"] = failed("my tool failed", 125)
        outcome = await do_exec_command(runtime, container="web", command=["mytool"])
        assert outcome.result.exit_code == 125

    @pytest.mark.asyncio
    async def test_timeout_surfaces_as_unclassified(self, runtime, runner: ScriptedRunner) -> None:
        runner.handlers["exec"] = CommandTimeoutError("docker exec web sleep 1000", 300)
        with pytest.raises(CommandTimeoutError) as exc_info:
            await do_exec_command(runtime, container="web", command=["sleep", "1000"])
        assert exc_info.value.kind == ErrorKind.UNCLASSIFIED


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ALL_OPERATIONS)
async def test_daemon_unavailable_short_circuits(operation, runtime, runner: ScriptedRunner) -> None:
    runner.handlers["version"] = failed("Cannot connect to the Docker daemon. Is the docker daemon running?")
    with pytest.raises(DaemonUnavailableError) as exc_info:
        await operation(runtime)
    assert exc_info.value.kind == ErrorKind.DAEMON_UNAVAILABLE
    assert runner.subcommands == ["version"]


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ALL_OPERATIONS)
async def test_missing_runtime_short_circuits(operation, runtime, runner: ScriptedRunner) -> None:
    runner.handlers["version"] = RuntimeNotInstalledError("docker")
    with pytest.raises(RuntimeNotInstalledError):
        await operation(runtime)
    assert runner.subcommands == ["version"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "operation",
    [
        pytest.param(lambda rt: do_read_logs(rt, container="web", lines=0), id="logs-lines"),
        pytest.param(lambda rt: do_read_logs(rt, container="web", since="last tuesday"), id="logs-since"),
        pytest.param(lambda rt: do_inspect_container(rt, container="web; rm -rf /"), id="inspect"),
        pytest.param(lambda rt: do_container_stats(rt, container=""), id="stats"),
        pytest.param(lambda rt: do_exec_command(rt, container="web", command=[]), id="exec"),
    ],
)
async def test_validation_runs_before_any_subprocess(operation, runtime, runner: ScriptedRunner) -> None:
    with pytest.raises(InvalidArgumentError):
        await operation(runtime)
    assert runner.calls == []
