from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from docker_reader.cli.container import CommandOutput
from docker_reader.cli.container.commands import RuntimeCommand

WEB_ID = "abc123def4567890abc123def4567890abc123def4567890abc123def4567890"
WORKER_ID = "def456abc7890123def456abc7890123def456abc7890123def456abc7890123"

RUNNING_ROW = (
    f"{WEB_ID}\tweb\tnginx:latest\tUp 2 hours\t0.0.0.0:80->80/tcp\t"
    "2024-01-01 10:00:00 +0000 UTC\tnginx -g 'daemon off;'"
)
STOPPED_ROW = (
    f"{WORKER_ID}\tworker\tpython:3.12\tExited (0) 3 hours ago\t\t2024-01-01 09:00:00 +0000 UTC\tpython worker.py"
)

INSPECT_DOCUMENT = (
    '[{"Id": "' + WEB_ID + '", "Name": "/web", "State": {"Status": "running", "Running": true}, '
    '"Config": {"Image": "nginx:latest", "Env": ["PATH=/usr/bin"]}}]'
)

STATS_TABLE = (
    "CONTAINER      CPU %     MEM USAGE / LIMIT     MEM %     NET I/O         BLOCK I/O\n"
    "abc123def456   0.01%     5.2MiB / 7.7GiB       0.07%     1.2kB / 0B      0B / 0B\n"
)

Handler = CommandOutput | Exception | Callable[[RuntimeCommand], CommandOutput]


def ok(stdout: str = "", stderr: str = "") -> CommandOutput:
    return CommandOutput(stdout=stdout, stderr=stderr, exit_code=0)


def failed(stderr: str, exit_code: int = 1, stdout: str = "") -> CommandOutput:
    return CommandOutput(stdout=stdout, stderr=stderr, exit_code=exit_code)


@dataclass
class ScriptedRunner:
    """Stands in for executor.run_command, answering by subcommand."""

    rows: list[str] = field(default_factory=lambda: [RUNNING_ROW, STOPPED_ROW])
    handlers: dict[str, Handler] = field(default_factory=dict)
    calls: list[RuntimeCommand] = field(default_factory=list)
    timeouts: list[float] = field(default_factory=list)

    @property
    def subcommands(self) -> list[str]:
        return [command.subcommand for command in self.calls]

    def last(self, subcommand: str) -> RuntimeCommand:
        return [command for command in self.calls if command.subcommand == subcommand][-1]

    def _list(self, command: RuntimeCommand) -> CommandOutput:
        show_all = "-a" in command.argv
        rows = [row for row in self.rows if show_all or "\tUp " in row]
        return ok("".join(f"{row}\n" for row in rows))

    async def __call__(self, command: RuntimeCommand, *, timeout: float) -> CommandOutput:
        self.calls.append(command)
        self.timeouts.append(timeout)
        handler = self.handlers.get(command.subcommand)
        if handler is None:
            if command.subcommand == "version":
                return ok("Docker version 27.0.0")
            if command.subcommand == "ps":
                return self._list(command)
            raise AssertionError(f"unexpected runtime command: {command}")
        if isinstance(handler, Exception):
            raise handler
        if isinstance(handler, CommandOutput):
            return handler
        return handler(command)
