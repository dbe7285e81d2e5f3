"""Argument assembly for runtime CLI invocations.

Each command is kept as a sequence of tokens. A token is either a fixed token
(a subcommand, flag or format string chosen here) or a literal (a value that
came from the caller). The command runs as an argument vector without a shell;
``RuntimeCommand.render`` produces the equivalent shell command line, in which
every literal is wrapped by ``escape_shell_arg``.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass

from .models import ExecRequest, LogQuery

# Field order here is the field order expected by parsing.parse_container_list.
LIST_FORMAT = "{{.ID}}\t{{.Names}}\t{{.Image}}\t{{.Status}}\t{{.Ports}}\t{{.CreatedAt}}\t{{.Command}}"
LIST_FIELDS = ("id", "name", "image", "status", "ports", "created", "command")
STATS_FORMAT = "table {{.Container}}\t{{.CPUPerc}}\t{{.MemUsage}}\t{{.MemPerc}}\t{{.NetIO}}\t{{.BlockIO}}"


def escape_shell_arg(value: str) -> str:
    """Quote a caller-supplied value so a POSIX shell reads it as one literal word."""
    return "'" + value.replace("'", "'\\''") + "'"


@dataclass(frozen=True)
class Token:
    value: str
    literal: bool = False


def fixed(value: str) -> Token:
    return Token(value)


def literal(value: str) -> Token:
    return Token(value, literal=True)


@dataclass(frozen=True)
class RuntimeCommand:
    binary: str
    tokens: tuple[Token, ...]

    @property
    def argv(self) -> list[str]:
        return [self.binary, *(token.value for token in self.tokens)]

    @property
    def subcommand(self) -> str:
        return self.tokens[0].value if self.tokens else ""

    def render(self) -> str:
        parts = [shlex.quote(self.binary)]
        for token in self.tokens:
            parts.append(escape_shell_arg(token.value) if token.literal else shlex.quote(token.value))
        return " ".join(parts)

    def __str__(self) -> str:
        return self.render()


def build_version_command(binary: str) -> RuntimeCommand:
    return RuntimeCommand(binary, (fixed("version"),))


def build_list_command(binary: str, all: bool = False) -> RuntimeCommand:
    tokens = [fixed("ps")]
    if all:
        tokens.append(fixed("-a"))
    tokens.extend([fixed("--format"), fixed(LIST_FORMAT)])
    return RuntimeCommand(binary, tuple(tokens))


def build_logs_command(binary: str, query: LogQuery) -> RuntimeCommand:
    tokens = [fixed("logs")]
    if query.lines:
        tokens.extend([fixed("--tail"), literal(str(query.lines))])
    if query.since:
        tokens.extend([fixed("--since"), literal(query.since)])
    if query.until:
        tokens.extend([fixed("--until"), literal(query.until)])
    if query.timestamps:
        tokens.append(fixed("--timestamps"))
    tokens.append(literal(query.container_id))
    return RuntimeCommand(binary, tuple(tokens))


def build_inspect_command(binary: str, container_id: str) -> RuntimeCommand:
    return RuntimeCommand(binary, (fixed("inspect"), literal(container_id)))


def build_stats_command(binary: str, container_id: str) -> RuntimeCommand:
    return RuntimeCommand(
        binary,
        (
            fixed("stats"),
            fixed("--no-stream"),
            fixed("--format"),
            fixed(STATS_FORMAT),
            literal(container_id),
        ),
    )


def build_exec_command(binary: str, request: ExecRequest) -> RuntimeCommand:
    tokens = [fixed("exec")]
    if request.interactive:
        tokens.append(fixed("-it"))
    if request.working_dir:
        tokens.extend([fixed("--workdir"), literal(request.working_dir)])
    if request.user:
        tokens.extend([fixed("--user"), literal(request.user)])
    if request.privileged:
        tokens.append(fixed("--privileged"))
    for entry in request.env:
        tokens.extend([fixed("--env"), literal(entry)])
    tokens.append(literal(request.container_id))
    # each command token stays its own argument; never joined before escaping
    tokens.extend(literal(arg) for arg in request.command)
    return RuntimeCommand(binary, tuple(tokens))
