"""Data models for container runtime abstraction."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum


class ContainerRuntime(StrEnum):
    """Supported container runtimes."""

    DOCKER = "docker"
    PODMAN = "podman"


@dataclass(frozen=True)
class ContainerRecord:
    """One row of a container listing snapshot."""

    id: str
    name: str = ""
    image: str = ""
    status: str = ""
    ports: str = ""
    created: str = ""
    command: str = ""

    @property
    def short_id(self) -> str:
        return self.id[:12]

    @property
    def is_running(self) -> bool:
        return self.status.startswith("Up")

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class LogQuery:
    container_id: str
    lines: int | None = None
    since: str | None = None
    until: str | None = None
    timestamps: bool = False


@dataclass(frozen=True)
class ExecRequest:
    container_id: str
    command: list[str]
    working_dir: str | None = None
    env: list[str] = field(default_factory=list)
    user: str | None = None
    privileged: bool = False
    interactive: bool = False


@dataclass(frozen=True)
class CommandOutput:
    """Raw outcome of one runtime CLI invocation."""

    stdout: str
    stderr: str
    exit_code: int


@dataclass(frozen=True)
class ExecResult:
    """Result of executing a command in a container."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        """Return True if the command executed successfully."""
        return self.exit_code == 0

    def to_dict(self) -> dict[str, str | int]:
        return {"stdout": self.stdout, "stderr": self.stderr, "exit_code": self.exit_code}
