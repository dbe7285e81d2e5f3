from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Literal

from docker_reader.cli.container.models import ContainerRecord, ExecResult
from docker_reader.exceptions import ClassifiedError, ErrorKind

from .formatting import describe_container, format_container_list


def _container_summary(container: ContainerRecord) -> dict[str, str]:
    return {
        "id": container.id,
        "short_id": container.short_id,
        "name": container.name,
        "image": container.image,
        "status": container.status,
    }


@dataclass(frozen=True)
class ListResult:
    containers: list[ContainerRecord]
    all: bool = False
    kind: Literal["list"] = "list"

    def to_dict(self) -> dict[str, Any]:
        return {
            "containers": [c.to_dict() for c in self.containers],
            "count": len(self.containers),
            "all": self.all,
            "text": format_container_list(self.containers),
        }


@dataclass(frozen=True)
class LogsResult:
    container: ContainerRecord
    logs: str
    kind: Literal["logs"] = "logs"

    def to_dict(self) -> dict[str, Any]:
        return {
            "container": _container_summary(self.container),
            "logs": self.logs,
            "text": f"Logs for container {describe_container(self.container)}:\n\n{self.logs}",
        }


@dataclass(frozen=True)
class InspectResult:
    container: ContainerRecord
    document: dict[str, Any]
    kind: Literal["inspect"] = "inspect"

    def to_dict(self) -> dict[str, Any]:
        return {
            "container": _container_summary(self.container),
            "inspection": self.document,
            "text": (
                f"Container inspection for {describe_container(self.container)}:\n\n"
                f"{json.dumps(self.document, indent=2)}"
            ),
        }


@dataclass(frozen=True)
class StatsResult:
    container: ContainerRecord
    stats: str
    kind: Literal["stats"] = "stats"

    def to_dict(self) -> dict[str, Any]:
        return {
            "container": _container_summary(self.container),
            "stats": self.stats,
            "text": f"Resource usage statistics for container {describe_container(self.container)}:\n\n{self.stats}",
        }


@dataclass(frozen=True)
class ExecOutcome:
    container: ContainerRecord
    command: list[str]
    result: ExecResult
    kind: Literal["exec"] = "exec"

    def to_dict(self) -> dict[str, Any]:
        return {
            "container": _container_summary(self.container),
            "command": self.command,
            **self.result.to_dict(),
        }


OperationResult = ListResult | LogsResult | InspectResult | StatsResult | ExecOutcome


def make_result(
    action: str,
    *,
    ok: bool = True,
    data: dict[str, Any] | None = None,
    timing_ms: dict[str, int] | None = None,
    warnings: list[str] | None = None,
    error: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "ok": ok,
        "action": action,
        "data": data,
        "timing_ms": timing_ms or {},
        "warnings": warnings or [],
        "error": error,
    }


def make_error(
    kind: ErrorKind | str,
    message: str,
    hint: str,
    code: str | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "kind": str(kind),
        "code": code,
        "message": message,
        "hint": hint,
        "details": details or {},
    }


def error_from_exception(error: ClassifiedError) -> dict[str, Any]:
    details: dict[str, Any] = {}
    violations = getattr(error, "violations", None)
    if violations:
        details["violations"] = [{"field": v.path, "reason": v.reason} for v in violations]
    return make_error(error.kind, error.message or str(error), error.hint, code=error.code, details=details)


class Timer:
    def __init__(self) -> None:
        self._start: float = 0
        self._marks: dict[str, int] = {}

    def __enter__(self) -> Timer:
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        self._marks["total"] = int((time.perf_counter() - self._start) * 1000)

    def mark(self, name: str) -> None:
        self._marks[name] = int((time.perf_counter() - self._start) * 1000)

    @property
    def timing_ms(self) -> dict[str, int]:
        return self._marks.copy()
