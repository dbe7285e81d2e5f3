"""Shared input validation for both MCP and CLI surfaces.

Each operation has an argument model. ``validate_args`` checks every field and raises one
InvalidArgumentError listing every violation, before anything touches the runtime.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, ValidationError
from pydantic_core import PydanticCustomError

from docker_reader.config import settings
from docker_reader.exceptions import FieldViolation, InvalidArgumentError

CONTAINER_NAME_PATTERN = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9._-]*")
CONTAINER_ID_PATTERN = re.compile(r"[a-fA-F0-9]+")
RELATIVE_TIME_PATTERN = re.compile(r"\d+[smhd]")
UNIX_TIMESTAMP_PATTERN = re.compile(r"\d+(\.\d+)?")
ENV_VAR_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*=.*")
USER_PATTERN = re.compile(r"([a-zA-Z0-9_-]+|\d+)(:([a-zA-Z0-9_-]+|\d+))?")

MIN_LOG_LINES = 1
MAX_LOG_LINES = 10000
MAX_COMMAND_ARGS = 100


def is_valid_container_identifier(value: str) -> bool:
    return bool(
        CONTAINER_NAME_PATTERN.fullmatch(value) or CONTAINER_ID_PATTERN.fullmatch(value) or value.startswith("/")
    )


def is_valid_timestamp(value: str) -> bool:
    """Relative durations (``42m``), Unix timestamps or ISO-8601 dates and date-times."""
    if RELATIVE_TIME_PATTERN.fullmatch(value) or UNIX_TIMESTAMP_PATTERN.fullmatch(value):
        return True
    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        datetime.fromisoformat(normalized)
    except ValueError:
        return False
    return True


def _check_container(value: str) -> str:
    if not value:
        raise PydanticCustomError("container_empty", "Container identifier cannot be empty")
    if not is_valid_container_identifier(value):
        raise PydanticCustomError("container_format", "Must be a valid container name or ID")
    return value


def _check_lines(value: int) -> int:
    if value < MIN_LOG_LINES:
        raise PydanticCustomError("lines_min", "Lines must be at least {min}", {"min": MIN_LOG_LINES})
    if value > MAX_LOG_LINES:
        raise PydanticCustomError("lines_max", "Lines cannot exceed {max}", {"max": MAX_LOG_LINES})
    return value


def _check_timestamp(value: str) -> str:
    if not is_valid_timestamp(value):
        raise PydanticCustomError(
            "timestamp_format",
            'Invalid timestamp format. Use relative time (e.g., "1h", "30m") or ISO date',
        )
    return value


def _check_command_arg(value: str) -> str:
    if not value:
        raise PydanticCustomError("command_arg_empty", "Command arguments cannot be empty")
    return value


def _check_command(value: list[str]) -> list[str]:
    if not value:
        raise PydanticCustomError("command_empty", "Command cannot be empty")
    if len(value) > MAX_COMMAND_ARGS:
        raise PydanticCustomError(
            "command_too_long", "Command cannot have more than {max} arguments", {"max": MAX_COMMAND_ARGS}
        )
    return value


def _check_env(value: str) -> str:
    if not ENV_VAR_PATTERN.fullmatch(value):
        raise PydanticCustomError("env_format", "Environment variables must be in KEY=VALUE format")
    return value


def _check_user(value: str) -> str:
    if not USER_PATTERN.fullmatch(value):
        raise PydanticCustomError("user_format", "User must be in format user[:group] or uid[:gid]")
    return value


def _check_working_dir(value: str) -> str:
    if not value:
        raise PydanticCustomError("working_dir_empty", "Working directory cannot be empty")
    if not value.startswith("/"):
        raise PydanticCustomError("working_dir_relative", "Working directory must be an absolute path")
    return value


ContainerIdentifier = Annotated[StrictStr, AfterValidator(_check_container)]
LogLines = Annotated[StrictInt, AfterValidator(_check_lines)]
Timestamp = Annotated[StrictStr, AfterValidator(_check_timestamp)]
CommandArg = Annotated[StrictStr, AfterValidator(_check_command_arg)]
EnvEntry = Annotated[StrictStr, AfterValidator(_check_env)]
UserSpec = Annotated[StrictStr, AfterValidator(_check_user)]
WorkingDir = Annotated[StrictStr, AfterValidator(_check_working_dir)]


class _Args(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class ListContainersArgs(_Args):
    all: StrictBool = False


class ReadLogsArgs(_Args):
    container: ContainerIdentifier
    lines: LogLines = Field(default_factory=lambda: settings.DEFAULT_LOG_LINES)
    since: Timestamp | None = None
    until: Timestamp | None = None
    timestamps: StrictBool = False


class InspectContainerArgs(_Args):
    container: ContainerIdentifier


class ContainerStatsArgs(_Args):
    container: ContainerIdentifier


class ExecCommandArgs(_Args):
    container: ContainerIdentifier
    command: Annotated[list[CommandArg], AfterValidator(_check_command)]
    working_dir: WorkingDir | None = None
    env: list[EnvEntry] | None = None
    user: UserSpec | None = None
    privileged: StrictBool = False
    interactive: StrictBool = False


ArgsT = TypeVar("ArgsT", bound=_Args)


def format_violations(exc: ValidationError) -> list[FieldViolation]:
    return [FieldViolation(path=".".join(str(p) for p in err["loc"]), reason=err["msg"]) for err in exc.errors()]


def validate_args(model: type[ArgsT], **raw: object) -> ArgsT:
    """Validate raw caller arguments against an argument model.

    Arguments passed as None are treated as omitted so model defaults apply.

    Raises:
        InvalidArgumentError: listing every violated field, not just the first.
    """
    try:
        return model.model_validate({key: value for key, value in raw.items() if value is not None})
    except ValidationError as exc:
        raise InvalidArgumentError(format_violations(exc)) from exc
