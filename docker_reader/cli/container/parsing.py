"""Parsers for runtime CLI output."""

from __future__ import annotations

import json
from typing import Any

from docker_reader.exceptions import ContainerNotFoundError, RuntimeCommandError

from .commands import LIST_FIELDS
from .models import ContainerRecord


def parse_container_list(output: str) -> list[ContainerRecord]:
    """Parse tab-delimited ``ps --format`` output into records.

    Blank lines are skipped. Missing trailing fields default to "" and tabs inside the
    last (command) field are kept.
    """
    records: list[ContainerRecord] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        values = [value.strip('"') for value in line.split("\t", len(LIST_FIELDS) - 1)]
        values += [""] * (len(LIST_FIELDS) - len(values))
        records.append(ContainerRecord(**dict(zip(LIST_FIELDS, values))))
    return records


def parse_inspect_output(output: str, container_id: str) -> dict[str, Any]:
    try:
        documents = json.loads(output)
    except json.JSONDecodeError as e:
        raise RuntimeCommandError(f"Failed to inspect container: invalid JSON from runtime ({e})", stdout=output) from e

    if isinstance(documents, dict):
        return documents
    if not isinstance(documents, list):
        raise RuntimeCommandError(
            f"Failed to inspect container: expected a JSON array, got {type(documents).__name__}",
            stdout=output,
        )
    if not documents:
        raise ContainerNotFoundError(container_id)
    return documents[0]


def parse_stats_output(output: str) -> str:
    # already a table; presentation is left to the caller
    return output


def combine_log_streams(stdout: str, stderr: str) -> str:
    """The runtime writes container stdout and stderr to separate channels; both are log content."""
    return "\n".join(stream for stream in (stdout, stderr) if stream)
