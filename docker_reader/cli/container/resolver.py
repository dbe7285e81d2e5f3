"""Match a caller-supplied container identifier against a listing snapshot."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from docker_reader.exceptions import ContainerNotFoundError

from .models import ContainerRecord


def _exact_name(container: ContainerRecord, identifier: str) -> bool:
    return container.name == identifier


def _prefixed_name(container: ContainerRecord, identifier: str) -> bool:
    # the runtime's internal name form carries a leading slash
    return container.name == f"/{identifier}" or (bool(container.name) and f"/{container.name}" == identifier)


def _id_prefix(container: ContainerRecord, identifier: str) -> bool:
    return container.id.startswith(identifier)


MATCH_RULES: tuple[Callable[[ContainerRecord, str], bool], ...] = (_exact_name, _prefixed_name, _id_prefix)


def find_container(containers: Sequence[ContainerRecord], identifier: str) -> ContainerRecord | None:
    """Return the first container matching ``identifier``, or None.

    Rules are tried in priority order (exact name, slash-prefixed name, ID prefix); within a
    rule the first container in listing order wins. Listing order is whatever the runtime
    returned, so duplicate names resolve to whichever the runtime listed first.
    """
    if not identifier:
        return None
    for rule in MATCH_RULES:
        for container in containers:
            if rule(container, identifier):
                return container
    return None


def resolve_container(
    containers: Sequence[ContainerRecord],
    identifier: str,
    *,
    running_only: bool = False,
) -> ContainerRecord:
    container = find_container(containers, identifier)
    if container is None:
        raise ContainerNotFoundError(identifier, running_only=running_only)
    return container
