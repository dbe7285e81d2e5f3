from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import structlog
from fastmcp.resources import FunctionResource, Resource
from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext

from docker_reader.cli.container.models import ContainerRecord
from docker_reader.cli.core.classify import classify_error
from docker_reader.cli.core.container_ops import do_inspect_container
from docker_reader.exceptions import DockerReaderException

from ._common import get_runtime

LOG = structlog.get_logger(__name__)

CONTAINER_URI_PREFIX = "docker://container/"
CONTAINER_MIME_TYPE = "application/json"


async def container_resource(container_id: str) -> str:
    """Inspection document for one container, addressed by name or ID."""
    result = await do_inspect_container(get_runtime(), container=container_id)
    return json.dumps(result.document, indent=2)


def _container_entry(container: ContainerRecord) -> FunctionResource:
    async def read() -> str:
        return await container_resource(container.id)

    return FunctionResource.from_function(
        read,
        uri=f"{CONTAINER_URI_PREFIX}{container.id}",
        name=f"Container: {container.name}",
        description=f"{container.image} - {container.status}",
        mime_type=CONTAINER_MIME_TYPE,
    )


async def list_container_resources() -> list[FunctionResource]:
    """One concrete resource per container, stopped ones included.

    Returns an empty list when the runtime cannot be reached or the listing fails.
    """
    runtime = get_runtime()
    try:
        await runtime.ensure_running()
        containers = await runtime.list_containers(all=True)
    except DockerReaderException as e:
        LOG.info("Container resources unavailable", error=classify_error(e).message)
        return []
    return [_container_entry(container) for container in containers]


class ContainerResourceListing(Middleware):
    """Adds every container to ``resources/list`` next to the statically registered resources."""

    async def on_list_resources(
        self,
        context: MiddlewareContext[Any],
        call_next: CallNext[Any, Sequence[Resource]],
    ) -> Sequence[Resource]:
        resources = list(await call_next(context))
        return resources + await list_container_resources()
