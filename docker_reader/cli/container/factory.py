from __future__ import annotations

import structlog

from docker_reader.config import settings

from .base import BaseContainerRuntime
from .docker import DockerRuntime
from .models import ContainerRuntime
from .podman import PodmanRuntime

LOG = structlog.get_logger(__name__)


class ContainerRuntimeFactory:
    """Factory for creating and managing container runtime instances.

    The factory supports:
    1. Explicit runtime selection via set_runtime()
    2. Configuration via the CONTAINER_RUNTIME / RUNTIME_BINARY settings
    3. Auto-detection based on available binaries
    """

    _runtime: BaseContainerRuntime | None = None

    @classmethod
    def set_runtime(cls, runtime: BaseContainerRuntime) -> None:
        """Explicitly set the container runtime to use."""
        cls._runtime = runtime

    @classmethod
    def get_runtime(cls) -> BaseContainerRuntime:
        """Get the current container runtime instance.

        Selection never spawns a process. Whether the daemon is reachable is checked per
        operation by BaseContainerRuntime.ensure_running().
        """
        if cls._runtime is not None:
            return cls._runtime

        cls._runtime = cls._select_runtime()
        LOG.info("Selected container runtime", runtime=cls._runtime.runtime_type.value, binary=cls._runtime.binary)
        return cls._runtime

    @classmethod
    def reset(cls) -> None:
        """Reset the factory state.

        This clears the cached runtime instance, useful for testing.
        """
        cls._runtime = None

    @classmethod
    def create_runtime(cls, runtime_type: ContainerRuntime, binary: str | None = None) -> BaseContainerRuntime:
        """Create a runtime instance for the given type.

        Raises:
            ValueError: If the runtime type is not supported
        """
        if runtime_type == ContainerRuntime.DOCKER:
            return DockerRuntime(binary)
        elif runtime_type == ContainerRuntime.PODMAN:
            return PodmanRuntime(binary)
        else:
            raise ValueError(f"Unsupported container runtime: {runtime_type}")

    @classmethod
    def _select_runtime(cls) -> BaseContainerRuntime:
        configured = settings.CONTAINER_RUNTIME.strip().lower()
        if configured:
            try:
                runtime_type = ContainerRuntime(configured)
            except ValueError:
                LOG.warning("Ignoring unknown CONTAINER_RUNTIME setting", value=settings.CONTAINER_RUNTIME)
            else:
                return cls.create_runtime(runtime_type, settings.RUNTIME_BINARY)

        # Try Docker first (more common)
        docker = DockerRuntime(settings.RUNTIME_BINARY)
        if docker.is_available():
            return docker

        podman = PodmanRuntime(settings.RUNTIME_BINARY)
        if podman.is_available():
            return podman

        # the per-operation probe reports the missing binary as RuntimeNotInstalled
        LOG.warning("No container runtime binary found on PATH, defaulting to docker")
        return docker
