from .base import BaseContainerRuntime
from .models import ContainerRuntime


class DockerRuntime(BaseContainerRuntime):
    """Docker container runtime implementation."""

    @property
    def runtime_type(self) -> ContainerRuntime:
        """Return the runtime type identifier."""
        return ContainerRuntime.DOCKER

    @property
    def display_name(self) -> str:
        """Return a human-readable name for the runtime."""
        return "Docker"
