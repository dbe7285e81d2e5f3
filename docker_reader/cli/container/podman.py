from .base import BaseContainerRuntime
from .models import CommandOutput, ContainerRuntime


class PodmanRuntime(BaseContainerRuntime):
    """Podman container runtime implementation.

    Podman's CLI accepts the same ps/logs/inspect/stats/exec arguments as Docker's.
    """

    @property
    def runtime_type(self) -> ContainerRuntime:
        """Return the runtime type identifier."""
        return ContainerRuntime.PODMAN

    @property
    def display_name(self) -> str:
        """Return a human-readable name for the runtime."""
        return "Podman"

    def unavailable_message(self, output: CommandOutput) -> str:
        # Podman is daemonless; a failed probe usually means a broken remote/machine connection
        if "cannot connect to podman" in output.stderr.lower():
            return "Cannot connect to Podman. Please ensure the Podman machine or service is running."
        return super().unavailable_message(output)
