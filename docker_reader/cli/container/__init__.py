from .base import BaseContainerRuntime
from .docker import DockerRuntime
from .factory import ContainerRuntimeFactory
from .models import CommandOutput, ContainerRecord, ContainerRuntime, ExecRequest, ExecResult, LogQuery
from .podman import PodmanRuntime

__all__ = [
    "BaseContainerRuntime",
    "CommandOutput",
    "ContainerRecord",
    "ContainerRuntime",
    "ContainerRuntimeFactory",
    "DockerRuntime",
    "ExecRequest",
    "ExecResult",
    "LogQuery",
    "PodmanRuntime",
]
