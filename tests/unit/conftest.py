import pytest
import structlog

from docker_reader.cli.container import ContainerRuntimeFactory, DockerRuntime
from tests.unit.helpers import ScriptedRunner


@pytest.fixture(autouse=True)
def reset_runtime_factory():
    ContainerRuntimeFactory.reset()
    yield
    ContainerRuntimeFactory.reset()


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> ScriptedRunner:
    scripted = ScriptedRunner()
    monkeypatch.setattr("docker_reader.cli.container.base.run_command", scripted)
    return scripted


@pytest.fixture
def runtime(runner: ScriptedRunner) -> DockerRuntime:
    docker = DockerRuntime("docker", command_timeout=60, exec_timeout=300, probe_timeout=10)
    ContainerRuntimeFactory.set_runtime(docker)
    return docker


@pytest.fixture(autouse=True)
def restore_structlog_config():
    # CLI invocations reconfigure structlog onto CliRunner's temporary stderr; restore it afterwards.
    saved = structlog.get_config()
    yield
    structlog.configure(**saved)
