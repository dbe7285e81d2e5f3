"""docker-reader MCP tools.

This module provides MCP (Model Context Protocol) tools for reading the state of
local Docker or Podman containers. Tools are registered with FastMCP and can be
used by AI assistants.
"""

from fastmcp import FastMCP

from docker_reader.config import settings

from .containers import (
    docker_container_stats,
    docker_exec_command,
    docker_inspect_container,
    docker_list_containers,
    docker_read_logs,
)
from .resources import ContainerResourceListing, container_resource, list_container_resources

mcp = FastMCP(
    settings.MCP_SERVER_NAME,
    instructions="""Use docker-reader tools to look at containers running on this machine.

## Tool Selection

| Scenario | Use |
|----------|-----|
| What is running? | docker_list_containers |
| Include stopped containers | docker_list_containers(all=true) |
| Why did it crash? | docker_read_logs |
| Ports, mounts, env, restart policy | docker_inspect_container |
| CPU / memory usage right now | docker_container_stats |
| Run a diagnostic command inside | docker_exec_command |

## Rules
1. Containers can be addressed by name, "/name", full ID or an ID prefix.
2. docker_container_stats and docker_exec_command only see running containers.
3. docker_exec_command takes the command as a list, one element per argument. No shell is involved,
   so pipes and redirects need an explicit ["sh", "-c", "..."].
4. A non-zero exit code from docker_exec_command is a normal result, not a failure.
5. Every tool returns {ok, action, data, timing_ms, warnings, error}. On failure check error.kind and error.hint.
""",
)

# -- Read-only inspection --
mcp.tool()(docker_list_containers)
mcp.tool()(docker_read_logs)
mcp.tool()(docker_inspect_container)
mcp.tool()(docker_container_stats)
# -- Command execution --
mcp.tool()(docker_exec_command)
# -- Resources --
mcp.resource("docker://container/{container_id}", mime_type="application/json")(container_resource)
mcp.add_middleware(ContainerResourceListing())

__all__ = [
    "mcp",
    "container_resource",
    "list_container_resources",
    "docker_container_stats",
    "docker_exec_command",
    "docker_inspect_container",
    "docker_list_containers",
    "docker_read_logs",
]
