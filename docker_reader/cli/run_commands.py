import typer

from docker_reader.config import settings

MCP_TRANSPORTS = ("stdio", "http", "sse", "streamable-http")

run_app = typer.Typer(help="Commands to run docker-reader services.")


@run_app.command(name="mcp")
def run_mcp(
    transport: str = typer.Option(
        None,
        "--transport",
        help="MCP transport: stdio, http, sse or streamable-http. Defaults to MCP_TRANSPORT.",
    ),
) -> None:
    """Run the MCP server."""
    # stdout belongs to the protocol on stdio; nothing else may print here
    from docker_reader.cli.mcp_tools import mcp  # noqa: PLC0415

    selected = transport or settings.MCP_TRANSPORT
    if selected not in MCP_TRANSPORTS:
        raise typer.BadParameter(f"Unsupported transport: {selected}", param_hint="--transport")
    mcp.run(transport=selected)  # type: ignore[arg-type]
