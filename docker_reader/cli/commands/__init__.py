import logging

import typer

from docker_reader.log import setup_logger as _setup_logger

from ..run_commands import run_app
from .containers import containers_app

_cli_logging_configured = False


def configure_cli_logging() -> None:
    """Configure CLI log levels once at runtime (not at import time)."""
    global _cli_logging_configured
    if _cli_logging_configured:
        return
    _cli_logging_configured = True

    for logger_name in ("httpx", "httpcore", "mcp"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)
    _setup_logger()


cli_app = typer.Typer(
    help=("""[bold]docker-reader[/bold]\nInspect local Docker or Podman containers over MCP or the shell."""),
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@cli_app.callback()
def cli_callback() -> None:
    """Configure CLI logging before command execution."""
    configure_cli_logging()


cli_app.add_typer(run_app, name="run", help="Run docker-reader services like the MCP server.")
cli_app.add_typer(containers_app, name="containers", help="List, inspect and run commands in containers.")


__all__ = ["cli_app"]
