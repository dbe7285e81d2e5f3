from __future__ import annotations

import json
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def emit_json(envelope: dict[str, Any]) -> None:
    json.dump(envelope, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def output_containers(containers: list[dict[str, str]]) -> None:
    if not containers:
        console.print("No containers found.")
        return
    table = Table()
    for column in ("id", "name", "image", "status", "ports", "created"):
        table.add_column(column.title())
    for row in containers:
        table.add_row(
            row["id"][:12],
            row["name"],
            row["image"],
            row["status"],
            row["ports"] or "N/A",
            row["created"],
        )
    console.print(table)


def output(data: Any) -> None:
    # container output is arbitrary text; never interpret it as rich markup
    if isinstance(data, dict) and "text" in data:
        console.print(data["text"], markup=False, highlight=False, soft_wrap=True)
    elif isinstance(data, dict):
        for key, value in data.items():
            console.print(f"[bold]{key}:[/bold] ", end="")
            console.print(str(value), markup=False, highlight=False, soft_wrap=True)
    else:
        console.print(str(data), markup=False, highlight=False, soft_wrap=True)


def output_warnings(warnings: list[str]) -> None:
    for warning in warnings:
        err_console.print(f"[yellow]Warning:[/yellow] {warning}", highlight=False)


def output_error(message: str, *, kind: str = "", hint: str = "", exit_code: int = 1) -> None:
    prefix = f"{kind}: " if kind else "Error: "
    err_console.print(f"[red]{prefix}[/red]", end="")
    err_console.print(message, markup=False, highlight=False)
    if hint:
        err_console.print(f"[yellow]Hint:[/yellow] {hint}", highlight=False)
    raise SystemExit(exit_code)
