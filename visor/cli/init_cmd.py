"""Implementation of 'visor init' command."""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from visor.core.exceptions import VisorError
from visor.core.workspace import CONFIG_FILENAME, init_workspace

console = Console()


def init_command(
    name: str = typer.Argument(..., help="Workspace name"),
    path: Path = typer.Option(
        None,
        "--path",
        "-p",
        help="Directory to create the workspace in (default: ./<name>)",
    ),
    currency: str = typer.Option(
        None,
        "--currency",
        "-c",
        help="Currency code, e.g. INR or USD (default: VISOR_DEFAULT_CURRENCY)",
    ),
) -> None:
    """Create a new workspace with empty transaction and goal files."""
    target = path or Path.cwd() / name

    try:
        ws = init_workspace(target, name, currency=currency.upper() if currency else None)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid workspace settings: {e.errors()[0]['msg']}")
        raise typer.Exit(1)
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Created workspace:[/green] {ws.name}")
    console.print(f"  Location: {ws.root}")
    console.print(f"  Config:   {CONFIG_FILENAME}")
    console.print(f"  Currency: {ws.currency}")
    console.print()
    console.print("[dim]Next: cd into the workspace and run 'visor tx add'[/dim]")
