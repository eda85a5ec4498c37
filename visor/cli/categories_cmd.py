"""Implementation of 'visor categories' command."""

import typer
from rich.console import Console
from rich.table import Table

from visor.core.categories import CATEGORIES, get_categories_by_type
from visor.core.models import TransactionType

console = Console()


def categories_command(
    type: TransactionType = typer.Option(
        None,
        "--type",
        "-t",
        help="Only list categories of this type",
    ),
) -> None:
    """List the built-in transaction categories."""
    categories = get_categories_by_type(type) if type else list(CATEGORIES)

    table = Table(title="Categories")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Icon", style="dim")
    for cat in categories:
        table.add_row(cat.id, cat.name, cat.type.value, cat.icon.value)
    console.print(table)
    console.print(f"[dim]{len(categories)} categories[/dim]")
