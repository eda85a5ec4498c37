"""Implementation of 'visor tx' commands.

Manage transactions: list with filters, add, delete one or clear all.
"""

import logging
from datetime import datetime
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from visor.cli.utils import format_currency, open_workspace
from visor.core.categories import get_categories_by_type, get_category_name
from visor.core.exceptions import VisorError
from visor.core.models import RecurrenceFrequency, TransactionCreate, TransactionType, to_decimal
from visor.engine.filters import filter_transactions

logger = logging.getLogger(__name__)

console = Console()

# Create subcommand group
tx_app = typer.Typer(help="List, add and delete transactions")

TYPE_STYLES = {
    TransactionType.INCOME: "green",
    TransactionType.EXPENSE: "red",
    TransactionType.INVESTMENT: "blue",
}

WORKSPACE_OPTION = typer.Option(
    None,
    "--workspace",
    "-w",
    help="Path to workspace",
)


@tx_app.command(name="list")
def tx_list(
    search: str = typer.Option(None, "--search", "-s", help="Text to find in title or category"),
    type: TransactionType = typer.Option(None, "--type", "-t", help="Only this type"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category id"),
    since: datetime = typer.Option(None, "--since", formats=["%Y-%m-%d"], help="From date (inclusive)"),
    until: datetime = typer.Option(None, "--until", formats=["%Y-%m-%d"], help="To date (exclusive)"),
    limit: int = typer.Option(50, "--limit", "-n", min=1, help="Maximum rows to show"),
    workspace: Path = WORKSPACE_OPTION,
) -> None:
    """List transactions, newest first."""
    ws = open_workspace(console, workspace)
    try:
        transactions = ws.storage.get_transaction_repository().get_all(ws.open_session())
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    matched = filter_transactions(
        transactions,
        search=search,
        type=type,
        category=category,
        start=since,
        end=until,
    )
    if not matched:
        console.print("[yellow]No transactions found[/yellow]")
        raise typer.Exit(0)

    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    for tx in matched[:limit]:
        style = TYPE_STYLES[tx.type]
        table.add_row(
            str(tx.id)[:8],
            tx.date.strftime("%Y-%m-%d"),
            tx.title,
            get_category_name(tx.category),
            f"[{style}]{format_currency(tx.amount, ws.currency)}[/{style}]",
        )
    console.print(table)
    if len(matched) > limit:
        console.print(f"[dim]Showing {limit} of {len(matched)} transactions[/dim]")
    else:
        console.print(f"[dim]{len(matched)} transactions[/dim]")


@tx_app.command(name="add")
def tx_add(
    type: TransactionType = typer.Argument(..., help="income, expense or investment"),
    amount: float = typer.Argument(..., help="Amount (at least 1)"),
    category: str = typer.Argument(..., help="Category id, see 'visor categories'"),
    title: str = typer.Option("", "--title", help="Title (default: generated)"),
    date: datetime = typer.Option(None, "--date", "-d", formats=["%Y-%m-%d"], help="Date (default: now)"),
    notes: str = typer.Option(None, "--notes"),
    recurring: int = typer.Option(
        None,
        "--recurring",
        help="Record N occurrences at once (amount is multiplied by N)",
    ),
    frequency: RecurrenceFrequency = typer.Option(RecurrenceFrequency.MONTHLY, "--frequency"),
    split: int = typer.Option(None, "--split", help="Split the amount N ways"),
    split_with: list[str] = typer.Option(None, "--with", help="Person sharing the bill (repeatable)"),
    workspace: Path = WORKSPACE_OPTION,
) -> None:
    """Add a transaction."""
    if category not in {c.id for c in get_categories_by_type(type)}:
        logger.warning("Category %r is not a built-in %s category", category, type.value)

    ws = open_workspace(console, workspace)
    fields = dict(
        type=type,
        amount=to_decimal(amount),
        title=title,
        category=category,
        notes=notes,
        is_recurring=recurring is not None,
        recurrence_frequency=frequency if recurring is not None else None,
        recurrence_count=recurring,
        is_split=split is not None,
        split_count=split,
        split_with=split_with or None,
    )
    if date is not None:
        fields["date"] = date

    try:
        data = TransactionCreate(**fields)
        tx = ws.storage.get_transaction_repository().create(ws.open_session(), data)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        console.print(f"[red]Error:[/red] Invalid {field}: {error['msg']}")
        raise typer.Exit(1)
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Added:[/green] {tx.title} "
        f"{format_currency(tx.amount, ws.currency)} ({str(tx.id)[:8]})"
    )


@tx_app.command(name="delete")
def tx_delete(
    tx_id: str = typer.Argument(..., help="Transaction ID (or its first characters)"),
    workspace: Path = WORKSPACE_OPTION,
) -> None:
    """Delete a single transaction."""
    ws = open_workspace(console, workspace)
    repo = ws.storage.get_transaction_repository()
    try:
        session = ws.open_session()
        matching = [tx for tx in repo.get_all(session) if str(tx.id).startswith(tx_id)]
        if len(matching) != 1:
            console.print(
                f"[red]Error:[/red] Expected one transaction matching '{tx_id}', found {len(matching)}"
            )
            raise typer.Exit(1)
        repo.delete(session, matching[0].id)
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Deleted:[/green] {matching[0].title}")


@tx_app.command(name="clear")
def tx_clear(
    confirm: bool = typer.Option(
        False,
        "--confirm",
        "-y",
        help="Confirm deletion (required)",
    ),
    workspace: Path = WORKSPACE_OPTION,
) -> None:
    """Delete all transactions of the workspace user.

    Requires --confirm flag to execute.
    """
    ws = open_workspace(console, workspace)
    repo = ws.storage.get_transaction_repository()
    try:
        session = ws.open_session()
        tx_count = repo.count(session)

        if tx_count == 0:
            console.print("[yellow]No transactions to delete[/yellow]")
            raise typer.Exit(0)

        console.print(f"Current data: [cyan]{tx_count}[/cyan] transactions")

        if not confirm:
            console.print()
            console.print("[yellow]This will delete ALL transactions![/yellow]")
            console.print("Run with [bold]--confirm[/bold] to proceed")
            raise typer.Exit(0)

        deleted = repo.delete_all(session)
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print()
    console.print(f"[green]Deleted:[/green] {deleted} transactions")
