"""Implementation of 'visor breakdown', 'visor trend' and 'visor summary'."""

from datetime import date
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from visor.cli.utils import format_currency, format_percentage, format_score, open_workspace
from visor.core.categories import get_category_name
from visor.core.exceptions import VisorError
from visor.core.models import AnalyticsFrequency, Transaction, TransactionType
from visor.core.workspace import Workspace
from visor.engine.metrics import (
    calculate_category_breakdown,
    calculate_monthly_trend,
    calculate_period_summary,
)
from visor.engine.scores import calculate_savings_rate_score

console = Console()

WORKSPACE_OPTION = typer.Option(
    None,
    "--workspace",
    "-w",
    help="Path to workspace (default: current directory)",
)


def _load_transactions(ws: Workspace) -> list[Transaction]:
    try:
        session = ws.open_session()
        return ws.storage.get_transaction_repository().get_all(session)
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def breakdown_command(
    type: TransactionType = typer.Option(
        TransactionType.EXPENSE,
        "--type",
        "-t",
        help="Transaction type to break down",
    ),
    limit: int = typer.Option(
        0,
        "--limit",
        "-n",
        min=0,
        help="Show only the top N categories (0 = all)",
    ),
    workspace: Path = WORKSPACE_OPTION,
) -> None:
    """Show amount, share and count per category."""
    ws = open_workspace(console, workspace)
    breakdown = calculate_category_breakdown(_load_transactions(ws), type)
    if limit:
        breakdown = breakdown[:limit]

    if not breakdown:
        console.print(f"[yellow]No {type.value} transactions found[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"{type.value.capitalize()} by category")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")
    table.add_column("Count", justify="right")
    for item in breakdown:
        table.add_row(
            get_category_name(item.category),
            format_currency(item.amount, ws.currency),
            format_percentage(item.percentage),
            str(item.count),
        )
    console.print(table)


def trend_command(
    type: TransactionType = typer.Option(
        TransactionType.EXPENSE,
        "--type",
        "-t",
        help="Transaction type to chart",
    ),
    workspace: Path = WORKSPACE_OPTION,
) -> None:
    """Show monthly totals for the last six months."""
    ws = open_workspace(console, workspace)
    trend = calculate_monthly_trend(_load_transactions(ws), type)

    peak = max((point.amount for point in trend), default=0)
    table = Table(title=f"{type.value.capitalize()} trend")
    table.add_column("Month")
    table.add_column("Amount", justify="right")
    table.add_column("")
    for point in trend:
        width = int(point.amount / peak * 30) if peak > 0 and point.amount > 0 else 0
        table.add_row(point.month, format_currency(point.amount, ws.currency), "█" * width)
    console.print(table)


def summary_command(
    frequency: AnalyticsFrequency = typer.Option(
        AnalyticsFrequency.MONTH,
        "--frequency",
        "-f",
        help="Period length",
    ),
    year: int = typer.Option(None, "--year", "-y", help="Year (default: current)"),
    month: int = typer.Option(None, "--month", "-m", min=1, max=12, help="Month 1-12"),
    quarter: int = typer.Option(None, "--quarter", "-q", min=1, max=4, help="Quarter 1-4"),
    workspace: Path = WORKSPACE_OPTION,
) -> None:
    """Summarize a month, quarter or year (default: the current one)."""
    ws = open_workspace(console, workspace)
    transactions = _load_transactions(ws)

    try:
        summary = calculate_period_summary(
            transactions,
            frequency=frequency,
            year=year,
            month=month,
            quarter=quarter,
            today=date.today(),
        )
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    currency = ws.currency
    console.print()
    console.print(f"[bold]Summary for {summary.period_label}[/bold]")
    console.print(f"  Income:        {format_currency(summary.monthly_income, currency):>14}")
    console.print(f"  Expenses:      {format_currency(summary.monthly_expenses, currency):>14}")
    console.print(f"  Investments:   {format_currency(summary.monthly_investments, currency):>14}")
    console.print(f"  Net savings:   {format_currency(summary.net_savings, currency):>14}")
    console.print(f"  Savings rate:  {format_percentage(summary.savings_rate):>14}")
    console.print("  Score:         ", format_score(calculate_savings_rate_score(summary.savings_rate)))
    console.print(f"  Total invested (all time): {format_currency(summary.total_investments, currency)}")
    console.print(f"[dim]Transactions in period: {summary.transaction_count}[/dim]")
