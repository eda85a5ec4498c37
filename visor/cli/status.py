"""Implementation of 'visor status' command.

Shows the current month at a glance.
"""

from datetime import date
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from visor.cli.utils import format_currency, format_percentage, format_score, open_workspace
from visor.core.categories import get_category_name
from visor.core.exceptions import VisorError
from visor.core.models import AnalyticsFrequency, TransactionType
from visor.engine.filters import filter_transactions
from visor.engine.metrics import calculate_financial_summary, get_top_categories
from visor.engine.periods import format_month_label, get_current_period
from visor.engine.scores import calculate_savings_rate_score

console = Console()


def status_command(
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """Show current month status.

    Displays income, expenses and investments for the month, net savings
    against the savings target, and the top expense categories.
    """
    ws = open_workspace(console, workspace)
    currency = ws.currency

    try:
        session = ws.open_session()
        transactions = ws.storage.get_transaction_repository().get_all(session)
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    today = date.today()
    month_start, month_end = get_current_period(AnalyticsFrequency.MONTH, today)
    days_left = (month_end - today).days - 1

    # Display header
    console.print()
    title = f"Status for {format_month_label(today)}"
    if days_left > 0:
        title += f" ({days_left} days remaining)"
    console.print(Panel(f"[bold]{title}[/bold]", style="cyan"))
    console.print()

    # No data case
    if not transactions:
        console.print("[yellow]No transactions recorded yet[/yellow]")
        raise typer.Exit(0)

    summary = calculate_financial_summary(transactions, today=today)
    warnings: list[str] = []

    console.print("[bold]This Month[/bold]")
    console.print(f"  Income:       {format_currency(summary.monthly_income, currency):>14}")
    console.print(f"  Expenses:     {format_currency(summary.monthly_expenses, currency):>14}")
    console.print(f"  Investments:  {format_currency(summary.monthly_investments, currency):>14}")

    if summary.net_savings >= 0:
        console.print(f"  [green]Net savings:  {format_currency(summary.net_savings, currency):>14}[/green]")
    else:
        console.print(f"  [red]Net savings:  {format_currency(summary.net_savings, currency):>14}[/red]")
        warnings.append(
            f"Spending exceeds income by {format_currency(abs(summary.net_savings), currency)}"
        )
    console.print()

    # Savings rate vs target
    target = ws.config.settings.savings_target
    console.print("[bold]Savings Rate[/bold]")
    console.print(f"  Rate:    {format_percentage(summary.savings_rate):>8}  (target {target}%)")
    console.print("  Score:   ", format_score(calculate_savings_rate_score(summary.savings_rate)))
    if summary.monthly_income > 0 and summary.savings_rate < target:
        warnings.append(
            f"Savings rate {format_percentage(summary.savings_rate)} is below target {target}%"
        )
    elif summary.monthly_income > 0:
        console.print("  [green]✓ Target reached![/green]")
    console.print(f"  Total invested (all time): {format_currency(summary.total_investments, currency)}")
    console.print()

    # Top spenders this month
    month_transactions = filter_transactions(transactions, start=month_start)
    top = get_top_categories(month_transactions, TransactionType.EXPENSE)
    if top:
        console.print("[bold]Top Categories[/bold]")
        for item in top:
            console.print(
                f"  {get_category_name(item.category)}: "
                f"{format_currency(item.amount, currency):>12} "
                f"({format_percentage(item.percentage)}, {item.count} tx)"
            )
        console.print()

    # Warnings
    if warnings:
        console.print("[bold yellow]⚠ Warnings[/bold yellow]")
        for w in warnings:
            console.print(f"  - {w}")
        console.print()

    console.print(f"[dim]Transactions this month: {len(month_transactions)}[/dim]")
