"""Implementation of 'visor insights' command.

Shows the financial health report: overall score, component scores and
the debt/expense ratios with their benchmark labels.
"""

from datetime import date
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from visor.cli.utils import format_percentage, format_score, open_workspace
from visor.core.exceptions import VisorError
from visor.engine.insights import (
    BENCHMARKS,
    build_health_report,
    rate_emergency_fund,
    rate_emi_ratio,
    rate_expense_ratio,
)

console = Console()


def _health_style(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def insights_command(
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """Show the financial health report for the current month."""
    ws = open_workspace(console, workspace)

    try:
        session = ws.open_session()
        transactions = ws.storage.get_transaction_repository().get_all(session)
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not transactions:
        console.print("[yellow]No transactions recorded yet[/yellow]")
        raise typer.Exit(0)

    report = build_health_report(transactions, today=date.today())
    style = _health_style(report.health_score)

    console.print()
    console.print(
        Panel(
            f"[bold {style}]{report.health_score}[/bold {style}] / 100",
            title="Financial Health Score",
            style="cyan",
        )
    )

    console.print("[bold]Components[/bold]")
    console.print(
        f"  Savings rate:    {format_percentage(report.savings_rate):>8}  ",
        format_score(report.savings_score),
    )
    console.print(
        f"  Emergency fund:  {report.emergency_fund_months:>7.1f}m  ",
        format_score(report.emergency_score),
    )
    console.print(f"  Investment ratio: {format_percentage(report.investment_ratio * 100):>7}")
    console.print()

    table = Table(title="Ratios")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_column("Rating")
    table.add_column("National avg", justify="right")
    table.add_row(
        "EMI to income",
        format_percentage(report.emi_to_income_ratio),
        rate_emi_ratio(report.emi_to_income_ratio),
        format_percentage(BENCHMARKS["emi_to_income"]["national"]),
    )
    table.add_row(
        "Debt to income",
        format_percentage(report.debt_to_income_ratio),
        rate_emi_ratio(report.debt_to_income_ratio),
        format_percentage(BENCHMARKS["debt_to_income"]["national"]),
    )
    table.add_row(
        "Expense ratio",
        format_percentage(report.expense_ratio),
        rate_expense_ratio(report.expense_ratio),
        "",
    )
    table.add_row(
        "Emergency fund",
        f"{report.emergency_fund_months:.1f} months",
        rate_emergency_fund(report.emergency_fund_months),
        "",
    )
    table.add_row("Liquidity", f"{report.liquidity_ratio:.2f}x", "", "")
    console.print(table)
