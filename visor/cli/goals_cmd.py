"""Implementation of 'visor goals' commands.

List savings goals with progress, add new ones and record deposits.
"""

from datetime import datetime
from decimal import Decimal
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from visor.cli.utils import format_currency, format_percentage, open_workspace
from visor.core.exceptions import VisorError
from visor.core.models import Goal, GoalCategory, to_decimal
from visor.engine.insights import summarize_goals

console = Console()

goals_app = typer.Typer(help="Track savings goals")

WORKSPACE_OPTION = typer.Option(
    None,
    "--workspace",
    "-w",
    help="Path to workspace",
)


def _progress_bar(progress: Decimal, width: int = 20) -> str:
    filled = int(progress / 100 * width)
    return "█" * filled + "░" * (width - filled)


@goals_app.command(name="list")
def goals_list(workspace: Path = WORKSPACE_OPTION) -> None:
    """Show goals with progress towards their targets."""
    ws = open_workspace(console, workspace)
    try:
        goals = ws.storage.get_goal_repository().get_all(ws.open_session())
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not goals:
        console.print("[yellow]No goals yet[/yellow]")
        console.print("Run 'visor goals add <name> <target>' to create one")
        raise typer.Exit(0)

    currency = ws.currency
    table = Table(title="Goals")
    table.add_column("ID", style="dim")
    table.add_column("Goal")
    table.add_column("Saved", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Progress")
    table.add_column("Due")
    for goal in goals:
        progress = goal.display_progress
        style = "green" if goal.is_completed else "cyan"
        table.add_row(
            str(goal.id)[:8],
            f"{goal.name} [dim]({goal.category.value})[/dim]",
            format_currency(goal.current_amount, currency),
            format_currency(goal.target_amount, currency),
            f"[{style}]{_progress_bar(progress)}[/{style}] {format_percentage(progress, 0)}",
            goal.target_date.strftime("%Y-%m-%d") if goal.target_date else "-",
        )
    console.print(table)

    overview = summarize_goals(goals)
    console.print(
        f"Saved {format_currency(overview.total_saved, currency)} of "
        f"{format_currency(overview.total_target, currency)} "
        f"({format_percentage(overview.overall_progress)}), "
        f"{overview.completed_count}/{overview.goal_count} completed"
    )


@goals_app.command(name="add")
def goals_add(
    name: str = typer.Argument(..., help="Goal name"),
    target: float = typer.Argument(..., help="Target amount"),
    saved: float = typer.Option(0, "--saved", help="Amount already saved"),
    category: GoalCategory = typer.Option(GoalCategory.OTHER, "--category", "-c"),
    due: datetime = typer.Option(None, "--due", formats=["%Y-%m-%d"], help="Target date"),
    workspace: Path = WORKSPACE_OPTION,
) -> None:
    """Create a savings goal."""
    ws = open_workspace(console, workspace)
    try:
        session = ws.open_session()
        goal = Goal(
            user_id=session.user_id,
            name=name,
            target_amount=to_decimal(target),
            current_amount=to_decimal(saved),
            category=category,
            target_date=due,
        )
        goal = ws.storage.get_goal_repository().add(session, goal)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid goal: {e.errors()[0]['msg']}")
        raise typer.Exit(1)
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Added goal:[/green] {goal.name} ({str(goal.id)[:8]})")


@goals_app.command(name="deposit")
def goals_deposit(
    goal_id: str = typer.Argument(..., help="Goal ID (or its first characters)"),
    amount: float = typer.Argument(..., help="Amount to add to the goal"),
    workspace: Path = WORKSPACE_OPTION,
) -> None:
    """Add money to a goal's saved amount."""
    ws = open_workspace(console, workspace)
    repo = ws.storage.get_goal_repository()
    try:
        session = ws.open_session()
        matching = [g for g in repo.get_all(session) if str(g.id).startswith(goal_id)]
        if len(matching) != 1:
            console.print(f"[red]Error:[/red] Expected one goal matching '{goal_id}', found {len(matching)}")
            raise typer.Exit(1)
        goal = matching[0]
        goal = repo.update(session, goal.id, {"current_amount": goal.current_amount + to_decimal(amount)})
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid amount: {e.errors()[0]['msg']}")
        raise typer.Exit(1)
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Updated:[/green] {goal.name} now at "
        f"{format_currency(goal.current_amount, ws.currency)} "
        f"({format_percentage(goal.display_progress)})"
    )
    if goal.is_completed:
        console.print("[green]✓ Goal reached![/green]")


@goals_app.command(name="delete")
def goals_delete(
    goal_id: str = typer.Argument(..., help="Goal ID"),
    workspace: Path = WORKSPACE_OPTION,
) -> None:
    """Delete a goal."""
    ws = open_workspace(console, workspace)
    try:
        ws.storage.get_goal_repository().delete(ws.open_session(), goal_id)
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]Deleted goal:[/green] {goal_id}")
