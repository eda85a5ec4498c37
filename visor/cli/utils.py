"""Shared helpers for CLI commands."""

from decimal import Decimal
from pathlib import Path

import typer
from rich.console import Console
from rich.text import Text

from visor.core.exceptions import VisorError, WorkspaceNotFoundError
from visor.core.models import InsightScore, ScoreCategory
from visor.core.workspace import Workspace, load_workspace
from visor.engine.currency import format_currency as _format_currency

SCORE_STYLES = {
    ScoreCategory.EXCELLENT: "green",
    ScoreCategory.GOOD: "green",
    ScoreCategory.FAIR: "yellow",
    ScoreCategory.POOR: "red",
}


def format_currency(amount: Decimal, currency: str) -> str:
    """Currency string with amounts shown to two decimals."""
    return _format_currency(Decimal(amount).quantize(Decimal("0.01")), currency)


def format_percentage(value: Decimal, digits: int = 1) -> str:
    return f"{value:.{digits}f}%"


def format_score(score: InsightScore) -> Text:
    style = SCORE_STYLES.get(score.category, "white")
    return Text(f"{score.score} ({score.category.value})", style=style)


def open_workspace(console: Console, workspace: Path | None) -> Workspace:
    """Load a workspace or print an error and exit with code 1."""
    try:
        return load_workspace(workspace)
    except WorkspaceNotFoundError:
        console.print(
            "[red]Error:[/red] No workspace found. "
            "Run 'visor init <name>' or use --workspace"
        )
        raise typer.Exit(1)
    except VisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
