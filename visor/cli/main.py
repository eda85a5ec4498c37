"""Visor command-line interface."""

import typer

from visor import __version__
from visor.cli.analytics import breakdown_command, summary_command, trend_command
from visor.cli.categories_cmd import categories_command
from visor.cli.goals_cmd import goals_app
from visor.cli.init_cmd import init_command
from visor.cli.insights_cmd import insights_command
from visor.cli.status import status_command
from visor.cli.tx_cmd import tx_app
from visor.core.config import get_settings
from visor.core.log import setup_logging

app = typer.Typer(
    name="visor",
    help="Personal finance metrics: income, expenses, investments and savings health.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"visor {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    setup_logging("DEBUG" if verbose else get_settings().log_level.upper())


app.command(name="init")(init_command)
app.command(name="status")(status_command)
app.command(name="breakdown")(breakdown_command)
app.command(name="trend")(trend_command)
app.command(name="summary")(summary_command)
app.command(name="insights")(insights_command)
app.command(name="categories")(categories_command)
app.add_typer(tx_app, name="tx")
app.add_typer(goals_app, name="goals")


if __name__ == "__main__":
    app()
