"""Tests for the command-line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from visor import __version__
from visor.cli.main import app

runner = CliRunner()


@pytest.fixture
def workspace(tmp_path: Path) -> str:
    path = tmp_path / "ws"
    result = runner.invoke(app, ["init", "Home", "--path", str(path)])
    assert result.exit_code == 0, result.output
    return str(path)


def add(workspace: str, *args: str):
    return runner.invoke(app, ["tx", "add", *args, "-w", workspace])


class TestInit:
    """Tests for 'visor init'."""

    def test_creates_workspace(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["init", "Trip", "--path", str(tmp_path / "trip"), "-c", "usd"])

        assert result.exit_code == 0
        assert "Created workspace" in result.output
        assert "USD" in result.output
        assert (tmp_path / "trip" / "visor.json").is_file()

    def test_existing_workspace(self, workspace: str) -> None:
        result = runner.invoke(app, ["init", "Home", "--path", workspace])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestStatus:
    """Tests for 'visor status'."""

    def test_no_workspace(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["status", "-w", str(tmp_path)])
        assert result.exit_code == 1
        assert "No workspace found" in result.output

    def test_empty(self, workspace: str) -> None:
        result = runner.invoke(app, ["status", "-w", workspace])
        assert result.exit_code == 0
        assert "No transactions recorded yet" in result.output

    def test_with_data(self, workspace: str) -> None:
        add(workspace, "income", "50000", "salary")
        add(workspace, "expense", "20000", "housing")

        result = runner.invoke(app, ["status", "-w", workspace])

        assert result.exit_code == 0
        assert "This Month" in result.output
        assert "60.0%" in result.output
        assert "Housing & Rent" in result.output


class TestTransactions:
    """Tests for 'visor tx' subcommands."""

    def test_add_and_list(self, workspace: str) -> None:
        result = add(workspace, "expense", "450", "food", "--title", "Pizza")
        assert result.exit_code == 0
        assert "Added:" in result.output

        result = runner.invoke(app, ["tx", "list", "-w", workspace])
        assert result.exit_code == 0
        assert "Pizza" in result.output
        assert "1 transactions" in result.output

    def test_list_filters(self, workspace: str) -> None:
        add(workspace, "expense", "450", "food", "--title", "Pizza")
        add(workspace, "income", "1000", "salary", "--title", "Pay")

        result = runner.invoke(app, ["tx", "list", "--type", "income", "-w", workspace])
        assert "Pay" in result.output
        assert "Pizza" not in result.output

        result = runner.invoke(app, ["tx", "list", "--search", "nothing", "-w", workspace])
        assert "No transactions found" in result.output

    def test_add_invalid_amount(self, workspace: str) -> None:
        result = add(workspace, "expense", "0.5", "food")
        assert result.exit_code == 1
        assert "Invalid amount" in result.output

    def test_add_split(self, workspace: str) -> None:
        result = add(workspace, "expense", "900", "food", "--split", "3", "--with", "Asha")
        assert result.exit_code == 0
        assert "Split 3 ways" in result.output
        assert "₹300.00" in result.output

    def test_delete_unknown(self, workspace: str) -> None:
        result = runner.invoke(app, ["tx", "delete", "does-not-exist", "-w", workspace])
        assert result.exit_code == 1

    def test_clear_requires_confirm(self, workspace: str) -> None:
        add(workspace, "expense", "10", "food")

        result = runner.invoke(app, ["tx", "clear", "-w", workspace])
        assert result.exit_code == 0
        assert "--confirm" in result.output

        result = runner.invoke(app, ["tx", "clear", "--confirm", "-w", workspace])
        assert result.exit_code == 0
        assert "Deleted: 1 transactions" in result.output


class TestAnalytics:
    """Tests for breakdown, trend, summary and insights."""

    def test_breakdown(self, workspace: str) -> None:
        add(workspace, "expense", "150", "food")
        add(workspace, "expense", "50", "fuel")

        result = runner.invoke(app, ["breakdown", "-w", workspace])

        assert result.exit_code == 0
        assert "Food & Dining" in result.output
        assert "75.0%" in result.output

    def test_breakdown_empty(self, workspace: str) -> None:
        result = runner.invoke(app, ["breakdown", "--type", "investment", "-w", workspace])
        assert result.exit_code == 0
        assert "No investment transactions found" in result.output

    def test_trend(self, workspace: str) -> None:
        add(workspace, "expense", "150", "food")
        result = runner.invoke(app, ["trend", "-w", workspace])
        assert result.exit_code == 0
        assert "₹150.00" in result.output

    def test_summary_year(self, workspace: str) -> None:
        add(workspace, "income", "1000", "salary", "--date", "2024-05-01")
        result = runner.invoke(
            app, ["summary", "--frequency", "year", "--year", "2024", "-w", workspace]
        )
        assert result.exit_code == 0
        assert "Summary for 2024" in result.output
        assert "Transactions in period: 1" in result.output

    def test_insights(self, workspace: str) -> None:
        add(workspace, "income", "1000", "salary")
        result = runner.invoke(app, ["insights", "-w", workspace])
        assert result.exit_code == 0
        assert "Financial Health Score" in result.output


class TestGoalsAndCategories:
    """Tests for 'visor goals' and 'visor categories'."""

    def test_goals(self, workspace: str) -> None:
        result = runner.invoke(app, ["goals", "add", "Trip", "1000", "--saved", "250", "-w", workspace])
        assert result.exit_code == 0

        result = runner.invoke(app, ["goals", "list", "-w", workspace])
        assert result.exit_code == 0
        assert "0/1 completed" in result.output

    def test_goals_empty(self, workspace: str) -> None:
        result = runner.invoke(app, ["goals", "list", "-w", workspace])
        assert "No goals yet" in result.output

    def test_categories(self) -> None:
        result = runner.invoke(app, ["categories", "--type", "income"])
        assert result.exit_code == 0
        assert "Salary" in result.output
        assert "8 categories" in result.output


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
