"""Tests for ratio metrics and the health report."""

from datetime import datetime
from decimal import Decimal

from conftest import TODAY, make_tx
from visor.core.models import FinancialSummary, Goal, ScoreCategory, TransactionType
from visor.engine.insights import (
    BENCHMARKS,
    build_health_report,
    calculate_debt_to_income_ratio,
    calculate_emi_to_income_ratio,
    calculate_expense_ratio,
    calculate_investment_ratio,
    calculate_liquidity_ratio,
    calculate_summary_emergency_months,
    rate_emergency_fund,
    rate_emi_ratio,
    rate_expense_ratio,
    summarize_goals,
)

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE
INVESTMENT = TransactionType.INVESTMENT


def household() -> list:
    return [
        make_tx(INCOME, "100000", "salary", datetime(2026, 10, 1)),
        make_tx(EXPENSE, "25000", "loan_emi", datetime(2026, 10, 2)),
        make_tx(EXPENSE, "5000", "credit_card", datetime(2026, 10, 3)),
        make_tx(EXPENSE, "20000", "food", datetime(2026, 10, 4)),
        make_tx(INVESTMENT, "10000", "stocks", datetime(2026, 10, 5)),
        make_tx(INVESTMENT, "290000", "mutual_funds", datetime(2026, 1, 15)),
    ]


class TestRatios:
    """Tests for the individual ratio functions."""

    def test_emi_ratio(self) -> None:
        """Test that only loan/EMI categories count."""
        assert calculate_emi_to_income_ratio(household()) == Decimal(25)

    def test_debt_ratio_includes_credit_cards(self) -> None:
        assert calculate_debt_to_income_ratio(household()) == Decimal(30)

    def test_investment_ratio(self) -> None:
        assert calculate_investment_ratio(household()) == Decimal(300)

    def test_liquidity_ratio(self) -> None:
        """Test 20% of income over expenses."""
        assert calculate_liquidity_ratio(household()) == Decimal("0.4")

    def test_zero_denominators(self) -> None:
        """Test that every ratio is 0 without income or expenses."""
        transactions = [make_tx(EXPENSE, "500", "loan_emi", datetime(2026, 10, 1))]
        assert calculate_emi_to_income_ratio(transactions) == 0
        assert calculate_debt_to_income_ratio(transactions) == 0
        assert calculate_investment_ratio([]) == 0
        assert calculate_liquidity_ratio([]) == 0

    def test_summary_ratios(self) -> None:
        summary = FinancialSummary(
            monthly_income=Decimal(1000),
            monthly_expenses=Decimal(800),
            total_investments=Decimal(4000),
        )
        assert calculate_expense_ratio(summary) == Decimal(80)
        assert calculate_summary_emergency_months(summary) == Decimal(5)


class TestRatings:
    """Tests for the benchmark labels."""

    def test_emi_labels(self) -> None:
        assert rate_emi_ratio(Decimal(10)) == "Excellent"
        assert rate_emi_ratio(Decimal(20)) == "Good"
        assert rate_emi_ratio(Decimal(35)) == "Fair"
        assert rate_emi_ratio(Decimal(40)) == "High Risk"

    def test_expense_labels(self) -> None:
        assert rate_expense_ratio(Decimal(69)) == "Controlled"
        assert rate_expense_ratio(Decimal(70)) == "Moderate"
        assert rate_expense_ratio(Decimal(85)) == "High"

    def test_emergency_labels(self) -> None:
        assert rate_emergency_fund(Decimal(6)) == "Secure"
        assert rate_emergency_fund(Decimal(3)) == "Protected"
        assert rate_emergency_fund(Decimal("2.9")) == "Build Needed"

    def test_benchmarks_present(self) -> None:
        assert BENCHMARKS["savings_rate"]["national"] == Decimal("5.1")
        assert BENCHMARKS["debt_to_income"]["national"] == Decimal("39.1")


class TestBuildHealthReport:
    """Tests for build_health_report function."""

    def test_household(self) -> None:
        """Test the composed report for a typical month."""
        report = build_health_report(household(), today=TODAY)

        assert report.summary.monthly_income == Decimal("100000")
        assert report.summary.monthly_expenses == Decimal("50000")
        assert report.savings_rate == Decimal(50)
        assert report.savings_score.category == ScoreCategory.EXCELLENT
        assert report.emergency_fund_months == Decimal(6)
        assert report.emergency_score.score == 95
        assert report.investment_ratio == Decimal("0.1")
        assert report.expense_ratio == Decimal(50)
        assert report.emi_to_income_ratio == Decimal(25)
        assert report.debt_to_income_ratio == Decimal(30)
        # 0.4 * 95 + 0.3 * 95 + 0.3 * 10 = 69.5
        assert report.health_score == 70

    def test_negative_savings_floored(self) -> None:
        """Test that overspending is scored as a zero savings rate."""
        transactions = [
            make_tx(INCOME, "1000", "salary", datetime(2026, 10, 1)),
            make_tx(EXPENSE, "3000", "travel", datetime(2026, 10, 2)),
        ]
        report = build_health_report(transactions, today=TODAY)

        assert report.summary.savings_rate == Decimal(-200)
        assert report.savings_rate == Decimal(0)
        assert report.savings_score.category == ScoreCategory.POOR

    def test_empty(self) -> None:
        report = build_health_report([], today=TODAY)
        assert report.health_score == 18
        assert report.liquidity_ratio == 0


class TestSummarizeGoals:
    """Tests for summarize_goals function."""

    def test_totals_and_completion(self) -> None:
        goals = [
            Goal(user_id="u", name="Trip", target_amount=Decimal(1000), current_amount=Decimal(500)),
            Goal(user_id="u", name="Car", target_amount=Decimal(3000), current_amount=Decimal(3500)),
        ]
        overview = summarize_goals(goals)

        assert overview.goal_count == 2
        assert overview.completed_count == 1
        assert overview.total_target == Decimal(4000)
        assert overview.total_saved == Decimal(4000)
        assert overview.overall_progress == Decimal(100)

    def test_progress_capped(self) -> None:
        goals = [Goal(user_id="u", name="Fund", target_amount=Decimal(100), current_amount=Decimal(250))]
        assert summarize_goals(goals).overall_progress == Decimal(100)

    def test_no_goals(self) -> None:
        overview = summarize_goals([])
        assert overview.goal_count == 0
        assert overview.overall_progress == 0
