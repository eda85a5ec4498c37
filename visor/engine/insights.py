"""Financial health insights.

Ratio metrics over a transaction list and the composed health report.
Ratios are percentages unless stated otherwise and are 0 whenever their
denominator is 0.
"""

from datetime import date
from decimal import Decimal

from visor.core.models import (
    FinancialSummary,
    Goal,
    GoalsOverview,
    HealthReport,
    Transaction,
    TransactionType,
)
from visor.engine.metrics import (
    calculate_financial_summary,
    calculate_percentage,
    sum_by_type,
)
from visor.engine.scores import (
    calculate_emergency_fund_months,
    calculate_emergency_fund_score,
    calculate_financial_health_score,
    calculate_savings_rate_score,
)

EMI_KEYWORDS = ("loan", "emi")
DEBT_KEYWORDS = ("loan", "emi", "credit card")

# Share of income assumed to sit in liquid savings.
LIQUID_SAVINGS_SHARE = Decimal("0.2")

# Indian household reference values, in percent.
BENCHMARKS: dict[str, dict[str, Decimal]] = {
    "emi_to_income": {
        "excellent": Decimal(20),
        "good": Decimal(30),
        "average": Decimal(40),
        "poor": Decimal(50),
        "national": Decimal("33"),
    },
    "debt_to_income": {
        "excellent": Decimal(20),
        "good": Decimal(30),
        "average": Decimal(40),
        "poor": Decimal(50),
        "national": Decimal("39.1"),
    },
    "savings_rate": {
        "excellent": Decimal(30),
        "good": Decimal(20),
        "average": Decimal(15),
        "poor": Decimal(10),
        "national": Decimal("5.1"),
    },
    "investment_ratio": {
        "excellent": Decimal(100),
        "good": Decimal(50),
        "average": Decimal(25),
        "poor": Decimal(15),
        "national": Decimal("11.4"),
    },
}


def _category_matches(category: str, keywords: tuple[str, ...]) -> bool:
    text = category.lower().replace("_", " ")
    return any(keyword in text for keyword in keywords)


def _expenses_matching(transactions: list[Transaction], keywords: tuple[str, ...]) -> Decimal:
    return sum(
        (
            tx.amount
            for tx in transactions
            if tx.type == TransactionType.EXPENSE and _category_matches(tx.category, keywords)
        ),
        Decimal(0),
    )


def calculate_emi_to_income_ratio(transactions: list[Transaction]) -> Decimal:
    """Loan/EMI expenses over income."""
    income = sum_by_type(transactions, TransactionType.INCOME)
    return calculate_percentage(_expenses_matching(transactions, EMI_KEYWORDS), income)


def calculate_debt_to_income_ratio(transactions: list[Transaction]) -> Decimal:
    """Loan, EMI and credit-card expenses over income."""
    income = sum_by_type(transactions, TransactionType.INCOME)
    return calculate_percentage(_expenses_matching(transactions, DEBT_KEYWORDS), income)


def calculate_investment_ratio(transactions: list[Transaction]) -> Decimal:
    income = sum_by_type(transactions, TransactionType.INCOME)
    investments = sum_by_type(transactions, TransactionType.INVESTMENT)
    return calculate_percentage(investments, income)


def calculate_liquidity_ratio(transactions: list[Transaction]) -> Decimal:
    """Assumed liquid savings (20% of income) as a multiple of expenses."""
    expenses = sum_by_type(transactions, TransactionType.EXPENSE)
    if expenses <= 0:
        return Decimal(0)
    income = sum_by_type(transactions, TransactionType.INCOME)
    return income * LIQUID_SAVINGS_SHARE / expenses


def calculate_expense_ratio(summary: FinancialSummary) -> Decimal:
    return calculate_percentage(summary.monthly_expenses, summary.monthly_income)


def calculate_summary_emergency_months(summary: FinancialSummary) -> Decimal:
    """Months of current expenses covered by all-time investments."""
    return calculate_emergency_fund_months(summary.total_investments, summary.monthly_expenses)


def rate_emi_ratio(ratio: Decimal) -> str:
    if ratio < 20:
        return "Excellent"
    if ratio < 30:
        return "Good"
    if ratio < 40:
        return "Fair"
    return "High Risk"


def rate_expense_ratio(ratio: Decimal) -> str:
    if ratio < 70:
        return "Controlled"
    if ratio < 85:
        return "Moderate"
    return "High"


def rate_emergency_fund(months: Decimal) -> str:
    if months >= 6:
        return "Secure"
    if months >= 3:
        return "Protected"
    return "Build Needed"


def build_health_report(
    transactions: list[Transaction],
    today: date | None = None,
) -> HealthReport:
    """Compose summary, scores and ratios into one report.

    The savings rate is floored at 0 for scoring. The emergency fund is
    all-time investments measured in months of this month's expenses, and
    the investment ratio fed into the health score is this month's
    investments over this month's income (a fraction).

    Args:
        transactions: All of the user's transactions.
        today: Reference date (defaults to the local current date).

    Returns:
        HealthReport.
    """
    summary = calculate_financial_summary(transactions, today=today)

    savings_rate = max(summary.savings_rate, Decimal(0))
    emergency_months = calculate_summary_emergency_months(summary)
    investment_ratio = (
        summary.monthly_investments / summary.monthly_income
        if summary.monthly_income > 0
        else Decimal(0)
    )

    return HealthReport(
        summary=summary,
        savings_rate=savings_rate,
        savings_score=calculate_savings_rate_score(savings_rate),
        emergency_fund_months=emergency_months,
        emergency_score=calculate_emergency_fund_score(
            summary.total_investments, summary.monthly_expenses
        ),
        investment_ratio=investment_ratio,
        expense_ratio=calculate_expense_ratio(summary),
        emi_to_income_ratio=calculate_emi_to_income_ratio(transactions),
        debt_to_income_ratio=calculate_debt_to_income_ratio(transactions),
        liquidity_ratio=calculate_liquidity_ratio(transactions),
        health_score=calculate_financial_health_score(
            savings_rate, emergency_months, investment_ratio
        ),
    )


def summarize_goals(goals: list[Goal]) -> GoalsOverview:
    """Totals and clamped overall progress across goals."""
    total_target = sum((g.target_amount for g in goals), Decimal(0))
    total_saved = sum((g.current_amount for g in goals), Decimal(0))
    progress = calculate_percentage(total_saved, total_target)

    return GoalsOverview(
        goal_count=len(goals),
        completed_count=sum(1 for g in goals if g.is_completed),
        total_target=total_target,
        total_saved=total_saved,
        overall_progress=min(progress, Decimal(100)),
    )
