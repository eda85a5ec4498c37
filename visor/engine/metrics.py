"""Metrics engine.

Pure functions deriving summaries, category breakdowns and trends from a
caller-supplied list of transactions. Nothing here performs I/O, mutates
its inputs or keeps state between calls.

Amounts are assumed finite (Transaction validation rejects NaN/Infinity);
negative amounts are not validated and pass through the arithmetic as-is.
"""

from datetime import date, datetime
from decimal import Decimal

from visor.core.models import (
    AnalyticsFrequency,
    CategoryBreakdown,
    FinancialSummary,
    MonthlyTrendPoint,
    PeriodSummary,
    Transaction,
    TransactionType,
)
from visor.engine.periods import (
    first_day_of_month,
    format_month_label,
    format_period,
    get_current_period,
    get_period_bounds,
    last_n_months,
    month_start_datetime,
    to_local_naive,
)

TREND_MONTHS = 6
TOP_CATEGORIES_LIMIT = 5


def calculate_savings_rate(net_savings: Decimal, income: Decimal) -> Decimal:
    """Net savings as a percentage of income (0 without income)."""
    if income <= 0:
        return Decimal(0)
    return net_savings / income * 100


def calculate_percentage(amount: Decimal, total: Decimal) -> Decimal:
    """Share of total in percent, unrounded. Zero when total is not positive."""
    if total <= 0:
        return Decimal(0)
    return amount / total * 100


def sum_by_type(
    transactions: list[Transaction],
    type: TransactionType | str,
) -> Decimal:
    """Sum the amounts of all transactions of one type."""
    return sum((tx.amount for tx in transactions if tx.type == type), Decimal(0))


def calculate_financial_summary(
    transactions: list[Transaction],
    today: date | None = None,
) -> FinancialSummary:
    """Summarize the current month.

    The window starts at midnight on the first day of the current month and
    has no upper bound. total_investments covers the whole input.

    Args:
        transactions: Transactions to summarize.
        today: Reference date (defaults to the local current date).

    Returns:
        FinancialSummary; all zeros for an empty list.
    """
    month_start = month_start_datetime(today or date.today())

    income = Decimal(0)
    expenses = Decimal(0)
    investments = Decimal(0)
    total_investments = Decimal(0)

    for tx in transactions:
        if tx.type == TransactionType.INVESTMENT:
            total_investments += tx.amount

        if to_local_naive(tx.date) < month_start:
            continue

        if tx.type == TransactionType.INCOME:
            income += tx.amount
        elif tx.type == TransactionType.EXPENSE:
            expenses += tx.amount
        elif tx.type == TransactionType.INVESTMENT:
            investments += tx.amount

    net_savings = income - expenses

    return FinancialSummary(
        monthly_income=income,
        monthly_expenses=expenses,
        monthly_investments=investments,
        net_savings=net_savings,
        savings_rate=calculate_savings_rate(net_savings, income),
        total_investments=total_investments,
    )


def calculate_period_summary(
    transactions: list[Transaction],
    frequency: AnalyticsFrequency | str = AnalyticsFrequency.MONTH,
    year: int | None = None,
    month: int | None = None,
    quarter: int | None = None,
    today: date | None = None,
) -> PeriodSummary:
    """Summarize an explicit month, quarter or year.

    A month needs `month` (1-12) and a quarter needs `quarter` (1-4);
    without them the period containing `today` is used. `year` defaults
    to today's year.

    Args:
        transactions: Transactions to summarize.
        frequency: month, quarter or year.
        year: Calendar year of the period.
        month: Month number for monthly summaries.
        quarter: Quarter number for quarterly summaries.
        today: Reference date (defaults to the local current date).

    Returns:
        PeriodSummary for [period_start, period_end).

    Raises:
        ValueError: If frequency, month or quarter is out of range.
    """
    frequency = AnalyticsFrequency(frequency)
    today = today or date.today()
    year = year or today.year

    if frequency == AnalyticsFrequency.YEAR:
        start, end = get_period_bounds(frequency, year)
    elif frequency == AnalyticsFrequency.QUARTER and quarter is not None:
        start, end = get_period_bounds(frequency, year, quarter=quarter)
    elif frequency == AnalyticsFrequency.MONTH and month is not None:
        start, end = get_period_bounds(frequency, year, month=month)
    else:
        start, end = get_current_period(frequency, today)

    window_start = datetime(start.year, start.month, start.day)
    window_end = datetime(end.year, end.month, end.day)

    income = Decimal(0)
    expenses = Decimal(0)
    investments = Decimal(0)
    count = 0

    for tx in transactions:
        tx_date = to_local_naive(tx.date)
        if tx_date < window_start or tx_date >= window_end:
            continue

        count += 1
        if tx.type == TransactionType.INCOME:
            income += tx.amount
        elif tx.type == TransactionType.EXPENSE:
            expenses += tx.amount
        elif tx.type == TransactionType.INVESTMENT:
            investments += tx.amount

    net_savings = income - expenses

    return PeriodSummary(
        frequency=frequency,
        period_label=format_period(start, frequency),
        period_start=start,
        period_end=end,
        monthly_income=income,
        monthly_expenses=expenses,
        monthly_investments=investments,
        net_savings=net_savings,
        savings_rate=calculate_savings_rate(net_savings, income),
        total_investments=sum_by_type(transactions, TransactionType.INVESTMENT),
        transaction_count=count,
    )


def calculate_category_breakdown(
    transactions: list[Transaction],
    type: TransactionType | str,
) -> list[CategoryBreakdown]:
    """Aggregate amount, share and count per category for one type.

    Categories are matched exactly (case-sensitive). The result is sorted by
    amount, largest first; equal amounts keep first-appearance order.

    Args:
        transactions: Transactions to aggregate.
        type: Transaction type to include.

    Returns:
        List of CategoryBreakdown. Percentages sum to 100 when the total is
        positive and are all 0 otherwise.
    """
    amounts: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    total = Decimal(0)

    for tx in transactions:
        if tx.type != type:
            continue
        cat = tx.category
        amounts[cat] = amounts.get(cat, Decimal(0)) + tx.amount
        counts[cat] = counts.get(cat, 0) + 1
        total += tx.amount

    breakdown = [
        CategoryBreakdown(
            category=cat,
            amount=amount,
            percentage=calculate_percentage(amount, total),
            count=counts[cat],
        )
        for cat, amount in amounts.items()
    ]
    breakdown.sort(key=lambda item: item.amount, reverse=True)
    return breakdown


def get_top_categories(
    transactions: list[Transaction],
    type: TransactionType | str,
    limit: int = TOP_CATEGORIES_LIMIT,
) -> list[CategoryBreakdown]:
    """First `limit` entries of the category breakdown."""
    return calculate_category_breakdown(transactions, type)[:limit]


def calculate_investment_portfolio(
    transactions: list[Transaction],
) -> list[CategoryBreakdown]:
    """Category breakdown of investment transactions."""
    return calculate_category_breakdown(transactions, TransactionType.INVESTMENT)


def calculate_monthly_trend(
    transactions: list[Transaction],
    type: TransactionType | str,
    today: date | None = None,
) -> list[MonthlyTrendPoint]:
    """Monthly totals for the last six months, oldest first.

    Always returns exactly six points ending with the current month;
    months without matching transactions report 0. Transactions outside
    the window are ignored.

    Args:
        transactions: Transactions to aggregate.
        type: Transaction type to include.
        today: Reference date (defaults to the local current date).

    Returns:
        List of MonthlyTrendPoint labelled like 'Oct 2026'.
    """
    months = last_n_months(TREND_MONTHS, today)
    buckets: dict[date, Decimal] = {m: Decimal(0) for m in months}

    for tx in transactions:
        if tx.type != type:
            continue
        key = first_day_of_month(to_local_naive(tx.date).date())
        if key in buckets:
            buckets[key] += tx.amount

    return [
        MonthlyTrendPoint(month=format_month_label(m), amount=buckets[m])
        for m in months
    ]
