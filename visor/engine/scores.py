"""Tiered scoring of savings rate, emergency fund and overall health."""

from decimal import ROUND_HALF_UP, Decimal

from visor.core.models import InsightScore, ScoreCategory, to_decimal

GREEN = "hsl(142, 76%, 36%)"
AMBER = "hsl(38, 92%, 50%)"
RED = "hsl(1, 83%, 63%)"

Number = Decimal | float | int

# (threshold, score, category, color), checked top-down with >=
SAVINGS_RATE_TIERS = (
    (Decimal(30), 95, ScoreCategory.EXCELLENT, GREEN),
    (Decimal(20), 80, ScoreCategory.GOOD, GREEN),
    (Decimal(10), 60, ScoreCategory.FAIR, AMBER),
)
SAVINGS_RATE_FLOOR = InsightScore(score=30, category=ScoreCategory.POOR, color=RED)

EMERGENCY_FUND_TIERS = (
    (Decimal(6), 95, ScoreCategory.EXCELLENT, GREEN),
    (Decimal(3), 75, ScoreCategory.GOOD, AMBER),
    (Decimal(1), 50, ScoreCategory.FAIR, AMBER),
)
EMERGENCY_FUND_FLOOR = InsightScore(score=20, category=ScoreCategory.POOR, color=RED)

SAVINGS_WEIGHT = Decimal("0.4")
EMERGENCY_WEIGHT = Decimal("0.3")
INVESTMENT_WEIGHT = Decimal("0.3")


def _score_tiers(value: Decimal, tiers, floor: InsightScore) -> InsightScore:
    if value.is_nan():
        return floor.model_copy()
    for threshold, score, category, color in tiers:
        if value >= threshold:
            return InsightScore(score=score, category=category, color=color)
    return floor.model_copy()


def calculate_savings_rate_score(savings_rate: Number) -> InsightScore:
    """Score a savings rate given in percent.

    >= 30 excellent (95), >= 20 good (80), >= 10 fair (60), else poor (30).
    """
    return _score_tiers(to_decimal(savings_rate), SAVINGS_RATE_TIERS, SAVINGS_RATE_FLOOR)


def calculate_emergency_fund_months(
    current_amount: Number,
    monthly_expenses: Number,
) -> Decimal:
    """How many months of expenses current_amount covers.

    Zero when monthly_expenses is not a finite positive number. NaN savings
    give NaN months, which scores as poor.
    """
    expenses = to_decimal(monthly_expenses)
    if not expenses.is_finite() or expenses <= 0:
        return Decimal(0)
    return to_decimal(current_amount) / expenses


def calculate_emergency_fund_score(
    current_amount: Number,
    monthly_expenses: Number,
) -> InsightScore:
    """Score an emergency fund by months of expenses covered.

    >= 6 excellent (95), >= 3 good (75), >= 1 fair (50), else poor (20).
    """
    months = calculate_emergency_fund_months(current_amount, monthly_expenses)
    return _score_tiers(months, EMERGENCY_FUND_TIERS, EMERGENCY_FUND_FLOOR)


def calculate_investment_score(investment_ratio: Number) -> Decimal:
    """Investment ratio (a fraction) as a score, min(ratio * 100, 100).

    Negative ratios are also floored at 0 so the blended health score
    stays within 0-100. NaN scores 0.
    """
    ratio = to_decimal(investment_ratio)
    if ratio.is_nan():
        return Decimal(0)
    return min(max(ratio * 100, Decimal(0)), Decimal(100))


def calculate_financial_health_score(
    savings_rate: Number,
    emergency_fund_months: Number,
    investment_ratio: Number,
) -> int:
    """Weighted 0-100 health score.

    40% savings-rate score, 30% emergency-fund score and 30% investment
    score, rounded half up. emergency_fund_months is the month ratio
    itself and is tiered like calculate_emergency_fund_score.

    Args:
        savings_rate: Savings rate in percent.
        emergency_fund_months: Months of expenses covered.
        investment_ratio: Investments over income, as a fraction.

    Returns:
        Integer score.
    """
    savings_score = calculate_savings_rate_score(savings_rate).score
    emergency_score = _score_tiers(
        to_decimal(emergency_fund_months), EMERGENCY_FUND_TIERS, EMERGENCY_FUND_FLOOR
    ).score
    investment_score = calculate_investment_score(investment_ratio)

    blended = (
        savings_score * SAVINGS_WEIGHT
        + emergency_score * EMERGENCY_WEIGHT
        + investment_score * INVESTMENT_WEIGHT
    )
    return int(blended.quantize(Decimal(1), rounding=ROUND_HALF_UP))
