"""Metrics engine: pure calculations over transaction lists."""

from visor.engine.currency import currency_symbol, format_amount, format_currency
from visor.engine.metrics import (
    calculate_category_breakdown,
    calculate_financial_summary,
    calculate_investment_portfolio,
    calculate_monthly_trend,
    calculate_period_summary,
    get_top_categories,
)
from visor.engine.scores import (
    calculate_emergency_fund_score,
    calculate_financial_health_score,
    calculate_savings_rate_score,
)

__all__ = [
    "calculate_category_breakdown",
    "calculate_emergency_fund_score",
    "calculate_financial_health_score",
    "calculate_financial_summary",
    "calculate_investment_portfolio",
    "calculate_monthly_trend",
    "calculate_period_summary",
    "calculate_savings_rate_score",
    "currency_symbol",
    "format_amount",
    "format_currency",
    "get_top_categories",
]
