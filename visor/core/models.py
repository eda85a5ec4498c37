"""Domain models for Visor.

All records and derived results are defined here using Pydantic v2 for
validation. Amounts are Decimals in the user's currency (INR by default).
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Annotated
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, computed_field, model_validator

CENT = Decimal("0.01")


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    """Convert without binary float noise (0.1 -> Decimal('0.1'))."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------


class TransactionType(str, Enum):
    """Kind of money movement."""

    INCOME = "income"
    EXPENSE = "expense"
    INVESTMENT = "investment"


class RecurrenceFrequency(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class AnalyticsFrequency(str, Enum):
    """Period granularity for period analytics."""

    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class ScoreCategory(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class GoalCategory(str, Enum):
    EMERGENCY = "emergency"
    TRAVEL = "travel"
    HOME = "home"
    RETIREMENT = "retirement"
    EDUCATION = "education"
    OTHER = "other"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class RiskTolerance(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class InvestmentStrategy(str, Enum):
    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    GROWTH = "growth"
    AGGRESSIVE = "aggressive"


# -----------------------------------------------------------------------------
# Transaction Models
# -----------------------------------------------------------------------------


class Transaction(BaseModel):
    """A single stored financial transaction.

    Attributes:
        id: Unique identifier (auto-generated UUID).
        user_id: Owner of the record.
        type: income, expense or investment.
        amount: Amount in the user's currency. Always finite.
        title: Short human description.
        category: Category id from the registry (free text is tolerated).
        date: When the transaction happened (local time).
        notes: Optional free-form notes.
        is_recurring: True if entered as a recurring payment.
        recurrence_frequency: weekly or monthly, only for recurring entries.
        recurrence_count: How many occurrences the amount covers.
        is_split: True if the amount is the user's share of a split bill.
        split_count: Number of people the bill was split between.
        split_with: Names of the people sharing the bill.
        created_at: Record creation timestamp.
    """

    id: UUID = Field(default_factory=uuid4)
    user_id: str = Field(min_length=1)
    type: TransactionType
    amount: Decimal = Field(allow_inf_nan=False)
    title: str = Field(min_length=1)
    category: str = Field(min_length=1)
    date: datetime
    notes: str | None = None
    is_recurring: bool = False
    recurrence_frequency: RecurrenceFrequency | None = None
    recurrence_count: int | None = Field(default=None, ge=2, le=299)
    is_split: bool = False
    split_count: int | None = Field(default=None, ge=2, le=50)
    split_with: list[str] | None = None
    created_at: datetime = Field(default_factory=datetime.now)


class TransactionCreate(BaseModel):
    """User input for a new transaction (form-level validation).

    The stored amount is derived: multiplied by recurrence_count for
    recurring entries, then divided by split_count for split bills.
    """

    type: TransactionType
    amount: Annotated[Decimal, Field(ge=1)]
    title: str = ""
    category: str = Field(min_length=1)
    date: datetime = Field(default_factory=datetime.now)
    notes: str | None = None
    is_recurring: bool = False
    recurrence_frequency: RecurrenceFrequency | None = None
    recurrence_count: int | None = Field(default=None, ge=2, le=299)
    is_split: bool = False
    split_count: int | None = Field(default=None, ge=2, le=50)
    split_with: list[str] | None = None

    @model_validator(mode="after")
    def drop_inactive_options(self) -> "TransactionCreate":
        """Clear recurrence/split details when the flag is off."""
        if not self.is_recurring:
            self.recurrence_frequency = None
            self.recurrence_count = None
        if not self.is_split:
            self.split_count = None
            self.split_with = None
        return self

    @property
    def final_amount(self) -> Decimal:
        """Amount to store after applying recurrence and split."""
        amount = self.amount
        if self.is_recurring and self.recurrence_count:
            amount = amount * self.recurrence_count
        if self.is_split and self.split_count:
            amount = amount / self.split_count
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)

    @property
    def default_title(self) -> str:
        title = f"{self.type.value.capitalize()} - {self.category}"
        if self.is_recurring and self.recurrence_count:
            title += f" ({self.recurrence_count}x)"
        if self.is_split and self.split_count:
            title += f" (Split {self.split_count} ways)"
        return title

    def to_transaction(self, user_id: str) -> Transaction:
        """Build the stored Transaction for a user."""
        return Transaction(
            user_id=user_id,
            type=self.type,
            amount=self.final_amount,
            title=self.title.strip() or self.default_title,
            category=self.category,
            date=self.date,
            notes=self.notes,
            is_recurring=self.is_recurring,
            recurrence_frequency=self.recurrence_frequency,
            recurrence_count=self.recurrence_count,
            is_split=self.is_split,
            split_count=self.split_count,
            split_with=self.split_with,
        )


# -----------------------------------------------------------------------------
# Goals & Settings
# -----------------------------------------------------------------------------


class Goal(BaseModel):
    """A savings goal.

    progress is the raw percentage and may exceed 100 once the goal is
    overfunded; display_progress is clamped to [0, 100].
    """

    id: UUID = Field(default_factory=uuid4)
    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    target_amount: Annotated[Decimal, Field(ge=1)]
    current_amount: Annotated[Decimal, Field(ge=0)] = Decimal(0)
    target_date: datetime | None = None
    category: GoalCategory = GoalCategory.OTHER
    created_at: datetime = Field(default_factory=datetime.now)

    @computed_field  # type: ignore[misc]
    @property
    def progress(self) -> Decimal:
        """Saved share of the target, in percent."""
        return self.current_amount / self.target_amount * 100

    @property
    def display_progress(self) -> Decimal:
        return min(max(self.progress, Decimal(0)), Decimal(100))

    @property
    def remaining_amount(self) -> Decimal:
        return max(self.target_amount - self.current_amount, Decimal(0))

    @property
    def is_completed(self) -> bool:
        return self.current_amount >= self.target_amount


class UserSettings(BaseModel):
    """Per-user preferences stored with the workspace."""

    theme: Theme = Theme.LIGHT
    currency: str = Field(default="INR", min_length=3, max_length=3, pattern=r"^[A-Z]{3}$")
    savings_target: int = Field(default=30, ge=0, le=100)  # percent of income
    risk_tolerance: RiskTolerance = RiskTolerance.MODERATE
    investment_strategy: InvestmentStrategy = InvestmentStrategy.BALANCED


# -----------------------------------------------------------------------------
# Workspace Configuration
# -----------------------------------------------------------------------------


class WorkspaceConfig(BaseModel):
    """Contents of visor.json.

    A workspace is a directory with this file plus the JSON data files it
    points to.
    """

    name: str = Field(min_length=1)
    description: str | None = None
    user_id: str = Field(default="demo-user", min_length=1)
    transactions_file: str = "transactions.json"
    goals_file: str = "goals.json"
    settings: UserSettings = Field(default_factory=UserSettings)


# -----------------------------------------------------------------------------
# Derived Models (computed per call, never persisted)
# -----------------------------------------------------------------------------


class FinancialSummary(BaseModel):
    """Current-month totals plus all-time investments."""

    monthly_income: Decimal = Decimal(0)
    monthly_expenses: Decimal = Decimal(0)
    monthly_investments: Decimal = Decimal(0)
    net_savings: Decimal = Decimal(0)
    savings_rate: Decimal = Decimal(0)  # percent of monthly income
    total_investments: Decimal = Decimal(0)


class PeriodSummary(FinancialSummary):
    """FinancialSummary for an explicit month, quarter or year.

    period_end is exclusive.
    """

    frequency: AnalyticsFrequency
    period_label: str
    period_start: date
    period_end: date
    transaction_count: int = 0


class CategoryBreakdown(BaseModel):
    """Aggregate of one category for one transaction type."""

    category: str
    amount: Decimal
    percentage: Decimal = Decimal(0)
    count: int = 0


class MonthlyTrendPoint(BaseModel):
    month: str  # "Oct 2026"
    amount: Decimal = Decimal(0)


class InsightScore(BaseModel):
    """Tiered score with a display colour."""

    score: int
    category: ScoreCategory
    color: str


class GoalsOverview(BaseModel):
    goal_count: int = 0
    completed_count: int = 0
    total_target: Decimal = Decimal(0)
    total_saved: Decimal = Decimal(0)
    overall_progress: Decimal = Decimal(0)  # clamped to [0, 100]


class HealthReport(BaseModel):
    """Composite financial health derived from a transaction list.

    Ratios are percentages except liquidity_ratio (a multiple) and
    investment_ratio (a fraction, as fed into the health score).
    """

    summary: FinancialSummary
    savings_rate: Decimal
    savings_score: InsightScore
    emergency_fund_months: Decimal
    emergency_score: InsightScore
    investment_ratio: Decimal
    expense_ratio: Decimal
    emi_to_income_ratio: Decimal
    debt_to_income_ratio: Decimal
    liquidity_ratio: Decimal
    health_score: int
