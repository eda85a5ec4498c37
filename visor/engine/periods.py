"""Calendar period helpers.

Periods are half-open: [start, end). All dates are local; aware datetimes
are converted to local naive time before comparison.
"""

import re
from datetime import date, datetime

from visor.core.models import AnalyticsFrequency

MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_PERIOD_RE = re.compile(r"^(\d{4})(?:-(?:Q([1-4])|(\d{1,2})))?$")


def to_local_naive(value: datetime) -> datetime:
    """Drop tzinfo after converting to local time, so mixed inputs compare."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def first_day_of_month(d: date) -> date:
    return d.replace(day=1)


def shift_month(d: date, months: int) -> date:
    """First day of the month `months` away from d's month (may be negative)."""
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_start_datetime(d: date) -> datetime:
    """Midnight on the first day of d's month."""
    return datetime(d.year, d.month, 1)


def get_period_start(d: date, frequency: AnalyticsFrequency) -> date:
    """Start of the period containing d."""
    if frequency == AnalyticsFrequency.YEAR:
        return date(d.year, 1, 1)
    if frequency == AnalyticsFrequency.QUARTER:
        return date(d.year, (d.month - 1) // 3 * 3 + 1, 1)
    return first_day_of_month(d)


def get_period_end(start: date, frequency: AnalyticsFrequency) -> date:
    """Exclusive end of the period starting at start."""
    if frequency == AnalyticsFrequency.YEAR:
        return date(start.year + 1, 1, 1)
    if frequency == AnalyticsFrequency.QUARTER:
        return shift_month(start, 3)
    return shift_month(start, 1)


def get_current_period(
    frequency: AnalyticsFrequency,
    today: date | None = None,
) -> tuple[date, date]:
    """Return (start, end) of the period containing today."""
    start = get_period_start(today or date.today(), frequency)
    return start, get_period_end(start, frequency)


def get_period_bounds(
    frequency: AnalyticsFrequency,
    year: int,
    month: int | None = None,
    quarter: int | None = None,
) -> tuple[date, date]:
    """Return (start, end) for an explicit year, quarter or month.

    Args:
        frequency: Period granularity.
        year: Calendar year.
        month: Month number 1-12 (required for MONTH).
        quarter: Quarter number 1-4 (required for QUARTER).

    Raises:
        ValueError: If the month or quarter is missing or out of range.
    """
    if frequency == AnalyticsFrequency.MONTH:
        if month is None or not 1 <= month <= 12:
            raise ValueError(f"Month must be 1-12, got {month}")
        start = date(year, month, 1)
    elif frequency == AnalyticsFrequency.QUARTER:
        if quarter is None or not 1 <= quarter <= 4:
            raise ValueError(f"Quarter must be 1-4, got {quarter}")
        start = date(year, (quarter - 1) * 3 + 1, 1)
    else:
        start = date(year, 1, 1)
    return start, get_period_end(start, frequency)


def last_n_months(n: int, today: date | None = None) -> list[date]:
    """First days of the last n months, oldest first, ending with today's month."""
    current = first_day_of_month(today or date.today())
    return [shift_month(current, -i) for i in range(n - 1, -1, -1)]


def format_month_label(d: date) -> str:
    """Label like 'Oct 2026' (English abbreviations regardless of locale)."""
    return f"{MONTH_ABBR[d.month - 1]} {d.year}"


def format_period(start: date, frequency: AnalyticsFrequency) -> str:
    """Format a period as '2026-10', '2026-Q4' or '2026'."""
    if frequency == AnalyticsFrequency.YEAR:
        return str(start.year)
    if frequency == AnalyticsFrequency.QUARTER:
        return f"{start.year}-Q{(start.month - 1) // 3 + 1}"
    return f"{start.year}-{start.month:02d}"


def parse_period(text: str) -> tuple[AnalyticsFrequency, date]:
    """Parse '2026', '2026-Q3' or '2026-10' into (frequency, start).

    Raises:
        ValueError: If the text is not a recognised period.
    """
    match = _PERIOD_RE.match(text.strip())
    if not match:
        raise ValueError(
            f"Invalid period '{text}'. Use YYYY, YYYY-QN or YYYY-MM"
        )
    year = int(match.group(1))
    if match.group(2):
        quarter = int(match.group(2))
        return AnalyticsFrequency.QUARTER, date(year, (quarter - 1) * 3 + 1, 1)
    if match.group(3):
        month = int(match.group(3))
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month in period '{text}'")
        return AnalyticsFrequency.MONTH, date(year, month, 1)
    return AnalyticsFrequency.YEAR, date(year, 1, 1)
