"""Transaction list filtering."""

from datetime import date, datetime

from visor.core.models import Transaction, TransactionType
from visor.engine.periods import to_local_naive

ALL_TYPES = "all"


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return to_local_naive(value)
    return datetime(value.year, value.month, value.day)


def matches_search(tx: Transaction, search: str) -> bool:
    """Case-insensitive substring match on title or category."""
    needle = search.lower()
    return needle in tx.title.lower() or needle in tx.category.lower()


def filter_transactions(
    transactions: list[Transaction],
    search: str | None = None,
    type: TransactionType | str | None = None,
    category: str | None = None,
    start: date | None = None,
    end: date | None = None,
) -> list[Transaction]:
    """Return the transactions matching every given criterion.

    Args:
        transactions: Transactions to filter (not modified).
        search: Substring to look for in title or category.
        type: Transaction type; None or "all" keeps every type.
        category: Exact category id.
        start: Inclusive lower bound on the transaction date.
        end: Exclusive upper bound on the transaction date.

    Returns:
        New list, in input order.
    """
    start_dt = _as_datetime(start) if start is not None else None
    end_dt = _as_datetime(end) if end is not None else None

    result = []
    for tx in transactions:
        if search and not matches_search(tx, search):
            continue
        if type is not None and type != ALL_TYPES and tx.type != type:
            continue
        if category is not None and tx.category != category:
            continue
        tx_date = to_local_naive(tx.date)
        if start_dt is not None and tx_date < start_dt:
            continue
        if end_dt is not None and tx_date >= end_dt:
            continue
        result.append(tx)
    return result
