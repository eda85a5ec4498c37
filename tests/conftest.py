"""Shared fixtures."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from visor.core.config import get_settings
from visor.core.models import Transaction, TransactionType

TODAY = date(2026, 10, 18)


def make_tx(
    type: TransactionType,
    amount: str | int,
    category: str,
    when: datetime,
    user_id: str = "demo-user",
    title: str = "Test",
) -> Transaction:
    return Transaction(
        user_id=user_id,
        type=type,
        amount=Decimal(str(amount)),
        title=title,
        category=category,
        date=when,
    )


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Isolate tests from VISOR_* variables in the environment."""
    for var in ("VISOR_WORKSPACE", "VISOR_LOG_LEVEL", "VISOR_DEFAULT_CURRENCY", "VISOR_SESSION_TTL_MINUTES"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
