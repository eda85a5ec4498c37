"""Tests for JSON-file repositories."""

from datetime import date, datetime, timedelta
from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from conftest import make_tx
from visor.core.exceptions import RecordNotFoundError, SessionExpiredError, StorageError
from visor.core.models import Goal, TransactionCreate, TransactionType
from visor.core.session import Session
from visor.storage import JsonStorage

EXPENSE = TransactionType.EXPENSE
INCOME = TransactionType.INCOME


@pytest.fixture
def storage(tmp_path: Path) -> JsonStorage:
    return JsonStorage(tmp_path / "transactions.json", tmp_path / "goals.json")


@pytest.fixture
def session() -> Session:
    return Session.create("alice")


class TestTransactionRepository:
    """Tests for TransactionRepository."""

    def test_missing_file_is_empty(self, storage, session) -> None:
        repo = storage.get_transaction_repository()
        assert repo.get_all(session) == []
        assert repo.count(session) == 0

    def test_add_and_reload(self, storage, session) -> None:
        repo = storage.get_transaction_repository()
        tx = repo.add(session, make_tx(EXPENSE, "12.50", "food", datetime(2026, 10, 1)))

        reloaded = storage.get_transaction_repository().get(session, tx.id)
        assert reloaded.model_dump() == tx.model_dump()
        assert reloaded.amount == Decimal("12.50")

    def test_add_forces_session_user(self, storage, session) -> None:
        repo = storage.get_transaction_repository()
        tx = repo.add(session, make_tx(EXPENSE, "1", "food", datetime(2026, 10, 1), user_id="mallory"))
        assert tx.user_id == "alice"

    def test_newest_first(self, storage, session) -> None:
        repo = storage.get_transaction_repository()
        repo.add(session, make_tx(EXPENSE, "1", "food", datetime(2026, 9, 1), title="old"))
        repo.add(session, make_tx(EXPENSE, "1", "food", datetime(2026, 10, 1), title="new"))
        assert [tx.title for tx in repo.get_all(session)] == ["new", "old"]

    def test_users_isolated(self, storage, session) -> None:
        repo = storage.get_transaction_repository()
        tx = repo.add(session, make_tx(EXPENSE, "1", "food", datetime(2026, 10, 1)))
        bob = Session.create("bob")

        assert repo.get_all(bob) == []
        with pytest.raises(RecordNotFoundError):
            repo.get(bob, tx.id)
        with pytest.raises(RecordNotFoundError):
            repo.delete(bob, tx.id)

    def test_queries(self, storage, session) -> None:
        repo = storage.get_transaction_repository()
        repo.add(session, make_tx(INCOME, "100", "salary", datetime(2026, 10, 1)))
        repo.add(session, make_tx(EXPENSE, "20", "food", datetime(2026, 10, 2)))
        repo.add(session, make_tx(EXPENSE, "30", "fuel", datetime(2026, 11, 1)))

        assert len(repo.get_by_type(session, EXPENSE)) == 2
        assert [tx.category for tx in repo.get_by_category(session, "fuel")] == ["fuel"]
        in_october = repo.get_by_date_range(session, date(2026, 10, 1), date(2026, 11, 1))
        assert {tx.category for tx in in_october} == {"salary", "food"}

    def test_create_from_input(self, storage, session) -> None:
        repo = storage.get_transaction_repository()
        data = TransactionCreate(
            type="expense", amount=Decimal("90"), category="food", is_split=True, split_count=3
        )
        tx = repo.create(session, data)

        assert tx.amount == Decimal("30.00")
        assert tx.title == "Expense - food (Split 3 ways)"
        assert repo.count(session) == 1

    def test_update(self, storage, session) -> None:
        repo = storage.get_transaction_repository()
        tx = repo.add(session, make_tx(EXPENSE, "10", "food", datetime(2026, 10, 1)))

        updated = repo.update(session, tx.id, {"amount": Decimal("15"), "title": "Lunch"})
        assert updated.id == tx.id
        assert repo.get(session, tx.id).title == "Lunch"
        assert repo.get(session, tx.id).amount == Decimal("15")

    def test_update_revalidates(self, storage, session) -> None:
        repo = storage.get_transaction_repository()
        tx = repo.add(session, make_tx(EXPENSE, "10", "food", datetime(2026, 10, 1)))
        with pytest.raises(ValidationError):
            repo.update(session, tx.id, {"type": "gift"})

    def test_delete(self, storage, session) -> None:
        repo = storage.get_transaction_repository()
        tx = repo.add(session, make_tx(EXPENSE, "10", "food", datetime(2026, 10, 1)))

        repo.delete(session, str(tx.id))
        assert repo.count(session) == 0
        with pytest.raises(RecordNotFoundError, match="Transaction not found"):
            repo.delete(session, tx.id)

    def test_delete_all_keeps_other_users(self, storage, session) -> None:
        repo = storage.get_transaction_repository()
        bob = Session.create("bob")
        repo.add(session, make_tx(EXPENSE, "1", "food", datetime(2026, 10, 1)))
        repo.add(session, make_tx(EXPENSE, "2", "food", datetime(2026, 10, 2)))
        repo.add(bob, make_tx(EXPENSE, "3", "food", datetime(2026, 10, 3)))

        assert repo.delete_all(session) == 2
        assert repo.count(session) == 0
        assert repo.count(bob) == 1

    def test_expired_session_rejected(self, storage) -> None:
        expired = Session.create("alice", ttl=timedelta(minutes=1), now=datetime(2020, 1, 1))
        with pytest.raises(SessionExpiredError):
            storage.get_transaction_repository().get_all(expired)

    def test_corrupt_file(self, storage, session) -> None:
        storage.transactions_path.write_text('[{"amount": "oops"}]', encoding="utf-8")
        with pytest.raises(StorageError, match="Invalid data"):
            storage.get_transaction_repository().get_all(session)


class TestGoalRepository:
    """Tests for GoalRepository."""

    def test_add_list_update(self, storage, session) -> None:
        repo = storage.get_goal_repository()
        first = repo.add(
            session,
            Goal(user_id="alice", name="Trip", target_amount=Decimal(1000), created_at=datetime(2026, 1, 1)),
        )
        repo.add(
            session,
            Goal(user_id="alice", name="Car", target_amount=Decimal(5000), created_at=datetime(2026, 2, 1)),
        )

        assert [g.name for g in repo.get_all(session)] == ["Trip", "Car"]

        updated = repo.update(session, first.id, {"current_amount": Decimal(400)})
        assert updated.progress == Decimal(40)
        assert repo.get(session, first.id).current_amount == Decimal(400)
