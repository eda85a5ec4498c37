"""JSON-file repositories.

Each data file is a JSON array of records. Files are read on every call
and rewritten whole (via a temp file + rename) on mutation, which is
enough for a single local user.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, TypeAdapter, ValidationError

from visor.core.exceptions import RecordNotFoundError, StorageError
from visor.core.models import Goal, Transaction, TransactionCreate, TransactionType
from visor.core.session import Session
from visor.engine.filters import filter_transactions
from visor.engine.periods import to_local_naive

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class JsonFile(Generic[RecordT]):
    """A list of pydantic records persisted as a JSON array."""

    def __init__(self, path: Path, model: type[RecordT]):
        self.path = path
        self.adapter: TypeAdapter[list[RecordT]] = TypeAdapter(list[model])  # type: ignore[valid-type]

    def load(self) -> list[RecordT]:
        if not self.path.exists():
            return []
        try:
            return self.adapter.validate_json(self.path.read_bytes())
        except ValidationError as e:
            raise StorageError(
                f"Invalid data in {self.path} ({e.error_count()} error(s))"
            ) from e
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

    def save(self, records: list[RecordT]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(self.adapter.dump_json(records, indent=2))
            tmp.replace(self.path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e
        logger.debug("Wrote %d record(s) to %s", len(records), self.path)


class _UserRepository(Generic[RecordT]):
    """Records scoped to the session's user."""

    kind = "Record"

    def __init__(self, file: JsonFile[RecordT]):
        self.file = file

    def _owned(self, session: Session) -> list[RecordT]:
        session.require_active()
        return [r for r in self.file.load() if r.user_id == session.user_id]  # type: ignore[attr-defined]

    def get(self, session: Session, record_id: UUID | str) -> RecordT:
        wanted = str(record_id)
        for record in self._owned(session):
            if str(record.id) == wanted:  # type: ignore[attr-defined]
                return record
        raise RecordNotFoundError(self.kind, wanted)

    def add(self, session: Session, record: RecordT) -> RecordT:
        session.require_active()
        record = record.model_copy(update={"user_id": session.user_id})
        records = self.file.load()
        records.append(record)
        self.file.save(records)
        logger.info("Added %s %s", self.kind.lower(), record.id)  # type: ignore[attr-defined]
        return record

    def update(self, session: Session, record_id: UUID | str, changes: dict[str, Any]) -> RecordT:
        """Apply field changes and re-validate the record.

        Raises:
            RecordNotFoundError: If the record does not exist for this user.
            ValidationError: If the changes make the record invalid.
        """
        session.require_active()
        wanted = str(record_id)
        records = self.file.load()
        for i, record in enumerate(records):
            if str(record.id) == wanted and record.user_id == session.user_id:  # type: ignore[attr-defined]
                data = record.model_dump()
                data.update(changes)
                data["id"] = record.id  # type: ignore[attr-defined]
                data["user_id"] = session.user_id
                updated = type(record).model_validate(data)
                records[i] = updated
                self.file.save(records)
                return updated
        raise RecordNotFoundError(self.kind, wanted)

    def delete(self, session: Session, record_id: UUID | str) -> None:
        session.require_active()
        wanted = str(record_id)
        records = self.file.load()
        kept = [
            r for r in records
            if not (str(r.id) == wanted and r.user_id == session.user_id)  # type: ignore[attr-defined]
        ]
        if len(kept) == len(records):
            raise RecordNotFoundError(self.kind, wanted)
        self.file.save(kept)
        logger.info("Deleted %s %s", self.kind.lower(), wanted)

    def count(self, session: Session) -> int:
        return len(self._owned(session))


class TransactionRepository(_UserRepository[Transaction]):
    """Transactions of the session user, newest first."""

    kind = "Transaction"

    def get_all(self, session: Session) -> list[Transaction]:
        return sorted(
            self._owned(session),
            key=lambda tx: to_local_naive(tx.date),
            reverse=True,
        )

    def get_by_type(self, session: Session, type: TransactionType | str) -> list[Transaction]:
        return filter_transactions(self.get_all(session), type=type)

    def get_by_category(self, session: Session, category: str) -> list[Transaction]:
        return filter_transactions(self.get_all(session), category=category)

    def get_by_date_range(self, session: Session, start: date, end: date) -> list[Transaction]:
        """Transactions with start <= date < end."""
        return filter_transactions(self.get_all(session), start=start, end=end)

    def create(self, session: Session, data: TransactionCreate) -> Transaction:
        """Store a new transaction from validated user input."""
        return self.add(session, data.to_transaction(session.user_id))

    def delete_all(self, session: Session) -> int:
        """Delete every transaction of the session user, returning the count."""
        session.require_active()
        records = self.file.load()
        kept = [r for r in records if r.user_id != session.user_id]
        deleted = len(records) - len(kept)
        if deleted:
            self.file.save(kept)
        return deleted


class GoalRepository(_UserRepository[Goal]):
    kind = "Goal"

    def get_all(self, session: Session) -> list[Goal]:
        return sorted(self._owned(session), key=lambda g: g.created_at)


class JsonStorage:
    """Entry point to the repositories of one workspace."""

    def __init__(self, transactions_path: Path, goals_path: Path):
        self.transactions_path = transactions_path
        self.goals_path = goals_path

    def get_transaction_repository(self) -> TransactionRepository:
        return TransactionRepository(JsonFile(self.transactions_path, Transaction))

    def get_goal_repository(self) -> GoalRepository:
        return GoalRepository(JsonFile(self.goals_path, Goal))
