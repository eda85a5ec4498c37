"""Persistence for transactions and goals."""

from visor.storage.json_store import GoalRepository, JsonStorage, TransactionRepository

__all__ = ["GoalRepository", "JsonStorage", "TransactionRepository"]
