"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the day book in a local JSON file or in Google Sheets
2. Use in-memory storage for testing
3. Feed every backend's rows into the same analytics core
4. Keep business logic decoupled from storage implementation

The interface is intentionally simple - we're not building a full ORM.
Reads by id, by day and by day range; insert, update and delete by id.

Concurrent edits are not coordinated: the last write wins.
"""

from abc import ABC, abstractmethod
from datetime import date
from uuid import UUID

from daybook.models.transaction import (
    Transaction,
    TransactionDraft,
    TransactionPatch,
)


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction storage operations.

    Any storage implementation (local file, Google Sheets, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def fetch_all(self) -> list[Transaction]:
        """
        Return every stored transaction, oldest day first.

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def fetch_by_date(self, day: date) -> list[Transaction]:
        """
        Return the transactions recorded on one calendar day.

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def fetch_by_date_range(
        self,
        start: date,
        end: date,
    ) -> list[Transaction]:
        """
        Return transactions between two days, both inclusive.

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def insert(self, draft: TransactionDraft) -> Transaction:
        """
        Store a new transaction.

        Args:
            draft: Validated form input

        Returns:
            The stored transaction with its assigned id and created_at

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    async def update(
        self,
        transaction_id: UUID,
        patch: TransactionPatch,
    ) -> Transaction:
        """
        Replace name and/or amount of an existing transaction.

        Returns:
            The updated transaction

        Raises:
            NotFoundError: If no transaction has this id
            StorageError: If update fails
        """
        pass

    @abstractmethod
    async def delete(self, transaction_id: UUID) -> None:
        """
        Remove a transaction permanently.

        Raises:
            NotFoundError: If no transaction has this id
            StorageError: If delete fails
        """
        pass


def sort_oldest_first(transactions: list[Transaction]) -> list[Transaction]:
    """Order shared by all backends for fetch results."""
    return sorted(transactions, key=lambda txn: txn.date)


def in_range(transaction: Transaction, start: date, end: date) -> bool:
    return start <= transaction.date <= end


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
