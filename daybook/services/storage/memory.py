"""
In-Memory Storage

Keeps transactions in a dict keyed by id. Used by the tests and by the
"memory" backend, which is handy for demos: nothing survives a restart.
"""

from datetime import date, datetime
from typing import Iterable, Optional
from uuid import UUID, uuid4

from daybook.models.transaction import (
    Transaction,
    TransactionDraft,
    TransactionPatch,
)
from daybook.services.storage.interface import (
    NotFoundError,
    TransactionStorageInterface,
    in_range,
    sort_oldest_first,
)


class InMemoryTransactionStorage(TransactionStorageInterface):
    """Dict-backed implementation of transaction storage."""

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._rows: dict[UUID, Transaction] = {}
        for txn in transactions or []:
            self._rows[txn.id] = txn

    async def fetch_all(self) -> list[Transaction]:
        return sort_oldest_first(list(self._rows.values()))

    async def fetch_by_date(self, day: date) -> list[Transaction]:
        return sort_oldest_first([txn for txn in self._rows.values() if txn.date == day])

    async def fetch_by_date_range(self, start: date, end: date) -> list[Transaction]:
        return sort_oldest_first(
            [txn for txn in self._rows.values() if in_range(txn, start, end)]
        )

    async def insert(self, draft: TransactionDraft) -> Transaction:
        txn = Transaction(
            **draft.model_dump(),
            id=uuid4(),
            created_at=datetime.utcnow(),
        )
        self._rows[txn.id] = txn
        return txn

    async def update(self, transaction_id: UUID, patch: TransactionPatch) -> Transaction:
        existing = self._rows.get(transaction_id)
        if existing is None:
            raise NotFoundError(f"Transaction not found: {transaction_id}")
        updated = patch.apply(existing)
        self._rows[transaction_id] = updated
        return updated

    async def delete(self, transaction_id: UUID) -> None:
        if self._rows.pop(transaction_id, None) is None:
            raise NotFoundError(f"Transaction not found: {transaction_id}")
