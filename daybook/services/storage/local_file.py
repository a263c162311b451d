"""
Local JSON File Storage

DESIGN DECISION: The single-user variant of Daybook keeps its entries in
one JSON file on disk instead of a database. The whole list is read on
every call and written back on every change; a day book holds a few
thousand rows at most, so this stays fast.

The file is owned by this object alone - there is no module-level
cache or singleton. Two processes writing the same file will overwrite
each other (last write wins).

TRADEOFFS:
- No partial writes: the file is replaced atomically via a temp file
- Malformed rows are skipped on read (and logged), not fatal
- Writes work on the raw rows, so a malformed row is carried through
  untouched until someone fixes it by hand
"""

import json
import os
import tempfile
from datetime import date, datetime
from pathlib import Path
from typing import Optional, Union
from uuid import UUID, uuid4

import structlog
from pydantic import ValidationError

from daybook.models.transaction import (
    Transaction,
    TransactionDraft,
    TransactionPatch,
)
from daybook.services.storage.interface import (
    NotFoundError,
    StorageError,
    TransactionStorageInterface,
    in_range,
    sort_oldest_first,
)


logger = structlog.get_logger(__name__)


class LocalFileTransactionStorage(TransactionStorageInterface):
    """
    JSON file implementation of transaction storage.

    The file holds a JSON array of transaction objects.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load_rows(self) -> list:
        """The file's JSON array as-is, unvalidated."""
        if not self._path.exists():
            return []

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8") or "[]")
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {self._path}: {e}")

        if not isinstance(raw, list):
            raise StorageError(f"Expected a JSON array in {self._path}")
        return raw

    def _read(self) -> list[Transaction]:
        transactions = []
        for index, row in enumerate(self._load_rows()):
            try:
                transactions.append(Transaction.model_validate(row))
            except ValidationError as e:
                logger.warning(
                    "skipping_malformed_row",
                    path=str(self._path),
                    row_index=index,
                    error_count=e.error_count(),
                )
        return transactions

    def _write(self, rows: list) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=".daybook-", suffix=".json"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(rows, fh, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            finally:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}")

    def _find(self, rows: list, transaction_id: UUID) -> Optional[int]:
        """Index of the raw row carrying this id, matched on the `id` field only."""
        target = str(transaction_id)
        for index, row in enumerate(rows):
            if isinstance(row, dict) and str(row.get("id", "")).lower() == target:
                return index
        return None

    async def fetch_all(self) -> list[Transaction]:
        return sort_oldest_first(self._read())

    async def fetch_by_date(self, day: date) -> list[Transaction]:
        return sort_oldest_first([txn for txn in self._read() if txn.date == day])

    async def fetch_by_date_range(self, start: date, end: date) -> list[Transaction]:
        return sort_oldest_first([txn for txn in self._read() if in_range(txn, start, end)])

    async def insert(self, draft: TransactionDraft) -> Transaction:
        rows = self._load_rows()
        txn = Transaction(
            **draft.model_dump(),
            id=uuid4(),
            created_at=datetime.utcnow(),
        )
        rows.append(txn.model_dump(mode="json"))
        self._write(rows)
        return txn

    async def update(self, transaction_id: UUID, patch: TransactionPatch) -> Transaction:
        rows = self._load_rows()
        index = self._find(rows, transaction_id)
        if index is None:
            raise NotFoundError(f"Transaction not found: {transaction_id}")

        try:
            current = Transaction.model_validate(rows[index])
        except ValidationError as e:
            raise StorageError(f"Stored row {transaction_id} is malformed: {e}")

        updated = patch.apply(current)
        rows[index] = updated.model_dump(mode="json")
        self._write(rows)
        return updated

    async def delete(self, transaction_id: UUID) -> None:
        rows = self._load_rows()
        index = self._find(rows, transaction_id)
        if index is None:
            raise NotFoundError(f"Transaction not found: {transaction_id}")

        del rows[index]
        self._write(rows)
