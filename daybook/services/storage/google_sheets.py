"""
Google Sheets Storage

DESIGN DECISION: the shared backend is a single worksheet, one
transaction per row, header in row 1. The shop owner can open the day
book in Sheets and read or fix it by hand.

TRADEOFFS:
- Every read downloads the whole sheet and filters in Python
- Edits locate the row by id first, so two edits racing on the same
  sheet can land on a shifted row after a concurrent delete
- Hand-edited rows that no longer parse are skipped, not fatal
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import gspread
import structlog
from google.oauth2.service_account import Credentials
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from daybook.config import GoogleSheetsSettings, get_settings
from daybook.models.transaction import (
    Transaction,
    TransactionDraft,
    TransactionPatch,
    TransactionType,
)
from daybook.services.storage.interface import (
    ConnectionError,
    NotFoundError,
    StorageError,
    TransactionStorageInterface,
    in_range,
    sort_oldest_first,
)


logger = structlog.get_logger(__name__)


# Column mappings for Transactions sheet
TRANSACTION_COLUMNS = [
    "id",
    "date",
    "name",
    "type",
    "amount",
    "created_at",
    "user_id",
]

NAME_COLUMN = TRANSACTION_COLUMNS.index("name") + 1
AMOUNT_COLUMN = TRANSACTION_COLUMNS.index("amount") + 1


# Errors worth another attempt: API hiccups (quota, 5xx) and network failures
TRANSIENT_ERRORS = (gspread.exceptions.APIError, OSError)

retry_transient = retry(
    retry=retry_if_exception_type(TRANSIENT_ERRORS),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    reraise=True,
)


class GoogleSheetsClient:
    """
    Opens the configured spreadsheet with a service account.

    Network calls are retried with exponential backoff on transient
    errors; configuration errors fail at once.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    def connect(self) -> gspread.Client:
        """
        Authorize once and reuse the gspread client.

        Raises ConnectionError when the credentials are missing or rejected.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise ConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    @retry_transient
    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """The spreadsheet named by GOOGLE_SHEETS_SPREADSHEET_ID."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def get_transactions_sheet(self) -> gspread.Worksheet:
        """Get or create the Transactions worksheet."""
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(self._settings.transactions_sheet_name)
        except gspread.WorksheetNotFound:
            # First run: create it with the column header row
            sheet = spreadsheet.add_worksheet(
                title=self._settings.transactions_sheet_name,
                rows=1000,
                cols=len(TRANSACTION_COLUMNS),
            )
            sheet.append_row(TRANSACTION_COLUMNS)
        return sheet


class GoogleSheetsTransactionStorage(TransactionStorageInterface):
    """
    Google Sheets implementation of transaction storage.

    Transactions are stored as rows in a worksheet, one transaction per row.
    Row 1 is the header.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _transaction_to_row(self, txn: Transaction) -> list:
        """Convert a Transaction to a spreadsheet row."""
        return [
            str(txn.id),
            txn.date.isoformat(),
            txn.name,
            txn.type.value,
            str(txn.amount),
            txn.created_at.isoformat() if txn.created_at else "",
            str(txn.user_id) if txn.user_id is not None else "",
        ]

    def _row_to_transaction(self, row: list) -> Transaction:
        """Convert a spreadsheet row to a Transaction."""
        # Trailing empty cells are not returned by the API
        def safe_get(index: int, default: str = "") -> str:
            try:
                return row[index] if row[index] else default
            except IndexError:
                return default

        return Transaction(
            id=UUID(safe_get(0)),
            date=safe_get(1),
            name=safe_get(2),
            type=TransactionType(safe_get(3)),
            amount=Decimal(safe_get(4)),
            created_at=datetime.fromisoformat(safe_get(5)) if safe_get(5) else None,
            user_id=int(safe_get(6)) if safe_get(6) else None,
        )

    def _load(self) -> list[Transaction]:
        """Read every data row, skipping blank and malformed ones."""
        try:
            sheet = self._client.get_transactions_sheet()
            all_rows = sheet.get_all_values()[1:]  # Skip header
        except Exception as e:
            raise StorageError(f"Failed to read transactions: {e}")

        transactions = []
        for row in all_rows:
            if not row or not row[0]:  # Skip empty rows
                continue
            try:
                transactions.append(self._row_to_transaction(row))
            except Exception as e:
                logger.warning("skipping_malformed_row", row_id=row[0], error=str(e))
        return transactions

    def _find_row_index(self, sheet: gspread.Worksheet, transaction_id: UUID) -> Optional[int]:
        """1-based sheet row number of a transaction, or None."""
        all_rows = sheet.get_all_values()
        for idx, row in enumerate(all_rows[1:], start=2):  # Start from 2 (row 1 is header)
            if row and row[0] == str(transaction_id):
                return idx
        return None

    async def fetch_all(self) -> list[Transaction]:
        return sort_oldest_first(self._load())

    async def fetch_by_date(self, day: date) -> list[Transaction]:
        return sort_oldest_first([txn for txn in self._load() if txn.date == day])

    async def fetch_by_date_range(self, start: date, end: date) -> list[Transaction]:
        return sort_oldest_first([txn for txn in self._load() if in_range(txn, start, end)])

    @retry_transient
    def _append(self, txn: Transaction) -> None:
        """
        Append one row. A retry first looks for the id, because a timed-out
        attempt may still have reached the sheet.
        """
        sheet = self._client.get_transactions_sheet()
        if self._find_row_index(sheet, txn.id) is not None:
            return
        sheet.append_row(self._transaction_to_row(txn), value_input_option="RAW")

    async def insert(self, draft: TransactionDraft) -> Transaction:
        """Append a new transaction row."""
        txn = Transaction(
            **draft.model_dump(),
            id=uuid4(),
            created_at=datetime.utcnow(),
        )
        try:
            self._append(txn)
        except Exception as e:
            raise StorageError(f"Failed to save transaction: {e}")
        return txn

    async def update(self, transaction_id: UUID, patch: TransactionPatch) -> Transaction:
        """Rewrite the name/amount cells of an existing row."""
        try:
            sheet = self._client.get_transactions_sheet()
            idx = self._find_row_index(sheet, transaction_id)
            if idx is None:
                raise NotFoundError(f"Transaction not found: {transaction_id}")

            current = self._row_to_transaction(sheet.row_values(idx))
            updated = patch.apply(current)
            if patch.name is not None:
                sheet.update_cell(idx, NAME_COLUMN, updated.name)
            if patch.amount is not None:
                sheet.update_cell(idx, AMOUNT_COLUMN, str(updated.amount))
            return updated
        except NotFoundError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to update transaction: {e}")

    async def delete(self, transaction_id: UUID) -> None:
        """Delete the row holding a transaction."""
        try:
            sheet = self._client.get_transactions_sheet()
            idx = self._find_row_index(sheet, transaction_id)
            if idx is None:
                raise NotFoundError(f"Transaction not found: {transaction_id}")
            sheet.delete_rows(idx)
        except NotFoundError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to delete transaction: {e}")
