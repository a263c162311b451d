"""
Main Orchestrator for Daybook

This module ties together all the components and defines the
end-to-end flows behind each page:
1. Record / edit / delete (form -> validate -> store -> audit)
2. Daily, monthly and yearly reports (fetch -> analytics core)
3. Admin table and CSV export (fetch -> filter -> sort -> page / serialize)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is written without passing validation
- The analytics core only ever sees an already fetched list
- Reads degrade to an empty view when storage fails; writes re-raise
- Every write is audited

The storage call is the only awaited step. There are no retries here;
a failed request fails the whole operation.
"""

import datetime as dt
from typing import Any, Awaitable, Optional
from uuid import UUID

import structlog

from daybook.analytics import (
    build_daily_report,
    build_monthly_report,
    build_yearly_report,
    filter_by_range,
    paginate,
    sort_by_date_desc,
    to_csv,
)
from daybook.audit import AuditLogger, configure_logging
from daybook.config import AppSettings, get_settings
from daybook.models.report import (
    DailyReport,
    MonthlyReport,
    Page,
    Summary,
    YearlyReport,
)
from daybook.models.transaction import (
    Transaction,
    TransactionDraft,
    TransactionPatch,
    TransactionType,
)
from daybook.services.storage import (
    GoogleSheetsClient,
    GoogleSheetsTransactionStorage,
    InMemoryTransactionStorage,
    LocalFileTransactionStorage,
    NotFoundError,
    StorageError,
    TransactionStorageInterface,
)
from daybook.validation import TransactionValidationError, TransactionValidator
from daybook.validation.validator import parse_amount


logger = structlog.get_logger(__name__)


# Sample entries for a fresh day book: (days ago, name, amount, type)
DEMO_ENTRIES = [
    (0, "Rofik", "120", TransactionType.INCOME),
    (0, "Online Sale", "350", TransactionType.INCOME),
    (0, "Store Sales", "380", TransactionType.INCOME),
    (0, "Rent", "250", TransactionType.EXPENSE),
    (0, "Electricity", "100", TransactionType.EXPENSE),
    (1, "Karim", "280", TransactionType.INCOME),
    (1, "Transportation", "100", TransactionType.EXPENSE),
    (2, "Online Sale", "620", TransactionType.INCOME),
    (2, "Supplies", "150", TransactionType.EXPENSE),
    (2, "Employee Meal", "200", TransactionType.EXPENSE),
]


class BookkeepingService:
    """
    Orchestrates every user-facing operation of the day book.

    The service holds no transaction state of its own: each call fetches
    what it needs from storage and hands it to the analytics core.
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        validator: Optional[TransactionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._settings = settings or get_settings().app
        self._storage = storage
        self._validator = validator or TransactionValidator(
            max_amount_warning=self._settings.max_amount_warning
        )
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def storage(self) -> TransactionStorageInterface:
        return self._storage

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def record_transaction(
        self,
        name: Any,
        amount: Any,
        transaction_type: Any,
        on_date: Optional[dt.date] = None,
    ) -> Transaction:
        """
        Validate and store a new income or expense entry.

        Raises:
            TransactionValidationError: If the form input is invalid
            StorageError: If the entry could not be saved
        """
        result = self._validator.validate_draft(name, amount, transaction_type, on_date)
        if result.has_errors:
            self._audit_logger.log_validation_failed("create", result.field_errors)
            raise TransactionValidationError(result)

        draft = TransactionDraft(
            name=name,
            amount=parse_amount(amount),
            type=TransactionType(transaction_type),
            date=on_date or dt.date.today(),
        )

        try:
            txn = await self._storage.insert(draft)
        except StorageError as e:
            self._audit_logger.log_storage_error("insert", str(e))
            raise

        self._audit_logger.log_transaction_created(
            transaction_id=txn.id,
            name=txn.name,
            transaction_type=txn.type.value,
            amount=str(txn.amount),
        )
        return txn

    async def edit_transaction(
        self,
        transaction_id: UUID,
        name: Any = None,
        amount: Any = None,
    ) -> Transaction:
        """
        Replace the name and/or amount of an entry. Its id and date stay.

        Raises:
            TransactionValidationError: If the new values are invalid
            NotFoundError: If the transaction does not exist
            StorageError: If the update could not be saved
        """
        result = self._validator.validate_patch(name=name, amount=amount)
        if result.has_errors:
            self._audit_logger.log_validation_failed("edit", result.field_errors)
            raise TransactionValidationError(result)

        patch = TransactionPatch(
            name=name,
            amount=parse_amount(amount) if amount is not None else None,
        )

        try:
            txn = await self._storage.update(transaction_id, patch)
        except NotFoundError:
            raise
        except StorageError as e:
            self._audit_logger.log_storage_error(
                "update", str(e), {"transaction_id": str(transaction_id)}
            )
            raise

        changes = {key: str(value) for key, value in patch.model_dump(exclude_none=True).items()}
        self._audit_logger.log_transaction_updated(txn.id, changes)
        return txn

    async def delete_transaction(self, transaction_id: UUID) -> None:
        """
        Remove an entry permanently.

        Raises:
            NotFoundError: If the transaction does not exist
            StorageError: If the delete failed
        """
        try:
            await self._storage.delete(transaction_id)
        except NotFoundError:
            raise
        except StorageError as e:
            self._audit_logger.log_storage_error(
                "delete", str(e), {"transaction_id": str(transaction_id)}
            )
            raise

        self._audit_logger.log_transaction_deleted(transaction_id)

    async def seed_demo_data(self, today: Optional[dt.date] = None) -> list[Transaction]:
        """Fill an empty day book with a few days of sample entries."""
        today = today or dt.date.today()
        created = []
        for days_ago, name, amount, transaction_type in DEMO_ENTRIES:
            created.append(await self.record_transaction(
                name=name,
                amount=amount,
                transaction_type=transaction_type,
                on_date=today - dt.timedelta(days=days_ago),
            ))
        logger.info("demo_data_seeded", count=len(created))
        return created

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def _fetch(
        self,
        operation: str,
        fetch: Awaitable[list[Transaction]],
    ) -> Optional[list[Transaction]]:
        """
        Await a storage read. On failure log it and return None so the
        caller can render an empty view instead of an error page.
        """
        try:
            return await fetch
        except StorageError as e:
            logger.error("storage_read_failed", operation=operation, error=str(e))
            self._audit_logger.log_storage_error(operation, str(e))
            return None

    async def daily_report(self, day: Optional[dt.date] = None) -> DailyReport:
        """Summary and entries of one day (today by default)."""
        day = day or dt.date.today()
        transactions = await self._fetch("fetch_by_date", self._storage.fetch_by_date(day))
        if transactions is None:
            return DailyReport(date=day, summary=Summary())

        report = build_daily_report(transactions, day)
        self._audit_logger.log_report_generated("daily", day.isoformat(), len(transactions))
        return report

    async def monthly_report(self, month: int, year: int) -> MonthlyReport:
        """
        Month detail report.

        Raises:
            ValueError: If month is not in 1..12
        """
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")

        transactions = await self._fetch("fetch_all", self._storage.fetch_all())
        if transactions is None:
            transactions = []

        report = build_monthly_report(
            transactions,
            month,
            year,
            top_income_count=self._settings.top_income_count,
            top_expense_count=self._settings.top_expense_count,
        )
        self._audit_logger.log_report_generated(
            "monthly", f"{year:04d}-{month:02d}", len(transactions)
        )
        return report

    async def yearly_report(self, year: Optional[int] = None) -> YearlyReport:
        """Year overview for the admin dashboard (current year by default)."""
        year = year or dt.date.today().year
        transactions = await self._fetch("fetch_all", self._storage.fetch_all())
        if transactions is None:
            transactions = []

        report = build_yearly_report(transactions, year)
        self._audit_logger.log_report_generated("yearly", str(year), len(transactions))
        return report

    async def _filtered_sorted(
        self,
        start: Optional[dt.date],
        end: Optional[dt.date],
    ) -> list[Transaction]:
        transactions = await self._fetch("fetch_all", self._storage.fetch_all())
        if transactions is None:
            return []
        return sort_by_date_desc(filter_by_range(transactions, start, end))

    async def admin_table(
        self,
        start: Optional[dt.date] = None,
        end: Optional[dt.date] = None,
        page_number: int = 1,
    ) -> Page:
        """One page of the newest-first, optionally date-filtered table."""
        rows = await self._filtered_sorted(start, end)
        return paginate(rows, self._settings.page_size, page_number)

    async def export_csv(
        self,
        start: Optional[dt.date] = None,
        end: Optional[dt.date] = None,
    ) -> str:
        """CSV of every row the admin table currently shows, across all pages."""
        rows = await self._filtered_sorted(start, end)
        self._audit_logger.log_csv_exported(len(rows))
        return to_csv(rows)


def create_storage(
    backend: str,
    fallback_path: Optional[str] = None,
) -> TransactionStorageInterface:
    """
    Build the storage backend by name.

    A Google Sheets backend that cannot be configured or opened falls back to the
    local file, so the app still starts.
    """
    settings = get_settings()
    local_path = fallback_path or settings.local_storage.path

    if backend == "memory":
        return InMemoryTransactionStorage()

    if backend == "google_sheets":
        try:
            client = GoogleSheetsClient()
            # Open the worksheet now so bad credentials surface here
            client.get_transactions_sheet()
            return GoogleSheetsTransactionStorage(client)
        except Exception as e:
            # Storage not configured or unreachable - continue with the local file
            logger.warning("google_sheets_unavailable", error=str(e), fallback=local_path)

    return LocalFileTransactionStorage(local_path)


def create_app_components(
    backend: Optional[str] = None,
) -> BookkeepingService:
    """
    Factory function to create the application service.

    Args:
        backend: Storage backend name. Defaults to the configured one.

    Returns:
        A ready BookkeepingService
    """
    app_settings = get_settings().app
    configure_logging(app_settings.log_level)

    storage = create_storage(backend or app_settings.storage_backend)
    logger.info("daybook_started", storage=type(storage).__name__)

    return BookkeepingService(
        storage=storage,
        audit_logger=AuditLogger(),
        settings=app_settings,
    )
