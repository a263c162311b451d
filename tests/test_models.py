"""
Tests for Daybook models

Test strategy:
1. Unit tests for individual components (models, analytics, validators)
2. Integration tests for flows (with in-memory or faked storage)
3. No real API calls in tests (use fakes)
"""

import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from daybook.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    Page,
    Summary,
    Transaction,
    TransactionDraft,
    TransactionPatch,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)
from daybook.models.transaction import to_calendar_date


class TestTransactionModels:
    """Tests for transaction-related Pydantic models."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        txn = Transaction(
            name="Rofik",
            amount=Decimal("120.00"),
            type=TransactionType.INCOME,
            date=date(2024, 3, 1),
        )
        assert txn.name == "Rofik"
        assert txn.amount == Decimal("120.00")
        assert txn.is_income
        assert not txn.is_expense
        assert txn.id is not None

    def test_name_strips_whitespace(self):
        """Test that whitespace is stripped from the name."""
        txn = Transaction(name="  Rent  ", amount=Decimal("10"), type="expense")
        assert txn.name == "Rent"

    def test_date_defaults_to_today(self):
        txn = TransactionDraft(name="Rent", amount=Decimal("10"), type="expense")
        assert txn.date == date.today()

    def test_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValueError):
            Transaction(name="Test", amount=Decimal("-1"), type="income")

    def test_rejects_nan_amount(self):
        """A NaN amount never reaches the aggregation code."""
        with pytest.raises(ValueError):
            Transaction(name="Test", amount=Decimal("NaN"), type="income")

    def test_rejects_more_than_two_decimals(self):
        with pytest.raises(ValueError):
            Transaction(name="Test", amount=Decimal("1.005"), type="income")

    def test_allows_zero_amount(self):
        """Stored rows may carry zero; only the forms reject it."""
        txn = Transaction(name="Free sample", amount=Decimal("0"), type="income")
        assert txn.amount == 0

    def test_rejects_empty_name(self):
        with pytest.raises(ValueError):
            Transaction(name="   ", amount=Decimal("1"), type="income")

    def test_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            Transaction(name="Test", amount=Decimal("1"), type="transfer")

    def test_datetime_is_reduced_to_date(self):
        """Test that a timestamp only contributes its calendar day."""
        txn = Transaction(
            name="Test",
            amount=Decimal("1"),
            type="income",
            date=datetime(2024, 3, 1, 23, 59),
        )
        assert txn.date == date(2024, 3, 1)

    def test_iso_timestamp_string_is_reduced_to_date(self):
        txn = Transaction(
            name="Test",
            amount=Decimal("1"),
            type="income",
            date="2024-03-01T10:30:00",
        )
        assert txn.date == date(2024, 3, 1)

    def test_plain_date_string_is_accepted(self):
        txn = Transaction(name="Test", amount=Decimal("1"), type="income", date="2024-03-01")
        assert txn.date == date(2024, 3, 1)

    def test_aware_datetime_uses_local_day(self):
        moment = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        assert to_calendar_date(moment) == moment.astimezone().date()

    def test_type_label(self):
        assert TransactionType.INCOME.label == "Income"
        assert TransactionType.EXPENSE.label == "Expense"


class TestTransactionPatch:
    """Tests for partial updates."""

    def test_apply_replaces_only_given_fields(self):
        original = Transaction(
            name="Rent",
            amount=Decimal("250"),
            type="expense",
            date=date(2024, 3, 1),
        )
        updated = TransactionPatch(amount=Decimal("275")).apply(original)

        assert updated.amount == Decimal("275")
        assert updated.name == "Rent"
        assert updated.id == original.id
        assert updated.date == original.date
        assert updated.type == original.type

    def test_apply_does_not_mutate_original(self):
        original = Transaction(name="Rent", amount=Decimal("250"), type="expense")
        TransactionPatch(name="Shop rent").apply(original)
        assert original.name == "Rent"

    def test_empty_patch_is_identity(self):
        original = Transaction(name="Rent", amount=Decimal("250"), type="expense")
        assert TransactionPatch().apply(original) == original


class TestValidationModels:
    """Tests for validation result models."""

    def test_validation_result_no_errors(self):
        """Test ValidationResult with no errors."""
        result = ValidationResult(issues=[])
        assert result.is_valid
        assert not result.has_errors
        assert result.error_count == 0

    def test_validation_result_with_errors(self):
        """Test ValidationResult with errors."""
        result = ValidationResult(
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="invalid_format",
                    message="Amount must be a number",
                    severity="error",
                ),
                ValidationIssue(
                    field="date",
                    issue_type="future_date",
                    message="Date is in the future",
                    severity="warning",
                ),
            ]
        )
        assert result.has_errors
        assert result.error_count == 1
        assert result.warnings == ["Date is in the future"]
        assert result.field_errors == {"amount": "Amount must be a number"}

    def test_field_errors_first_message_wins(self):
        result = ValidationResult(
            issues=[
                ValidationIssue(field="name", issue_type="a", message="first", severity="error"),
                ValidationIssue(field="name", issue_type="b", message="second", severity="error"),
            ]
        )
        assert result.field_errors == {"name": "first"}

    def test_rejects_unknown_severity(self):
        with pytest.raises(ValueError):
            ValidationIssue(field="name", issue_type="x", message="x", severity="fatal")


class TestReportModels:
    """Tests for report result shapes."""

    def test_summary_defaults_to_zero(self):
        summary = Summary()
        assert summary.income == 0
        assert summary.expense == 0
        assert summary.profit == 0
        assert summary.is_empty

    def test_page_navigation_flags(self):
        page = Page(items=[], page_number=2, page_size=10, total_items=25, total_pages=3)
        assert page.has_previous
        assert page.has_next

    def test_page_rejects_zero_total_pages(self):
        with pytest.raises(ValueError):
            Page(items=[], page_number=1, page_size=10, total_items=0, total_pages=0)


class TestAuditModels:
    """Tests for audit models."""

    def test_audit_event_creation(self):
        """Test AuditEvent creation."""
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_CREATED,
            description="Test event",
        )
        assert event.event_type == AuditEventType.TRANSACTION_CREATED
        assert event.severity == AuditSeverity.INFO
        assert event.event_id is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            description="Test",
            details={"key": "value"},
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "transaction_deleted"
        assert log_dict["details"] == {"key": "value"}

    def test_audit_event_builder_transaction_created(self):
        """Test AuditEventBuilder.transaction_created."""
        txn_id = uuid4()
        event = AuditEventBuilder.transaction_created(
            transaction_id=txn_id,
            name="Rofik",
            transaction_type="income",
            amount="120",
        )
        assert event.event_type == AuditEventType.TRANSACTION_CREATED
        assert event.entity_id == txn_id
        assert event.is_user_action
        assert "Rofik" in event.description

    def test_audit_event_builder_storage_error(self):
        event = AuditEventBuilder.storage_error("fetch_all", "sheet unavailable")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "sheet unavailable"
        assert event.details["operation"] == "fetch_all"

    def test_report_generated_is_debug(self):
        event = AuditEventBuilder.report_generated("monthly", "2024-03", 6)
        assert event.severity == AuditSeverity.DEBUG
        assert event.details["transaction_count"] == 6

    def test_timestamp_is_recent(self):
        event = AuditEventBuilder.csv_exported(3)
        assert datetime.utcnow() - event.timestamp < timedelta(minutes=1)
