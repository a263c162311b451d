"""
Core Data Models for Daybook

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Be serializable for storage and logging

DESIGN DECISION: Transactions are validated here, at the storage boundary.
The aggregation code downstream assumes every amount is a real,
non-negative number and never re-checks it.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """
    Kind of a transaction.

    Exactly two kinds exist. Money either came in or went out.
    """
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def to_calendar_date(value: Any) -> Any:
    """
    Reduce a timestamp to the calendar day it falls on.

    Stored rows may carry a time component; only the day matters for
    bookkeeping. Aware datetimes are converted to local time first so that
    a late-evening entry is not pushed onto the next day.
    """
    if isinstance(value, str):
        text = value.strip()
        if "T" in text or " " in text:
            value = dt.datetime.fromisoformat(text)
        else:
            return text
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


# =============================================================================
# TRANSACTION MODELS
# =============================================================================

class TransactionDraft(BaseModel):
    """
    A transaction as entered on the income or expense form.

    Has no identity yet - the storage backend assigns one on insert.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Income source or expense purpose"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Amount in the configured currency"
    )
    type: TransactionType = Field(
        ...,
        description="Income or expense"
    )
    date: dt.date = Field(
        default_factory=dt.date.today,
        description="Day the transaction belongs to"
    )

    @field_validator('date', mode='before')
    @classmethod
    def strip_time_of_day(cls, v: Any) -> Any:
        return to_calendar_date(v)


class Transaction(TransactionDraft):
    """
    A stored transaction.

    `id` is immutable once assigned. An edit replaces name and amount;
    id, type and date are retained.
    """

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction ID"
    )
    created_at: Optional[dt.datetime] = Field(
        default=None,
        description="When the entry was made (display only)"
    )
    user_id: Optional[int] = Field(
        default=None,
        description="Owning user, ignored by reporting"
    )

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


class TransactionPatch(BaseModel):
    """Partial update for an existing transaction."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=200,
    )
    amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        decimal_places=2,
    )

    def apply(self, transaction: Transaction) -> Transaction:
        """Return a copy of `transaction` with the patched fields replaced."""
        changes = self.model_dump(exclude_none=True)
        return transaction.model_copy(update=changes)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating form input for a create or an edit.

    Errors block the write. Warnings are shown but don't block.
    """

    validated_at: dt.datetime = Field(
        default_factory=dt.datetime.utcnow
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    @property
    def field_errors(self) -> dict[str, str]:
        """
        Map of field -> message for error-level issues.

        When a field has several errors the first one wins.
        """
        errors: dict[str, str] = {}
        for issue in self.issues:
            if issue.severity == "error" and issue.field not in errors:
                errors[issue.field] = issue.message
        return errors
