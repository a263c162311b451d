"""
Form Input Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - FIELD VALIDATION:
- Name present and not too long
- Amount is a number, positive, at most two decimals
- Type is income or expense
- These are errors and block the write

STAGE 2 - SANITY CHECKS:
- Unusually large amount
- Date in the future
- These are warnings; the entry is saved but the UI asks to double check

The pydantic models enforce `amount >= 0` for anything already stored.
Create and edit forms are stricter: a zero amount is rejected here.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them as field -> message for the form to show.
"""

from datetime import date
from decimal import Context, Decimal, InvalidOperation
from typing import Any, Optional

from daybook.analytics.aggregator import CENTS
from daybook.config import get_settings
from daybook.models.transaction import (
    TransactionType,
    ValidationIssue,
    ValidationResult,
)


MAX_NAME_LENGTH = 200


class TransactionValidationError(Exception):
    """Form input was rejected. Carries the full validation result."""

    def __init__(self, result: ValidationResult):
        self.result = result
        errors = "; ".join(f"{field}: {msg}" for field, msg in result.field_errors.items())
        super().__init__(f"Invalid transaction: {errors}")

    @property
    def field_errors(self) -> dict[str, str]:
        return self.result.field_errors


def parse_amount(value: Any) -> Optional[Decimal]:
    """Turn form input into a Decimal, or None if it isn't a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    if amount.as_tuple().exponent < -2 and amount.normalize().as_tuple().exponent >= -2:
        # Trailing zeros only, e.g. "120.500"; dropping them never needs more digits
        precision = Context(prec=len(amount.as_tuple().digits))
        amount = amount.quantize(CENTS, context=precision)
    return amount


class TransactionValidator:
    """
    Validates create and edit input before it reaches storage.
    """

    def __init__(self, max_amount_warning: Optional[float] = None):
        if max_amount_warning is None:
            max_amount_warning = get_settings().app.max_amount_warning
        self._max_amount = Decimal(str(max_amount_warning))

    def _validate_name(self, name: Any) -> list[ValidationIssue]:
        issues = []
        text = name.strip() if isinstance(name, str) else ""
        if not text:
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Name must not be empty",
                severity="error",
            ))
        elif len(text) > MAX_NAME_LENGTH:
            issues.append(ValidationIssue(
                field="name",
                issue_type="too_long",
                message=f"Name must be at most {MAX_NAME_LENGTH} characters",
                severity="error",
            ))
        return issues

    def _validate_amount(self, amount: Any) -> list[ValidationIssue]:
        parsed = parse_amount(amount)
        if parsed is None:
            return [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message="Amount must be a number",
                severity="error",
            )]

        issues = []
        if parsed <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
            ))
        elif parsed.as_tuple().exponent < -2:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount can have at most two decimal places",
                severity="error",
            ))
        elif parsed > self._max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({parsed:,.2f}) seems unusually high",
                severity="warning",
            ))
        return issues

    def _validate_type(self, transaction_type: Any) -> list[ValidationIssue]:
        try:
            TransactionType(transaction_type)
        except ValueError:
            return [ValidationIssue(
                field="type",
                issue_type="invalid_value",
                message="Type must be either 'income' or 'expense'",
                severity="error",
            )]
        return []

    def _check_date(self, on_date: Optional[date]) -> list[ValidationIssue]:
        if on_date is not None and on_date > date.today():
            return [ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({on_date}) is in the future",
                severity="warning",
            )]
        return []

    def validate_draft(
        self,
        name: Any,
        amount: Any,
        transaction_type: Any,
        on_date: Optional[date] = None,
    ) -> ValidationResult:
        """Validate a new income or expense entry."""
        issues = []
        issues.extend(self._validate_name(name))
        issues.extend(self._validate_amount(amount))
        issues.extend(self._validate_type(transaction_type))
        issues.extend(self._check_date(on_date))
        return ValidationResult(issues=issues)

    def validate_patch(
        self,
        name: Any = None,
        amount: Any = None,
    ) -> ValidationResult:
        """
        Validate an edit. Only the fields being changed are checked;
        a patch that changes nothing is valid.
        """
        issues = []
        if name is not None:
            issues.extend(self._validate_name(name))
        if amount is not None:
            issues.extend(self._validate_amount(amount))
        return ValidationResult(issues=issues)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short text for the form's error box."""
        if result.is_valid and not result.warnings:
            return "✅ Looks good."

        lines = []
        if result.has_errors:
            lines.append("❌ Please fix the following:")
            for field, message in result.field_errors.items():
                lines.append(f"   • {field}: {message}")

        if result.warnings:
            lines.append("⚠️ Please double check:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
