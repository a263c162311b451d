"""Validation package."""

from daybook.validation.validator import (
    TransactionValidationError,
    TransactionValidator,
    parse_amount,
)

__all__ = ["TransactionValidationError", "TransactionValidator", "parse_amount"]
