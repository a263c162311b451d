"""
Data Models Package

This package contains all Pydantic models used in Daybook.
All data flowing through the system must conform to these schemas.
"""

from daybook.models.transaction import (
    Transaction,
    TransactionDraft,
    TransactionPatch,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    to_calendar_date,
)
from daybook.models.report import (
    DailyReport,
    DayBucket,
    MonthBucket,
    MonthlyReport,
    Page,
    RankedEntry,
    Summary,
    YearlyReport,
)
from daybook.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "Transaction",
    "TransactionDraft",
    "TransactionPatch",
    "TransactionType",
    "ValidationIssue",
    "ValidationResult",
    "to_calendar_date",
    # Report models
    "DailyReport",
    "DayBucket",
    "MonthBucket",
    "MonthlyReport",
    "Page",
    "RankedEntry",
    "Summary",
    "YearlyReport",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
