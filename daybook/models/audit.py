"""
Audit Models for Daybook

Every write to the day book, and every report that was built, is
recorded as an audit event. This provides:
1. Traceability of who changed which entry and when
2. Debugging information when storage misbehaves
3. A record of what was exported

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Writes
    TRANSACTION_CREATED = "transaction_created"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    VALIDATION_FAILED = "validation_failed"

    # Reads
    REPORT_GENERATED = "report_generated"
    CSV_EXPORTED = "csv_exported"

    # System events
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """One entry of the day book's audit trail."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="UTC time the event was recorded"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What the event is about: a transaction, a report or nothing in particular
    entity_type: Optional[str] = None
    entity_id: Optional[UUID] = Field(
        default=None,
        description="Transaction id for write events"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="One line shown on the Settings page activity list"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None
    is_user_action: bool = Field(
        default=False,
        description="True for form submissions and exports"
    )

    def to_log_dict(self) -> dict:
        """Flat, JSON-safe keyword arguments for a structlog call."""
        return self.model_dump(mode="json")


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_created(txn_id, name, "income", "120.00")
        event = AuditEventBuilder.storage_error("fetch_all", str(exc))
    """

    @staticmethod
    def transaction_created(
        transaction_id: UUID,
        name: str,
        transaction_type: str,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_CREATED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"{transaction_type.capitalize()} recorded: {name} - {amount}",
            details={
                "name": name,
                "type": transaction_type,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_updated(
        transaction_id: UUID,
        changes: dict[str, str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction edited: {', '.join(sorted(changes)) or 'no changes'}",
            details={"changes": changes},
            is_user_action=True,
        )

    @staticmethod
    def transaction_deleted(transaction_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Transaction deleted",
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        operation: str,
        field_errors: dict[str, str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            description=f"Validation failed on {operation} with {len(field_errors)} errors",
            details={
                "operation": operation,
                "errors": field_errors,
            },
            is_user_action=True,
        )

    @staticmethod
    def report_generated(
        report_type: str,
        period: str,
        transaction_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            severity=AuditSeverity.DEBUG,
            entity_type="report",
            description=f"{report_type.capitalize()} report built for {period}",
            details={
                "report_type": report_type,
                "period": period,
                "transaction_count": transaction_count,
            },
        )

    @staticmethod
    def csv_exported(row_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CSV_EXPORTED,
            entity_type="report",
            description=f"CSV exported with {row_count} rows",
            details={"row_count": row_count},
            is_user_action=True,
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={"operation": operation},
        )
