"""
Audit Logger

DESIGN DECISION: Every write to the day book is logged.
This provides:
1. Complete traceability
2. Debugging capability when storage misbehaves
3. A history of edits and deletions, which the day book itself does not keep

The audit logger:
- Writes structured JSON lines through structlog
- Never raises - a logging failure must not lose a user's entry
"""

import logging
from typing import Optional
from uuid import UUID

import structlog

from daybook.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


_STDLIB_LEVELS = {
    AuditSeverity.DEBUG: logging.DEBUG,
    AuditSeverity.INFO: logging.INFO,
    AuditSeverity.WARNING: logging.WARNING,
    AuditSeverity.ERROR: logging.ERROR,
    AuditSeverity.CRITICAL: logging.CRITICAL,
}


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure structlog (and the stdlib root logger it writes through).

    Safe to call more than once; the last call wins.
    """
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog for local logging
configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Keeps the last events in memory as well, so the Settings page can
    show recent activity without reading log files.
    """

    def __init__(self, history_size: int = 100):
        self._logger = structlog.get_logger("daybook.audit")
        self._history_size = history_size
        self._history: list[AuditEvent] = []

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Most recent events, newest first."""
        return list(reversed(self._history))

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at its own severity."""
        self._history.append(event)
        if len(self._history) > self._history_size:
            del self._history[0]

        try:
            self._logger.log(_STDLIB_LEVELS[event.severity], "audit_event", **event.to_log_dict())
        except Exception as e:
            logging.getLogger(__name__).error("audit logging failed: %s", e)

    def log_transaction_created(
        self,
        transaction_id: UUID,
        name: str,
        transaction_type: str,
        amount: str,
    ) -> None:
        self.log(AuditEventBuilder.transaction_created(
            transaction_id=transaction_id,
            name=name,
            transaction_type=transaction_type,
            amount=amount,
        ))

    def log_transaction_updated(
        self,
        transaction_id: UUID,
        changes: dict[str, str],
    ) -> None:
        self.log(AuditEventBuilder.transaction_updated(
            transaction_id=transaction_id,
            changes=changes,
        ))

    def log_transaction_deleted(self, transaction_id: UUID) -> None:
        self.log(AuditEventBuilder.transaction_deleted(transaction_id))

    def log_validation_failed(
        self,
        operation: str,
        field_errors: dict[str, str],
    ) -> None:
        self.log(AuditEventBuilder.validation_failed(
            operation=operation,
            field_errors=field_errors,
        ))

    def log_report_generated(
        self,
        report_type: str,
        period: str,
        transaction_count: int,
    ) -> None:
        self.log(AuditEventBuilder.report_generated(
            report_type=report_type,
            period=period,
            transaction_count=transaction_count,
        ))

    def log_csv_exported(self, row_count: int) -> None:
        self.log(AuditEventBuilder.csv_exported(row_count))

    def log_storage_error(
        self,
        operation: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        event = AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
        )
        if details:
            event.details.update(details)
        self.log(event)
