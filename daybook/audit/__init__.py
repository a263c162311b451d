"""Audit logging package."""

from daybook.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
