"""Shared utilities for the expense approval flow."""

from expense_approval.utils.audit import AuditEvent, log_audit_event

__all__ = [
    "AuditEvent",
    "log_audit_event",
]
