"""Services package."""

from .access_policy import AccessPolicy
from .audit_service import AuditSink, DatabaseAuditSink, NullAuditSink
from .call_log_service import CallLogService
from .message_service import MessageService
from .thread_registry import ThreadRegistry, canonical_pair

__all__ = [
    "AccessPolicy",
    "AuditSink",
    "CallLogService",
    "DatabaseAuditSink",
    "MessageService",
    "NullAuditSink",
    "ThreadRegistry",
    "canonical_pair",
]
