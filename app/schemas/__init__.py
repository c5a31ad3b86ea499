"""Pydantic schemas for the communications API."""

from .call_log import (
    CallAnalytics,
    CallDetailsUpdate,
    CallInitiate,
    CallLogEntry,
    CallLogFilters,
    CallLogResponse,
    CallNotesUpdate,
)
from .message import (
    ConversationSummary,
    DeleteResult,
    MessageCreate,
    MessageResponse,
    ReadReceipt,
    ThreadMessage,
    UnreadCount,
)

__all__ = [
    "CallAnalytics",
    "CallDetailsUpdate",
    "CallInitiate",
    "CallLogEntry",
    "CallLogFilters",
    "CallLogResponse",
    "CallNotesUpdate",
    "ConversationSummary",
    "DeleteResult",
    "MessageCreate",
    "MessageResponse",
    "ReadReceipt",
    "ThreadMessage",
    "UnreadCount",
]
