from .audit_log import AuditLog
from .base import Base
from .call_log import CallLog, CallStatus, CallType
from .message import Message, MessageReadStatus, MessageType, MessageVisibility
from .thread import ConversationThread
from .user import SALES_ROLES, User, UserRole

__all__ = [
    "Base",
    "User",
    "UserRole",
    "SALES_ROLES",
    "ConversationThread",
    "Message",
    "MessageType",
    "MessageVisibility",
    "MessageReadStatus",
    "CallLog",
    "CallType",
    "CallStatus",
    "AuditLog",
]
