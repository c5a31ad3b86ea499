"""Common dependencies for the application."""

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.config.service import settings
from app.core.exceptions import AuthenticationError
from app.database.connection import get_db_session
from app.services.audit_service import AuditSink, DatabaseAuditSink, NullAuditSink
from app.services.call_log_service import CallLogService
from app.services.message_service import MessageService


async def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> int:
    """Acting user id, as verified and forwarded by the authenticating gateway."""
    if not x_user_id:
        raise AuthenticationError("Missing X-User-Id header")
    try:
        user_id = int(x_user_id)
    except ValueError as e:
        raise AuthenticationError("Malformed X-User-Id header") from e
    if user_id < 1:
        raise AuthenticationError("Malformed X-User-Id header")
    return user_id


def get_audit_sink(db: Session = Depends(get_db_session)) -> AuditSink:
    """Audit sink for the request."""
    if settings.AUDIT_ENABLED:
        return DatabaseAuditSink(db)
    return NullAuditSink()


def get_message_service(
    db: Session = Depends(get_db_session),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> MessageService:
    """Get message service instance."""
    return MessageService(db, audit_sink=audit_sink)


def get_call_log_service(
    db: Session = Depends(get_db_session),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> CallLogService:
    """Get call log service instance."""
    return CallLogService(db, audit_sink=audit_sink)
