"""Sample data creation for tests and local development."""
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from app.models import (
    AuditLog,
    CallLog,
    CallStatus,
    CallType,
    ConversationThread,
    Message,
    MessageReadStatus,
    User,
    UserRole,
)


def create_test_user(
    session: Session,
    role: UserRole | str = UserRole.RETAILER,
    name: str | None = None,
    email: str | None = None,
) -> User:
    """Create a test user. Any role string is stored as given."""
    role = role.value if isinstance(role, UserRole) else role
    count = session.query(User).count() + 1
    user = User(
        name=name or f"{role.title()} {count}",
        email=email or f"{role.lower()}{count}@example.com",
        role=role,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def create_test_call(
    session: Session,
    caller: User,
    recipient: User,
    status: CallStatus = CallStatus.COMPLETED,
    duration: int = 0,
    call_type: CallType = CallType.OUTBOUND,
    start_time: datetime | None = None,
) -> CallLog:
    """Create a call log row directly, bypassing the service."""
    call = CallLog(
        caller_id=caller.id,
        recipient_id=recipient.id,
        call_type=call_type,
        status=status,
        duration=duration,
        start_time=start_time or datetime.now(timezone.utc),
    )
    session.add(call)
    session.commit()
    session.refresh(call)
    return call


def create_test_data(session: Session) -> dict:
    """Create one user of every role."""
    return {role.value: create_test_user(session, role=role) for role in UserRole}


def cleanup_test_data(session: Session) -> None:
    """Clean up all communications data, children first."""
    for model in (
        AuditLog,
        MessageReadStatus,
        Message,
        ConversationThread,
        CallLog,
        User,
    ):
        session.query(model).delete()
    session.commit()
