import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow

if TYPE_CHECKING:
    from .user import User


class CallType(str, enum.Enum):
    """Perspective of the log entry, fixed at creation."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"
    MISSED = "missed"


class CallStatus(str, enum.Enum):
    """Call lifecycle status.

    COMPLETED, MISSED and FAILED are terminal by convention only; updates may
    set any status at any time.
    """

    INITIATED = "initiated"
    RINGING = "ringing"
    ANSWERED = "answered"
    MISSED = "missed"
    COMPLETED = "completed"
    FAILED = "failed"


class CallLog(Base):
    """Call between two users."""

    __tablename__ = "call_log"
    __table_args__ = (Index("ix_call_log_start_time", "start_time"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    caller_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipient_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    call_type: Mapped[CallType] = mapped_column(
        Enum(
            CallType,
            native_enum=False,
            length=20,
            values_callable=lambda types: [t.value for t in types],
        ),
        nullable=False,
        index=True,
    )
    status: Mapped[CallStatus] = mapped_column(
        Enum(
            CallStatus,
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=CallStatus.INITIATED,
        nullable=False,
        index=True,
    )
    duration: Mapped[int] = mapped_column(Integer, default=0, nullable=False)  # seconds
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    notes: Mapped[str | None] = mapped_column(Text)

    # Relationships
    caller: Mapped["User"] = relationship(
        back_populates="placed_calls", foreign_keys=[caller_id]
    )
    recipient: Mapped["User"] = relationship(
        back_populates="received_calls", foreign_keys=[recipient_id]
    )

    def involves(self, user_id: int) -> bool:
        return user_id in (self.caller_id, self.recipient_id)
