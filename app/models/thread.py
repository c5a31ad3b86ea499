from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow

if TYPE_CHECKING:
    from .message import Message


class ConversationThread(Base):
    """One thread per unordered user pair, stored as (low, high)."""

    __tablename__ = "conversation_thread"
    __table_args__ = (
        UniqueConstraint("user1_id", "user2_id", name="uq_conversation_thread_pair"),
        CheckConstraint("user1_id < user2_id", name="canonical_pair"),
        Index("ix_conversation_thread_last_message_at", "last_message_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user1_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user2_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    last_message_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    # Relationships
    messages: Mapped[list["Message"]] = relationship(
        back_populates="thread", passive_deletes=True
    )
