import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow

if TYPE_CHECKING:
    from .thread import ConversationThread
    from .user import User


class MessageType(str, enum.Enum):
    """Kind of message payload."""

    TEXT = "text"
    FILE = "file"
    ATTACHMENT = "attachment"


class MessageVisibility(str, enum.Enum):
    """Single-value view of the two per-viewer delete flags."""

    VISIBLE = "visible"
    HIDDEN_TO_SENDER = "hidden_to_sender"
    HIDDEN_TO_RECIPIENT = "hidden_to_recipient"
    HIDDEN_TO_BOTH = "hidden_to_both"


class Message(Base):
    """Direct message between two users."""

    __tablename__ = "message"
    __table_args__ = (Index("ix_message_created_at", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    thread_id: Mapped[int] = mapped_column(
        ForeignKey("conversation_thread.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipient_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    message_type: Mapped[MessageType] = mapped_column(
        Enum(
            MessageType,
            native_enum=False,
            length=20,
            values_callable=lambda types: [t.value for t in types],
        ),
        default=MessageType.TEXT,
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    attachment_url: Mapped[str | None] = mapped_column(String(2048))
    attachment_name: Mapped[str | None] = mapped_column(String(255))
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    deleted_by_sender: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    deleted_by_recipient: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    # Relationships
    thread: Mapped["ConversationThread"] = relationship(back_populates="messages")
    sender: Mapped["User"] = relationship(
        back_populates="sent_messages", foreign_keys=[sender_id]
    )
    recipient: Mapped["User"] = relationship(
        back_populates="received_messages", foreign_keys=[recipient_id]
    )
    read_statuses: Mapped[list["MessageReadStatus"]] = relationship(
        back_populates="message", passive_deletes=True
    )

    @property
    def visibility(self) -> MessageVisibility:
        if self.deleted_by_sender and self.deleted_by_recipient:
            return MessageVisibility.HIDDEN_TO_BOTH
        if self.deleted_by_sender:
            return MessageVisibility.HIDDEN_TO_SENDER
        if self.deleted_by_recipient:
            return MessageVisibility.HIDDEN_TO_RECIPIENT
        return MessageVisibility.VISIBLE


class MessageReadStatus(Base):
    """Idempotent per-user read marker."""

    __tablename__ = "message_read_status"
    __table_args__ = (
        UniqueConstraint("message_id", "user_id", name="uq_message_read_status_message_user"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    message_id: Mapped[int] = mapped_column(
        ForeignKey("message.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    read_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    message: Mapped["Message"] = relationship(back_populates="read_statuses")
