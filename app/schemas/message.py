from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.models.message import MessageType, MessageVisibility


class MessageCreate(BaseModel):
    """Schema for sending a message."""

    recipient_id: int
    content: str
    message_type: MessageType = MessageType.TEXT
    attachment_url: str | None = Field(default=None, max_length=2048)
    attachment_name: str | None = Field(default=None, max_length=255)


class MessageResponse(BaseModel):
    """Schema for message response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    thread_id: int
    sender_id: int
    recipient_id: int
    message_type: MessageType
    content: str
    attachment_url: str | None = None
    attachment_name: str | None = None
    is_read: bool
    read_at: datetime | None = None
    created_at: datetime


class ThreadMessage(MessageResponse):
    """Message as listed inside a thread, with sender details."""

    sender_name: str
    sender_role: str


class ConversationSummary(BaseModel):
    """One row of a user's inbox."""

    thread_id: int
    last_message_at: datetime
    other_user_id: int
    other_user_name: str
    other_user_role: str
    other_user_email: str
    unread_count: int = 0
    last_message_content: str | None = None
    last_message_time: datetime | None = None


class ReadReceipt(BaseModel):
    message_id: int
    is_read: bool
    read_at: datetime | None


class DeleteResult(BaseModel):
    message_id: int
    deleted_for: Literal["sender", "recipient"]
    visibility: MessageVisibility


class UnreadCount(BaseModel):
    unread_count: int
