"""Message endpoints."""

from fastapi import APIRouter, Depends, Query, status

from app.config.service import settings
from app.core.dependencies import get_current_user_id, get_message_service
from app.schemas.message import (
    ConversationSummary,
    DeleteResult,
    MessageCreate,
    MessageResponse,
    ReadReceipt,
    ThreadMessage,
    UnreadCount,
)
from app.services.message_service import MessageService

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("/", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    payload: MessageCreate,
    user_id: int = Depends(get_current_user_id),
    message_service: MessageService = Depends(get_message_service),
) -> MessageResponse:
    """Send a message to another user."""
    return message_service.send_message(
        sender_id=user_id,
        recipient_id=payload.recipient_id,
        content=payload.content,
        message_type=payload.message_type,
        attachment_url=payload.attachment_url,
        attachment_name=payload.attachment_name,
    )


@router.get("/conversations", response_model=list[ConversationSummary])
async def get_conversations(
    user_id: int = Depends(get_current_user_id),
    message_service: MessageService = Depends(get_message_service),
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> list[ConversationSummary]:
    """List the current user's conversations."""
    return message_service.get_conversations(user_id, page=page, limit=limit)


@router.get("/unread-count", response_model=UnreadCount)
async def get_unread_count(
    user_id: int = Depends(get_current_user_id),
    message_service: MessageService = Depends(get_message_service),
) -> UnreadCount:
    """Count the current user's unread messages."""
    return UnreadCount(unread_count=message_service.get_unread_count(user_id))


@router.get("/thread/{other_user_id}", response_model=list[ThreadMessage])
async def get_message_thread(
    other_user_id: int,
    user_id: int = Depends(get_current_user_id),
    message_service: MessageService = Depends(get_message_service),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.HISTORY_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> list[ThreadMessage]:
    """Get the message thread with another user."""
    return message_service.get_message_thread(user_id, other_user_id, page=page, limit=limit)


@router.post("/{message_id}/read", response_model=ReadReceipt)
async def mark_message_as_read(
    message_id: int,
    user_id: int = Depends(get_current_user_id),
    message_service: MessageService = Depends(get_message_service),
) -> ReadReceipt:
    """Mark a received message as read."""
    return message_service.mark_message_as_read(message_id, user_id)


@router.delete("/{message_id}", response_model=DeleteResult)
async def delete_message(
    message_id: int,
    user_id: int = Depends(get_current_user_id),
    message_service: MessageService = Depends(get_message_service),
) -> DeleteResult:
    """Remove a message from the current user's view."""
    return message_service.delete_message(message_id, user_id)
