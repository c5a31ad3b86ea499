"""Message Service for direct messaging between platform users."""

import logging

from sqlalchemy import and_, case, desc, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import AuthorizationError, NotFoundError
from app.core.validation import pagination_offset, require_fields, sanitize_content
from app.models import ConversationThread, Message, MessageReadStatus, MessageType, User
from app.models.base import utcnow
from app.schemas.message import (
    ConversationSummary,
    DeleteResult,
    MessageResponse,
    ReadReceipt,
    ThreadMessage,
)
from app.services.access_policy import AccessPolicy
from app.services.audit_service import AuditSink
from app.services.base import CommunicationService
from app.services.thread_registry import ThreadRegistry

logger = logging.getLogger(__name__)


def visible_to(user_id: int):
    """Filter clause for messages user_id has not deleted from their view."""
    return or_(
        and_(Message.sender_id == user_id, Message.deleted_by_sender.is_(False)),
        and_(Message.recipient_id == user_id, Message.deleted_by_recipient.is_(False)),
    )


class MessageService(CommunicationService):
    """Service for message data operations."""

    def __init__(
        self,
        db: Session,
        audit_sink: AuditSink | None = None,
        access_policy: AccessPolicy | None = None,
        thread_registry: ThreadRegistry | None = None,
    ):
        super().__init__(db, audit_sink=audit_sink, access_policy=access_policy)
        self.threads = thread_registry or ThreadRegistry(db)

    def send_message(
        self,
        sender_id: int,
        recipient_id: int,
        content: str,
        message_type: MessageType | str = MessageType.TEXT,
        attachment_url: str | None = None,
        attachment_name: str | None = None,
    ) -> MessageResponse:
        """Validate, sanitize and store a message from sender to recipient."""
        require_fields(sender_id=sender_id, recipient_id=recipient_id, content=content)
        message_type = self._choice(MessageType, message_type, "message_type")

        with self._store_errors("send message"):
            self._require_access(sender_id, recipient_id)

            thread_id = self.threads.get_or_create_thread(sender_id, recipient_id)
            message = Message(
                thread_id=thread_id,
                sender_id=sender_id,
                recipient_id=recipient_id,
                message_type=message_type,
                content=sanitize_content(content),
                attachment_url=attachment_url,
                attachment_name=attachment_name,
            )
            self.db.add(message)
            self.db.commit()
            self.db.refresh(message)
            response = MessageResponse.model_validate(message)

        try:
            self.threads.touch_thread(thread_id, response.created_at)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update thread {thread_id} timestamp: {e}")

        self._audit(
            sender_id,
            "send_message",
            "messages",
            response.id,
            {"recipient_id": recipient_id, "message_type": message_type.value},
        )
        logger.info(f"User {sender_id} sent message {response.id} to user {recipient_id}")
        return response

    def get_conversations(
        self, user_id: int, page: int = 1, limit: int = 20
    ) -> list[ConversationSummary]:
        """List the user's threads, most recently active first."""
        offset = pagination_offset(page, limit)

        other_user_id = case(
            (ConversationThread.user1_id == user_id, ConversationThread.user2_id),
            else_=ConversationThread.user1_id,
        )
        unread_count = (
            select(func.count(Message.id))
            .where(
                Message.thread_id == ConversationThread.id,
                Message.recipient_id == user_id,
                Message.is_read.is_(False),
                Message.deleted_by_recipient.is_(False),
            )
            .correlate(ConversationThread)
            .scalar_subquery()
        )
        last_message_content = self._latest_in_thread(Message.content)
        last_message_time = self._latest_in_thread(Message.created_at)

        with self._store_errors("list conversations"):
            rows = (
                self.db.query(
                    ConversationThread.id.label("thread_id"),
                    ConversationThread.last_message_at.label("last_message_at"),
                    User.id.label("other_user_id"),
                    User.name.label("other_user_name"),
                    User.role.label("other_user_role"),
                    User.email.label("other_user_email"),
                    unread_count.label("unread_count"),
                    last_message_content.label("last_message_content"),
                    last_message_time.label("last_message_time"),
                )
                .select_from(ConversationThread)
                .join(User, User.id == other_user_id)
                .filter(
                    or_(
                        ConversationThread.user1_id == user_id,
                        ConversationThread.user2_id == user_id,
                    )
                )
                .order_by(desc(ConversationThread.last_message_at), desc(ConversationThread.id))
                .offset(offset)
                .limit(limit)
                .all()
            )

        return [ConversationSummary(**row._mapping) for row in rows]

    def get_message_thread(
        self, current_user_id: int, other_user_id: int, page: int = 1, limit: int = 50
    ) -> list[ThreadMessage]:
        """Messages between two users as seen by current_user_id, newest first."""
        offset = pagination_offset(page, limit)

        with self._store_errors("load message thread"):
            self._require_access(current_user_id, other_user_id)

            thread_id = self.threads.find_thread(current_user_id, other_user_id)
            if thread_id is None:
                return []

            rows = (
                self.db.query(Message, User.name, User.role)
                .join(User, User.id == Message.sender_id)
                .filter(Message.thread_id == thread_id, visible_to(current_user_id))
                .order_by(desc(Message.created_at), desc(Message.id))
                .offset(offset)
                .limit(limit)
                .all()
            )

        return [
            ThreadMessage(
                **MessageResponse.model_validate(message).model_dump(),
                sender_name=sender_name,
                sender_role=sender_role,
            )
            for message, sender_name, sender_role in rows
        ]

    def mark_message_as_read(self, message_id: int, user_id: int) -> ReadReceipt:
        """Mark a message read by its recipient. Safe to repeat."""
        with self._store_errors("mark message as read"):
            message = (
                self.db.query(Message)
                .filter(Message.id == message_id, Message.recipient_id == user_id)
                .first()
            )
            if not message:
                raise NotFoundError("Message", str(message_id))

            if not message.is_read:
                message.is_read = True
                message.read_at = utcnow()
                self.db.commit()
                self.db.refresh(message)

            receipt = ReadReceipt(
                message_id=message.id, is_read=message.is_read, read_at=message.read_at
            )

        self._record_read_status(message_id, user_id)
        self._audit(user_id, "read_message", "messages", message_id)
        return receipt

    def delete_message(self, message_id: int, user_id: int) -> DeleteResult:
        """Hide a message from the caller's own view only."""
        with self._store_errors("delete message"):
            message = self.db.get(Message, message_id)
            if message is None:
                raise NotFoundError("Message", str(message_id))

            if message.sender_id == user_id:
                message.deleted_by_sender = True
                deleted_for = "sender"
            elif message.recipient_id == user_id:
                message.deleted_by_recipient = True
                deleted_for = "recipient"
            else:
                raise AuthorizationError(
                    "Only the sender or recipient can delete a message",
                    details={"message_id": message_id},
                )

            self.db.commit()
            self.db.refresh(message)
            result = DeleteResult(
                message_id=message.id, deleted_for=deleted_for, visibility=message.visibility
            )

        self._audit(user_id, "delete_message", "messages", message_id, {"deleted_for": deleted_for})
        logger.info(f"User {user_id} deleted message {message_id} as {deleted_for}")
        return result

    def get_unread_count(self, user_id: int) -> int:
        """Count unread messages addressed to the user and still in their view."""
        with self._store_errors("count unread messages"):
            count = (
                self.db.query(func.count(Message.id))
                .filter(
                    Message.recipient_id == user_id,
                    Message.is_read.is_(False),
                    Message.deleted_by_recipient.is_(False),
                )
                .scalar()
            )
        return count or 0

    def _record_read_status(self, message_id: int, user_id: int) -> None:
        """Insert the read marker once; duplicates are ignored."""
        try:
            exists = (
                self.db.query(MessageReadStatus.id)
                .filter(
                    MessageReadStatus.message_id == message_id,
                    MessageReadStatus.user_id == user_id,
                )
                .first()
            )
            if exists:
                return
            self.db.add(MessageReadStatus(message_id=message_id, user_id=user_id))
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.debug(f"Read status for message {message_id} by user {user_id} already recorded")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to insert read status for message {message_id}: {e}")

    @staticmethod
    def _latest_in_thread(column):
        """Correlated subquery: column of the newest message in the outer thread."""
        return (
            select(column)
            .where(Message.thread_id == ConversationThread.id)
            .order_by(desc(Message.created_at), desc(Message.id))
            .limit(1)
            .correlate(ConversationThread)
            .scalar_subquery()
        )
