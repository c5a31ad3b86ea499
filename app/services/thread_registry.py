"""Canonical conversation thread lookup and lazy creation."""

import logging
from datetime import datetime
from typing import NamedTuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.models import ConversationThread

logger = logging.getLogger(__name__)


class ThreadKey(NamedTuple):
    """Unordered user pair in canonical (low, high) order."""

    low: int
    high: int


def canonical_pair(user_a_id: int, user_b_id: int) -> ThreadKey:
    """Normalize a user pair so (a, b) and (b, a) give the same key."""
    if user_a_id == user_b_id:
        raise ValidationError("A thread needs two distinct participants", field="user_id")
    if user_a_id < user_b_id:
        return ThreadKey(user_a_id, user_b_id)
    return ThreadKey(user_b_id, user_a_id)


class ThreadRegistry:
    """Maps user pairs to their single conversation thread."""

    def __init__(self, db: Session):
        self.db = db

    def find_thread(self, user_a_id: int, user_b_id: int) -> int | None:
        """Return the pair's thread id, or None if they never talked."""
        return self._lookup(canonical_pair(user_a_id, user_b_id))

    def get_or_create_thread(self, user_a_id: int, user_b_id: int) -> int:
        """Return the pair's thread id, creating the thread on first contact."""
        key = canonical_pair(user_a_id, user_b_id)

        thread_id = self._lookup(key)
        if thread_id is not None:
            return thread_id

        thread = ConversationThread(user1_id=key.low, user2_id=key.high)
        self.db.add(thread)
        try:
            self.db.commit()
        except IntegrityError:
            # Another request created the thread first; the unique
            # constraint on (user1_id, user2_id) kept it to one row.
            self.db.rollback()
            thread_id = self._lookup(key)
            if thread_id is None:
                raise
            logger.info(f"Thread for pair {key} created concurrently, reusing {thread_id}")
            return thread_id

        logger.info(f"Created conversation thread {thread.id} for pair {key}")
        return thread.id

    def touch_thread(self, thread_id: int, at: datetime) -> None:
        """Record the time of the newest message in a thread.

        Only moves forward, so a late write from an older message is a no-op.
        """
        self.db.query(ConversationThread).filter(
            ConversationThread.id == thread_id,
            ConversationThread.last_message_at < at,
        ).update({ConversationThread.last_message_at: at}, synchronize_session=False)
        self.db.commit()

    def _lookup(self, key: ThreadKey) -> int | None:
        return (
            self.db.query(ConversationThread.id)
            .filter(
                ConversationThread.user1_id == key.low,
                ConversationThread.user2_id == key.high,
            )
            .scalar()
        )
