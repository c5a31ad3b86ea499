"""Plumbing shared by the messaging and call log services."""

import enum
import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import AuthorizationError, DatabaseError, ValidationError
from app.services.access_policy import AccessPolicy
from app.services.audit_service import AuditSink, DatabaseAuditSink

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=enum.Enum)


class CommunicationService:
    """Holds the injected store session and collaborators."""

    def __init__(
        self,
        db: Session,
        audit_sink: AuditSink | None = None,
        access_policy: AccessPolicy | None = None,
    ):
        self.db = db
        self.audit_sink = audit_sink or DatabaseAuditSink(db)
        self.access_policy = access_policy or AccessPolicy(db)

    def _require_access(self, user_a_id: int, user_b_id: int) -> None:
        if not self.access_policy.can_communicate(user_a_id, user_b_id):
            logger.warning(f"Communication denied between users {user_a_id} and {user_b_id}")
            raise AuthorizationError(
                "Users cannot communicate",
                details={"user_ids": [user_a_id, user_b_id]},
            )

    @contextmanager
    def _store_errors(self, operation: str) -> Iterator[None]:
        """Turn store failures on the primary path into DatabaseError."""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {operation}: {e}")
            raise DatabaseError(f"Failed to {operation}", details={"operation": operation}) from e

    def _audit(
        self,
        actor_id: int,
        action: str,
        resource_type: str,
        resource_id: int,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Best-effort audit emission; never raises."""
        try:
            self.audit_sink.record_audit(actor_id, action, resource_type, resource_id, metadata)
        except Exception as e:
            logger.error(f"Failed to record audit event {action} for {resource_type}:{resource_id}: {e}")

    @staticmethod
    def _choice(enum_cls: type[E], value: Any, field: str, allowed: Iterable[E] | None = None) -> E:
        try:
            member = enum_cls(value)
        except ValueError:
            raise ValidationError(f"Invalid {field}: {value}", field=field) from None
        if allowed is not None and member not in allowed:
            raise ValidationError(f"Invalid {field}: {member.value}", field=field)
        return member
