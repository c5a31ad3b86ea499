"""Audit sinks for mutating communications actions."""

import logging
from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import AuditLog

logger = logging.getLogger(__name__)


class AuditSink(ABC):
    """Receiver of audit records.

    Callers treat every sink as fire-and-forget: an exception raised here is
    logged by the caller and never fails the action being audited.
    """

    @abstractmethod
    def record_audit(
        self,
        actor_id: int,
        action: str,
        resource_type: str,
        resource_id: int,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        ...


class DatabaseAuditSink(AuditSink):
    """Persists audit records to the audit_log table."""

    def __init__(self, db: Session):
        self.db = db

    def record_audit(
        self,
        actor_id: int,
        action: str,
        resource_type: str,
        resource_id: int,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        entry = AuditLog(
            actor_id=actor_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            event_metadata=metadata,
        )
        self.db.add(entry)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise


class NullAuditSink(AuditSink):
    """Drops every record. Used when auditing is switched off."""

    def record_audit(
        self,
        actor_id: int,
        action: str,
        resource_type: str,
        resource_id: int,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        logger.debug(f"Audit disabled, dropping {action} on {resource_type}:{resource_id}")
