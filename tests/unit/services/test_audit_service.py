"""Tests for audit sinks."""
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.models import AuditLog
from app.services.audit_service import AuditSink, DatabaseAuditSink, NullAuditSink


def test_audit_sink_is_abstract():
    """Test the base sink cannot be instantiated."""
    with pytest.raises(TypeError):
        AuditSink()


def test_database_sink_persists_record(db, supplier):
    """Test the database sink writes an audit_log row."""
    DatabaseAuditSink(db).record_audit(
        supplier.id, "send_message", "messages", 10, {"recipient_id": 2}
    )

    entry = db.query(AuditLog).one()
    assert entry.actor_id == supplier.id
    assert entry.action == "send_message"
    assert entry.resource_type == "messages"
    assert entry.resource_id == 10
    assert entry.event_metadata == {"recipient_id": 2}


def test_database_sink_rolls_back_and_raises():
    """Test store failures roll back and propagate."""
    session = MagicMock()
    session.commit.side_effect = OperationalError("INSERT", {}, Exception("db down"))

    with pytest.raises(OperationalError):
        DatabaseAuditSink(session).record_audit(1, "read_message", "messages", 5)
    session.rollback.assert_called_once()


def test_null_sink_writes_nothing(db):
    """Test the null sink drops records."""
    NullAuditSink().record_audit(1, "delete_message", "messages", 3)

    assert db.query(AuditLog).count() == 0
