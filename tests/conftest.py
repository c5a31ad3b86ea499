import os
from unittest.mock import Mock

import pytest

# Set test environment variables before importing settings
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["AUDIT_ENABLED"] = "true"

from app.database.connection import TestDatabaseManager  # noqa: E402
from app.database.fixtures import create_test_user  # noqa: E402
from app.models import UserRole  # noqa: E402
from app.services.audit_service import AuditSink  # noqa: E402
from app.services.call_log_service import CallLogService  # noqa: E402
from app.services.message_service import MessageService  # noqa: E402


@pytest.fixture
def db_manager():
    """In-memory SQLite database with all tables created."""
    manager = TestDatabaseManager()
    manager.create_tables()
    yield manager
    manager.drop_tables()
    manager.close()


@pytest.fixture
def db(db_manager):
    """Create test database session."""
    session = db_manager.get_session()
    yield session
    session.close()


@pytest.fixture
def audit_sink():
    """Audit sink that records calls instead of writing rows."""
    return Mock(spec=AuditSink)


@pytest.fixture
def supplier(db):
    return create_test_user(db, UserRole.SUPPLIER, name="Acme Supply")


@pytest.fixture
def retailer(db):
    return create_test_user(db, UserRole.RETAILER, name="Corner Shop")


@pytest.fixture
def other_retailer(db):
    return create_test_user(db, UserRole.RETAILER, name="High Street Store")


@pytest.fixture
def sales(db):
    return create_test_user(db, UserRole.SALES, name="Sam Sales")


@pytest.fixture
def message_service(db, audit_sink):
    return MessageService(db, audit_sink=audit_sink)


@pytest.fixture
def call_service(db, audit_sink):
    return CallLogService(db, audit_sink=audit_sink)


@pytest.fixture
def client(db):
    """Test client for the API, bound to the test session."""
    from fastapi.testclient import TestClient

    from app.database.connection import get_db_session
    from app.public.main import app

    def override_get_db_session():
        yield db

    app.dependency_overrides[get_db_session] = override_get_db_session
    yield TestClient(app)
    app.dependency_overrides.clear()
