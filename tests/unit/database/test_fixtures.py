"""Tests for sample data helpers."""
from app.database.fixtures import (
    cleanup_test_data,
    create_test_call,
    create_test_data,
    create_test_user,
)
from app.models import CallLog, CallStatus, User, UserRole


def test_create_test_user_generates_unique_identity(db):
    """Test generated users get distinct names and emails."""
    first = create_test_user(db)
    second = create_test_user(db, role=UserRole.SUPPLIER)

    assert first.id != second.id
    assert first.email != second.email
    assert first.role == UserRole.RETAILER
    assert second.role == UserRole.SUPPLIER


def test_create_test_data_covers_every_role(db):
    """Test one user is created for each role."""
    users = create_test_data(db)

    assert set(users) == {role.value for role in UserRole}
    assert users["sales_rep"].role == UserRole.SALES_REP


def test_create_test_call(db, supplier, retailer):
    """Test calls can be seeded directly."""
    call = create_test_call(db, supplier, retailer, duration=30)

    assert call.id is not None
    assert call.status == CallStatus.COMPLETED
    assert call.duration == 30
    assert call.start_time is not None


def test_cleanup_test_data(db, supplier, retailer):
    """Test cleanup removes calls and users."""
    create_test_call(db, supplier, retailer)

    cleanup_test_data(db)

    assert db.query(User).count() == 0
    assert db.query(CallLog).count() == 0


def test_create_test_user_with_unlisted_role(db):
    """Test role strings outside UserRole are stored as given."""
    user = create_test_user(db, "Sales")

    assert user.role == "Sales"
    assert user.email.startswith("sales")
