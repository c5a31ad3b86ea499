"""Tests for core exception classes."""
from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    DatabaseError,
    NotFoundError,
    TradelinkException,
    ValidationError,
)


def test_tradelink_exception_basic():
    """Test basic TradelinkException functionality."""
    exc = TradelinkException("Test message")

    assert exc.message == "Test message"
    assert exc.error_code == "TRADELINK_ERROR"
    assert exc.status_code == 500
    assert exc.details == {}
    assert str(exc) == "Test message"


def test_tradelink_exception_with_details():
    """Test TradelinkException with custom details."""
    details = {"field": "content", "reason": "empty"}
    exc = TradelinkException(
        message="Custom error",
        error_code="CUSTOM_ERROR",
        status_code=400,
        details=details,
    )

    assert exc.error_code == "CUSTOM_ERROR"
    assert exc.status_code == 400
    assert exc.details == details


def test_database_error():
    """Test DatabaseError exception."""
    exc = DatabaseError("Failed to send message")

    assert exc.message == "Failed to send message"
    assert exc.error_code == "DATABASE_ERROR"
    assert exc.status_code == 500


def test_configuration_error():
    """Test ConfigurationError exception."""
    exc = ConfigurationError("Missing config key")

    assert exc.error_code == "CONFIGURATION_ERROR"
    assert exc.status_code == 500


def test_authentication_error_default_message():
    """Test AuthenticationError default message."""
    exc = AuthenticationError()

    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"
    assert exc.status_code == 401


def test_authorization_error():
    """Test AuthorizationError exception."""
    default = AuthorizationError()
    custom = AuthorizationError("Users cannot communicate", details={"user_ids": [1, 2]})

    assert default.message == "Access denied"
    assert default.status_code == 403
    assert custom.message == "Users cannot communicate"
    assert custom.details == {"user_ids": [1, 2]}


def test_validation_error_with_field():
    """Test ValidationError records the offending field."""
    exc = ValidationError("Missing required field: content", field="content")

    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.status_code == 422
    assert exc.details == {"field": "content"}


def test_validation_error_without_field():
    """Test ValidationError without a field."""
    exc = ValidationError("Bad input")

    assert exc.details == {}


def test_not_found_error():
    """Test NotFoundError message and details."""
    exc = NotFoundError("Message", "42")

    assert exc.message == "Message not found: 42"
    assert exc.error_code == "NOT_FOUND"
    assert exc.status_code == 404
    assert exc.details == {"resource": "Message", "identifier": "42"}


def test_not_found_error_without_identifier():
    """Test NotFoundError without an identifier."""
    exc = NotFoundError("Call")

    assert exc.message == "Call not found"
    assert exc.details == {"resource": "Call"}


def test_exception_inheritance():
    """Test all service errors share the base class."""
    for exc in (
        DatabaseError("x"),
        ConfigurationError("x"),
        AuthenticationError(),
        AuthorizationError(),
        ValidationError("x"),
        NotFoundError("x"),
    ):
        assert isinstance(exc, TradelinkException)
