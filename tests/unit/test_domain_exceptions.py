"""Tests for domain exceptions (error_code, message, details)."""

import pytest

from app.domain.exceptions import (
    AuthenticationException,
    CategoryInUseException,
    InvalidStatusTransitionException,
    RegistrationDisabledException,
    ResourceNotFoundException,
    SpendiqException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base SpendiqException uses class name as error_code when not provided."""
    exc = SpendiqException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "SpendiqException"
    assert exc.details == {}


def test_base_exception_custom_error_code_and_details() -> None:
    exc = SpendiqException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}


def test_validation_exception_without_field() -> None:
    assert ValidationException("Invalid").details == {}


def test_authentication_exception_default_message() -> None:
    exc = AuthenticationException()
    assert exc.message == "Invalid credentials"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_registration_disabled() -> None:
    exc = RegistrationDisabledException()
    assert exc.error_code == "REGISTRATION_DISABLED"
    assert "Google" in exc.message


def test_resource_not_found() -> None:
    exc = ResourceNotFoundException("transaction", "t1")
    assert exc.message == "Transaction not found"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "transaction", "resource_id": "t1"}


def test_category_in_use() -> None:
    exc = CategoryInUseException("c1", 3)
    assert exc.error_code == "CATEGORY_IN_USE"
    assert exc.details == {"category_id": "c1", "transaction_count": 3}


def test_invalid_status_transition() -> None:
    exc = InvalidStatusTransitionException("settled", "cancelled")
    assert exc.message == "Cannot change status from settled to cancelled"
    assert exc.details == {"current": "settled", "requested": "cancelled"}


@pytest.mark.parametrize(
    "exc",
    [
        ValidationException("x"),
        AuthenticationException(),
        ResourceNotFoundException("category", "c"),
        CategoryInUseException("c", 1),
    ],
)
def test_all_inherit_from_base(exc: SpendiqException) -> None:
    assert isinstance(exc, SpendiqException)
    assert str(exc) == exc.message
