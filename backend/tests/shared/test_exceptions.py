"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    LockwatchError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)


class TestLockwatchError:
    def test_message(self):
        """LockwatchError should store message."""
        error = LockwatchError("Lookup failed")
        assert error.message == "Lookup failed"
        assert str(error) == "Lookup failed"

    def test_default_code_is_class_name(self):
        assert LockwatchError("Lookup failed").code == "LockwatchError"

    def test_custom_code_and_details(self):
        error = LockwatchError("Lookup failed", code="LOOKUP_FAILED", details={"realm": "acme"})
        assert error.code == "LOOKUP_FAILED"
        assert error.details == {"realm": "acme"}

    def test_to_dict(self):
        error = LockwatchError("Lookup failed", code="LOOKUP_FAILED", details={"realm": "acme"})
        assert error.to_dict() == {
            "error": "LOOKUP_FAILED",
            "message": "Lookup failed",
            "details": {"realm": "acme"},
        }

    def test_to_dict_minimal(self):
        assert LockwatchError("Lookup failed").to_dict() == {
            "error": "LockwatchError",
            "message": "Lookup failed",
            "details": {},
        }


class TestSubclasses:
    @pytest.mark.parametrize(
        "cls",
        [NotFoundError, ValidationError, AuthenticationError, AuthorizationError],
    )
    def test_inherits_base(self, cls):
        error = cls("failed")
        assert isinstance(error, LockwatchError)
        assert error.code == cls.__name__

    def test_validation_error_with_details(self):
        """ValidationError should support field-level details."""
        error = ValidationError("Validation failed", details={"fields": {"max": "Not an integer"}})
        assert error.details["fields"]["max"] == "Not an integer"


class TestExternalServiceError:
    def test_stores_service(self):
        error = ExternalServiceError("Connection failed", service="supabase")
        assert isinstance(error, LockwatchError)
        assert error.service == "supabase"
        assert error.to_dict()["details"]["service"] == "supabase"

    def test_preserves_other_details(self):
        error = ExternalServiceError(
            "Connection failed",
            service="supabase",
            details={"status_code": 503},
        )
        assert error.to_dict()["details"] == {"status_code": 503, "service": "supabase"}
