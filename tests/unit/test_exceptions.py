"""Tests for the exception hierarchy."""

from lean_identity.config.constants import ConstraintKind
from lean_identity.core.exceptions import (
    ConcurrencyError,
    ConstraintViolationError,
    DatabaseError,
    DataIntegrityError,
    InvalidArgumentError,
    KeyFormatError,
    LeanIdentityError,
    RepositoryError,
    StoreDisposedError,
)


class TestExceptions:
    """Test exception details and hierarchy."""

    def test_hierarchy(self):
        assert issubclass(ConcurrencyError, RepositoryError)
        assert issubclass(RepositoryError, DatabaseError)
        assert issubclass(DatabaseError, LeanIdentityError)
        assert issubclass(InvalidArgumentError, ValueError)
        assert issubclass(KeyFormatError, ValueError)
        assert issubclass(StoreDisposedError, RuntimeError)

    def test_default_error_code_is_class_name(self):
        assert ConcurrencyError("User", "user-1").error_code == "ConcurrencyError"

    def test_constraint_violation_details(self):
        error = ConstraintViolationError("uq_users_normalized_user_name", ConstraintKind.UNIQUE)
        assert error.constraint_name == "uq_users_normalized_user_name"
        assert error.kind == ConstraintKind.UNIQUE
        assert error.details == {"constraint": "uq_users_normalized_user_name", "kind": "unique"}

    def test_constraint_violation_without_name(self):
        error = ConstraintViolationError(None)
        assert error.kind == ConstraintKind.OTHER
        assert "unknown" in str(error)

    def test_data_integrity_details(self):
        error = DataIntegrityError("email", "value is required")
        assert error.field == "email"
        assert error.details == {"field": "email"}
        assert error.error_code == "DataIntegrityError"

    def test_invalid_argument_message(self):
        assert str(InvalidArgumentError("user")) == "Argument 'user' is required"
        assert "negative" in str(InvalidArgumentError("count", "must not be negative"))
