"""Database-related exceptions for lean-identity.

Collaborators translate driver errors into these types so that raw storage
exceptions never reach the stores.
"""

from typing import Optional

from ...config.constants import ConstraintKind
from .base import LeanIdentityError


class DatabaseError(LeanIdentityError):
    """Base class for database-related errors."""
    pass


class RepositoryError(DatabaseError):
    """Base class for repository-related errors."""
    pass


class ConcurrencyError(RepositoryError):
    """Raised when a concurrency conflict occurs."""

    def __init__(self, entity_type: str, identifier: str):
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(
            f"Concurrency conflict for {entity_type} '{identifier}'. "
            f"Entity was modified by another process."
        )


class ConstraintViolationError(RepositoryError):
    """Raised when a write violates a uniqueness or foreign-key constraint."""

    def __init__(
        self,
        constraint_name: Optional[str],
        kind: ConstraintKind = ConstraintKind.OTHER,
        reason: str = "",
    ):
        self.constraint_name = constraint_name
        self.kind = kind
        message = f"Constraint '{constraint_name or 'unknown'}' violated"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            details={"constraint": constraint_name, "kind": kind.value},
        )


class DataIntegrityError(RepositoryError):
    """Raised when a value does not fit its column (length or nullability)."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(
            f"Data integrity violated for field '{field}': {reason}",
            details={"field": field},
        )
