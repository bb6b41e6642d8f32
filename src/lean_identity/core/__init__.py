"""Core module for lean-identity.

Exceptions, value objects and shared primitives that carry no storage or
feature knowledge.
"""

from .exceptions import (
    LeanIdentityError,
    InvalidArgumentError,
    StoreDisposedError,
    KeyFormatError,
    OperationCancelledError,
    DatabaseError,
    RepositoryError,
    ConcurrencyError,
    ConstraintViolationError,
    DataIntegrityError,
)
from .value_objects import IdentityError, IdentityResult
from .shared import CancellationToken, raise_if_cancelled

__all__ = [
    "LeanIdentityError",
    "InvalidArgumentError",
    "StoreDisposedError",
    "KeyFormatError",
    "OperationCancelledError",
    "DatabaseError",
    "RepositoryError",
    "ConcurrencyError",
    "ConstraintViolationError",
    "DataIntegrityError",
    "IdentityError",
    "IdentityResult",
    "CancellationToken",
    "raise_if_cancelled",
]
