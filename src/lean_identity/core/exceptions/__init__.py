"""Exceptions module for lean-identity."""

from .base import LeanIdentityError
from .store import (
    InvalidArgumentError,
    StoreDisposedError,
    KeyFormatError,
    OperationCancelledError,
)
from .database import (
    DatabaseError,
    RepositoryError,
    ConcurrencyError,
    ConstraintViolationError,
    DataIntegrityError,
)

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
]
