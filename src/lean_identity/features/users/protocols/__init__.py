"""User feature protocol contracts."""

from .key_converter import KeyConverter
from .lookup_normalizer import LookupNormalizer
from .user_data_context import UserDataContext
from .user_stores import (
    UserStoreProtocol,
    UserEmailStoreProtocol,
    UserPasswordStoreProtocol,
    UserSecurityStampStoreProtocol,
    QueryableUserStoreProtocol,
)

__all__ = [
    "KeyConverter",
    "LookupNormalizer",
    "UserDataContext",
    "UserStoreProtocol",
    "UserEmailStoreProtocol",
    "UserPasswordStoreProtocol",
    "UserSecurityStampStoreProtocol",
    "QueryableUserStoreProtocol",
]
