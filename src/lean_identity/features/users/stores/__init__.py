"""User stores: the base store, capability adapters and compositions."""

from .user_store import UserStore
from .email_store import UserEmailStore
from .password_store import UserPasswordStore
from .security_stamp_store import UserSecurityStampStore
from .queryable_store import QueryableUserStore
from .composed import StandardUserStore, StandardWithSecurityStampUserStore
from .factory import create_user_store

__all__ = [
    "UserStore",
    "UserEmailStore",
    "UserPasswordStore",
    "UserSecurityStampStore",
    "QueryableUserStore",
    "StandardUserStore",
    "StandardWithSecurityStampUserStore",
    "create_user_store",
]
