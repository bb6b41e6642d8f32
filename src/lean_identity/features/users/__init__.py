"""User feature: entities, data contexts and stores."""

from .entities import User, UserPrivateSection, UserQuery
from .repositories import (
    BaseUserDataContext,
    InMemoryUserDatabase,
    InMemoryUserDataContext,
    AsyncpgUserDataContext,
)
from .services import (
    IdentityErrorDescriber,
    get_key_converter,
    get_lookup_normalizer,
)
from .stores import (
    UserStore,
    UserEmailStore,
    UserPasswordStore,
    UserSecurityStampStore,
    QueryableUserStore,
    StandardUserStore,
    StandardWithSecurityStampUserStore,
    create_user_store,
)

__all__ = [
    "User",
    "UserPrivateSection",
    "UserQuery",
    "BaseUserDataContext",
    "InMemoryUserDatabase",
    "InMemoryUserDataContext",
    "AsyncpgUserDataContext",
    "IdentityErrorDescriber",
    "get_key_converter",
    "get_lookup_normalizer",
    "UserStore",
    "UserEmailStore",
    "UserPasswordStore",
    "UserSecurityStampStore",
    "QueryableUserStore",
    "StandardUserStore",
    "StandardWithSecurityStampUserStore",
    "create_user_store",
]
