"""lean-identity - persistence for user identities.

Stores for users split into a base store and small capability stores
(email, password, security stamp, query) backed by a unit-of-work data
context over PostgreSQL or memory.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    IdentityStoreSettings,
    get_settings,
    KeyType,
    LookupNormalizerType,
    IdentityErrorCode,
)

from .core.exceptions import (
    LeanIdentityError,
    InvalidArgumentError,
    StoreDisposedError,
    KeyFormatError,
    OperationCancelledError,
    DatabaseError,
    ConcurrencyError,
    ConstraintViolationError,
    DataIntegrityError,
)

from .core.value_objects import IdentityError, IdentityResult
from .core.shared import CancellationToken

from .database import DatabaseManager, ensure_schema, init_database, close_database

from .features.users import (
    User,
    UserPrivateSection,
    UserQuery,
    InMemoryUserDatabase,
    InMemoryUserDataContext,
    AsyncpgUserDataContext,
    IdentityErrorDescriber,
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
    "__version__",
    "IdentityStoreSettings",
    "get_settings",
    "KeyType",
    "LookupNormalizerType",
    "IdentityErrorCode",
    "LeanIdentityError",
    "InvalidArgumentError",
    "StoreDisposedError",
    "KeyFormatError",
    "OperationCancelledError",
    "DatabaseError",
    "ConcurrencyError",
    "ConstraintViolationError",
    "DataIntegrityError",
    "IdentityError",
    "IdentityResult",
    "CancellationToken",
    "DatabaseManager",
    "ensure_schema",
    "init_database",
    "close_database",
    "User",
    "UserPrivateSection",
    "UserQuery",
    "InMemoryUserDatabase",
    "InMemoryUserDataContext",
    "AsyncpgUserDataContext",
    "IdentityErrorDescriber",
    "UserStore",
    "UserEmailStore",
    "UserPasswordStore",
    "UserSecurityStampStore",
    "QueryableUserStore",
    "StandardUserStore",
    "StandardWithSecurityStampUserStore",
    "create_user_store",
]
