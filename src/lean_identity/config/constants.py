"""Constants and enums for lean-identity.

These correspond to the column bounds, table names and constraint names
declared by the schema in ``lean_identity.database.schema``.
"""

from enum import Enum
from typing import Final


class ColumnLimits:
    """Maximum lengths of the persisted identity columns."""

    USER_NAME_MAX_LENGTH: Final[int] = 256
    EMAIL_MAX_LENGTH: Final[int] = 256
    PASSWORD_HASH_MAX_LENGTH: Final[int] = 120
    SECURITY_STAMP_MAX_LENGTH: Final[int] = 36


class DatabaseSchemas:
    """Database schema and table names."""

    DEFAULT: Final[str] = "identity"
    USERS_TABLE: Final[str] = "users"
    PRIVATE_SECTIONS_TABLE: Final[str] = "user_private_sections"


class ConstraintNames:
    """Names of the constraints declared on the identity tables."""

    USERS_PRIMARY_KEY: Final[str] = "pk_users"
    UNIQUE_NORMALIZED_USER_NAME: Final[str] = "uq_users_normalized_user_name"
    UNIQUE_NORMALIZED_EMAIL: Final[str] = "uq_users_normalized_email"
    PRIVATE_SECTION_PRIMARY_KEY: Final[str] = "pk_user_private_sections"
    PRIVATE_SECTION_USER_FK: Final[str] = "fk_user_private_sections_users_user_id"


class IdentityErrorCode(str, Enum):
    """Well-known identity error codes produced by the stores."""

    CONCURRENCY_FAILURE = "ConcurrencyFailure"
    DUPLICATE_USER_NAME = "DuplicateUserName"
    DUPLICATE_EMAIL = "DuplicateEmail"
    DUPLICATE_OR_CONSTRAINT = "DuplicateOrConstraint"


class ConstraintKind(str, Enum):
    """Kinds of storage constraint violations."""

    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    OTHER = "other"


class LookupNormalizerType(str, Enum):
    """Lookup normalizer strategies selectable from configuration."""

    TRIVIAL = "trivial"
    UPPER = "upper"
    CASEFOLD = "casefold"


class KeyType(str, Enum):
    """Identity key types selectable from configuration."""

    UUID = "uuid"
    INT = "int"
    STR = "str"
