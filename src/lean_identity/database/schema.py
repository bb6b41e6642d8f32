"""DDL for the split identity schema.

The public profile lives in ``users``; credentials live in
``user_private_sections``, keyed by the same id and removed with their owner
through ``ON DELETE CASCADE``. Applications that run their own migrations can
copy these statements instead of calling ``ensure_schema``.
"""

import logging
import re
from typing import List

from ..config.constants import ColumnLimits, ConstraintNames, DatabaseSchemas
from ..core.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")

KEY_COLUMN_TYPES = {
    "uuid": "uuid",
    "int": "bigint",
    "str": "varchar(450)",
}


def validate_schema_name(schema_name: str) -> str:
    """Validate schema name to prevent SQL injection."""
    if not schema_name or not _IDENTIFIER_PATTERN.match(schema_name):
        raise InvalidArgumentError("schema_name", f"'{schema_name}' is not a valid identifier")
    return schema_name


def build_schema_statements(
    schema_name: str = DatabaseSchemas.DEFAULT,
    key_type: str = "uuid",
) -> List[str]:
    """Build the DDL statements for the identity tables."""
    schema = validate_schema_name(schema_name)
    if key_type not in KEY_COLUMN_TYPES:
        raise InvalidArgumentError("key_type", f"unsupported key type '{key_type}'")
    key_column = KEY_COLUMN_TYPES[key_type]
    if key_type == "int":
        id_column = f"id {key_column} GENERATED BY DEFAULT AS IDENTITY"
    else:
        id_column = f"id {key_column} NOT NULL"

    users = f"{schema}.{DatabaseSchemas.USERS_TABLE}"
    sections = f"{schema}.{DatabaseSchemas.PRIVATE_SECTIONS_TABLE}"

    return [
        f"CREATE SCHEMA IF NOT EXISTS {schema}",
        f"""
        CREATE TABLE IF NOT EXISTS {users} (
            {id_column},
            user_name varchar({ColumnLimits.USER_NAME_MAX_LENGTH}) NOT NULL,
            normalized_user_name varchar({ColumnLimits.USER_NAME_MAX_LENGTH}) NOT NULL,
            email varchar({ColumnLimits.EMAIL_MAX_LENGTH}) NOT NULL,
            normalized_email varchar({ColumnLimits.EMAIL_MAX_LENGTH}) NOT NULL,
            row_version integer NOT NULL DEFAULT 1,
            CONSTRAINT {ConstraintNames.USERS_PRIMARY_KEY} PRIMARY KEY (id),
            CONSTRAINT {ConstraintNames.UNIQUE_NORMALIZED_USER_NAME} UNIQUE (normalized_user_name)
        )
        """,
        f"""
        CREATE INDEX IF NOT EXISTS ix_users_normalized_email
            ON {users} (normalized_email)
        """,
        f"""
        CREATE TABLE IF NOT EXISTS {sections} (
            user_id {key_column} NOT NULL,
            is_email_confirmed boolean NOT NULL DEFAULT false,
            password_hash varchar({ColumnLimits.PASSWORD_HASH_MAX_LENGTH}),
            security_stamp varchar({ColumnLimits.SECURITY_STAMP_MAX_LENGTH}),
            CONSTRAINT {ConstraintNames.PRIVATE_SECTION_PRIMARY_KEY} PRIMARY KEY (user_id),
            CONSTRAINT {ConstraintNames.PRIVATE_SECTION_USER_FK} FOREIGN KEY (user_id)
                REFERENCES {users} (id) ON DELETE CASCADE
        )
        """,
    ]


async def ensure_schema(
    database_manager,
    schema_name: str = DatabaseSchemas.DEFAULT,
    key_type: str = "uuid",
) -> None:
    """Create the identity schema and tables if they do not exist."""
    statements = build_schema_statements(schema_name, key_type)
    async with database_manager.transaction() as conn:
        for statement in statements:
            await conn.execute(statement)
    logger.info(f"Identity schema ensured in '{schema_name}'")
