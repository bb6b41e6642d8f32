"""PostgreSQL user data context built on asyncpg."""

import logging
from typing import Any, List, Optional, Tuple

import asyncpg

from ....config.constants import ConstraintKind, DatabaseSchemas
from ....core.exceptions import (
    ConcurrencyError,
    ConstraintViolationError,
    DatabaseError,
    DataIntegrityError,
    InvalidArgumentError,
    LeanIdentityError,
)
from ....core.shared import CancellationToken, raise_if_cancelled
from ....database.schema import validate_schema_name
from ....utils.masking import mask_identifier
from ..entities import User, UserPrivateSection, UserQuery
from .base import BaseUserDataContext, EntryState, TrackedEntry

logger = logging.getLogger(__name__)

_USER_COLUMNS = (
    "u.id, u.user_name, u.normalized_user_name, u.email, u.normalized_email, u.row_version"
)
_SECTION_COLUMNS = (
    "p.user_id AS section_user_id, p.is_email_confirmed, p.password_hash, p.security_stamp"
)


def translate_database_error(error: asyncpg.PostgresError) -> LeanIdentityError:
    """Map an asyncpg error to the matching lean-identity exception."""
    constraint_name = getattr(error, "constraint_name", None)
    column_name = getattr(error, "column_name", None) or "unknown"

    if isinstance(error, asyncpg.exceptions.UniqueViolationError):
        return ConstraintViolationError(constraint_name, ConstraintKind.UNIQUE, str(error))
    if isinstance(error, asyncpg.exceptions.ForeignKeyViolationError):
        return ConstraintViolationError(constraint_name, ConstraintKind.FOREIGN_KEY, str(error))
    if isinstance(error, asyncpg.exceptions.NotNullViolationError):
        return DataIntegrityError(column_name, "value is required")
    if isinstance(error, asyncpg.exceptions.StringDataRightTruncationError):
        return DataIntegrityError(column_name, "value too long for column")
    if isinstance(error, asyncpg.exceptions.IntegrityConstraintViolationError):
        return ConstraintViolationError(constraint_name, ConstraintKind.OTHER, str(error))
    return DatabaseError(f"Database operation failed: {error}")


class AsyncpgUserDataContext(BaseUserDataContext):
    """User data context over the ``users`` / ``user_private_sections`` tables.

    Reads go through the database manager's pool; ``save_changes`` runs every
    pending change inside one transaction.
    """

    def __init__(self, database_manager, schema_name: str = DatabaseSchemas.DEFAULT):
        """Initialize the context.

        Args:
            database_manager: DatabaseManager providing fetch/transaction
            schema_name: Schema holding the identity tables
        """
        if not database_manager:
            raise InvalidArgumentError("database_manager")
        super().__init__()
        self.database = database_manager
        self.schema_name = validate_schema_name(schema_name)
        self.users_table = f"{self.schema_name}.{DatabaseSchemas.USERS_TABLE}"
        self.sections_table = f"{self.schema_name}.{DatabaseSchemas.PRIVATE_SECTIONS_TABLE}"

    # Query translation

    def _build_where(self, query: UserQuery, args: List[Any]) -> str:
        conditions = []
        for query_filter in query.filters:
            args.append(query_filter.value)
            conditions.append(f"u.{query_filter.field} = ${len(args)}")
        if not conditions:
            return ""
        return " WHERE " + " AND ".join(conditions)

    def build_select(self, query: UserQuery) -> Tuple[str, List[Any]]:
        """Translate a query into SQL and positional arguments."""
        args: List[Any] = []
        if query.include_private_section:
            sql = (
                f"SELECT {_USER_COLUMNS}, {_SECTION_COLUMNS} FROM {self.users_table} u"
                f" LEFT JOIN {self.sections_table} p ON p.user_id = u.id"
            )
        else:
            sql = f"SELECT {_USER_COLUMNS} FROM {self.users_table} u"

        sql += self._build_where(query, args)

        if query.ordering:
            sql += " ORDER BY " + ", ".join(
                f"u.{order.field} {'DESC' if order.descending else 'ASC'}"
                for order in query.ordering
            )
        if query.offset:
            args.append(query.offset)
            sql += f" OFFSET ${len(args)}"
        if query.limit is not None:
            args.append(query.limit)
            sql += f" LIMIT ${len(args)}"
        return sql, args

    def build_count(self, query: UserQuery) -> Tuple[str, List[Any]]:
        """Translate a query into a COUNT over the same page."""
        select_sql, args = self.build_select(query.without_private_section())
        return f"SELECT count(*) FROM ({select_sql}) AS page", args

    def _row_to_user(self, row, include_private_section: bool) -> User:
        user = User(
            id=row["id"],
            user_name=row["user_name"],
            email=row["email"],
            normalized_user_name=row["normalized_user_name"],
            normalized_email=row["normalized_email"],
            row_version=row["row_version"],
            credentials_loaded=include_private_section,
        )
        if include_private_section and row["section_user_id"] is not None:
            user.private_section = UserPrivateSection(
                user_id=row["section_user_id"],
                is_email_confirmed=row["is_email_confirmed"],
                password_hash=row["password_hash"],
                security_stamp=row["security_stamp"],
            )
        return user

    # Query execution

    async def fetch(
        self, query: UserQuery, cancellation: Optional[CancellationToken] = None
    ) -> List[User]:
        raise_if_cancelled(cancellation, "fetch")
        sql, args = self.build_select(query)
        try:
            rows = await self.database.fetch(sql, *args)
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to fetch users from {self.users_table}: {e}")
            raise translate_database_error(e) from e
        return [self._row_to_user(row, query.include_private_section) for row in rows]

    async def count(
        self, query: UserQuery, cancellation: Optional[CancellationToken] = None
    ) -> int:
        raise_if_cancelled(cancellation, "count")
        sql, args = self.build_count(query)
        try:
            return await self.database.fetchval(sql, *args)
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to count users in {self.users_table}: {e}")
            raise translate_database_error(e) from e

    # Writes

    async def _upsert_section(self, conn, user: User, key: Any) -> None:
        section = user.private_section
        if section is None:
            return
        await conn.execute(
            f"""
            INSERT INTO {self.sections_table}
                (user_id, is_email_confirmed, password_hash, security_stamp)
            VALUES ($1, $2, $3, $4)
            ON CONFLICT (user_id) DO UPDATE SET
                is_email_confirmed = EXCLUDED.is_email_confirmed,
                password_hash = EXCLUDED.password_hash,
                security_stamp = EXCLUDED.security_stamp
            """,
            key,
            section.is_email_confirmed,
            section.password_hash,
            section.security_stamp,
        )

    async def _insert(self, conn, user: User) -> Tuple[User, Any, int]:
        values = (user.user_name, user.normalized_user_name, user.email, user.normalized_email)
        if user.id is None or user.id == 0:
            key = await conn.fetchval(
                f"""
                INSERT INTO {self.users_table}
                    (user_name, normalized_user_name, email, normalized_email, row_version)
                VALUES ($1, $2, $3, $4, 1)
                RETURNING id
                """,
                *values,
            )
        else:
            key = await conn.fetchval(
                f"""
                INSERT INTO {self.users_table}
                    (id, user_name, normalized_user_name, email, normalized_email, row_version)
                VALUES ($1, $2, $3, $4, $5, 1)
                RETURNING id
                """,
                user.id,
                *values,
            )
        await self._upsert_section(conn, user, key)
        return user, key, 1

    async def _update(self, conn, entry: TrackedEntry) -> Tuple[User, Any, int]:
        user = entry.user
        # Every save bumps row_version, credential-only edits included.
        version = await conn.fetchval(
            f"""
            UPDATE {self.users_table} SET
                user_name = $3,
                normalized_user_name = $4,
                email = $5,
                normalized_email = $6,
                row_version = row_version + 1
            WHERE id = $1 AND row_version = $2
            RETURNING row_version
            """,
            user.id,
            entry.original_version,
            user.user_name,
            user.normalized_user_name,
            user.email,
            user.normalized_email,
        )
        if version is None:
            raise ConcurrencyError("User", mask_identifier(user.id, prefix="user"))
        await self._upsert_section(conn, user, user.id)
        return user, user.id, version

    async def _delete(self, conn, entry: TrackedEntry) -> None:
        # The private section goes with it through ON DELETE CASCADE.
        deleted = await conn.fetchval(
            f"""
            DELETE FROM {self.users_table}
            WHERE id = $1 AND row_version = $2
            RETURNING id
            """,
            entry.user.id,
            entry.original_version,
        )
        if deleted is None:
            raise ConcurrencyError("User", mask_identifier(entry.user.id, prefix="user"))

    async def _apply_changes(self, changes: List[TrackedEntry]) -> List[Tuple[User, Any, int]]:
        versions = []
        try:
            async with self.database.transaction() as conn:
                for entry in changes:
                    if entry.state == EntryState.ADDED:
                        versions.append(await self._insert(conn, entry.user))
                    elif entry.state == EntryState.MODIFIED:
                        versions.append(await self._update(conn, entry))
                    elif entry.state == EntryState.DELETED:
                        await self._delete(conn, entry)
        except asyncpg.PostgresError as e:
            logger.warning(f"Saving user changes failed in {self.users_table}: {e}")
            raise translate_database_error(e) from e
        return versions
