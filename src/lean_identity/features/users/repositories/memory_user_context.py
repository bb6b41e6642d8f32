"""In-memory user storage used by tests and ephemeral deployments."""

import copy
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ....config.constants import ColumnLimits, ConstraintKind, ConstraintNames
from ....core.exceptions import (
    ConcurrencyError,
    ConstraintViolationError,
    DataIntegrityError,
)
from ....core.shared import CancellationToken, raise_if_cancelled
from ....utils.masking import mask_identifier
from ..entities import User, UserPrivateSection, UserQuery
from .base import BaseUserDataContext, EntryState, TrackedEntry

logger = logging.getLogger(__name__)

_STRING_LIMITS = {
    "user_name": ColumnLimits.USER_NAME_MAX_LENGTH,
    "normalized_user_name": ColumnLimits.USER_NAME_MAX_LENGTH,
    "email": ColumnLimits.EMAIL_MAX_LENGTH,
    "normalized_email": ColumnLimits.EMAIL_MAX_LENGTH,
}

_SECTION_LIMITS = {
    "password_hash": ColumnLimits.PASSWORD_HASH_MAX_LENGTH,
    "security_stamp": ColumnLimits.SECURITY_STAMP_MAX_LENGTH,
}


@dataclass
class InMemoryUserDatabase:
    """Rows for the users and user_private_sections tables.

    Several contexts may share one database, the same way several connections
    share a real one. Rows are plain dicts; contexts only ever hand out copies.
    """

    users: Dict[Any, Dict[str, Any]] = field(default_factory=dict)
    private_sections: Dict[Any, Dict[str, Any]] = field(default_factory=dict)
    require_unique_email: bool = False
    write_count: int = 0
    _id_sequence: "itertools.count" = field(default_factory=lambda: itertools.count(1), repr=False)

    def next_id(self) -> int:
        return next(self._id_sequence)

    def snapshot(self) -> Tuple[Dict[Any, Dict[str, Any]], Dict[Any, Dict[str, Any]], int]:
        return copy.deepcopy(self.users), copy.deepcopy(self.private_sections), self.write_count

    def restore(self, snapshot: Tuple[Dict[Any, Dict[str, Any]], Dict[Any, Dict[str, Any]], int]) -> None:
        self.users, self.private_sections, self.write_count = snapshot


class InMemoryUserDataContext(BaseUserDataContext):
    """User data context over an ``InMemoryUserDatabase``.

    Enforces what the SQL schema enforces: unique normalized user names,
    column lengths, row-version checks and the private section cascade.
    """

    def __init__(self, database: Optional[InMemoryUserDatabase] = None):
        super().__init__()
        self.database = database if database is not None else InMemoryUserDatabase()

    # Query execution

    def _materialize(self, row: Dict[str, Any], include_private_section: bool) -> User:
        user = User(
            id=row["id"],
            user_name=row["user_name"],
            email=row["email"],
            normalized_user_name=row["normalized_user_name"],
            normalized_email=row["normalized_email"],
            row_version=row["row_version"],
            credentials_loaded=include_private_section,
        )
        section = self.database.private_sections.get(row["id"])
        if include_private_section and section is not None:
            user.private_section = UserPrivateSection(**section)
        return user

    def _select(self, query: UserQuery) -> List[Dict[str, Any]]:
        rows = [row for row in self.database.users.values() if query.matches(row)]
        # Stable sorts applied from the last key to the first give a multi-key order.
        for order in reversed(query.ordering):
            rows.sort(key=lambda row: row[order.field], reverse=order.descending)
        rows = rows[query.offset:]
        if query.limit is not None:
            rows = rows[:query.limit]
        return rows

    async def fetch(
        self, query: UserQuery, cancellation: Optional[CancellationToken] = None
    ) -> List[User]:
        raise_if_cancelled(cancellation, "fetch")
        return [
            self._materialize(row, query.include_private_section)
            for row in self._select(query)
        ]

    async def count(
        self, query: UserQuery, cancellation: Optional[CancellationToken] = None
    ) -> int:
        raise_if_cancelled(cancellation, "count")
        return len(self._select(query))

    # Writes

    def _validate(self, user: User) -> None:
        for field_name, limit in _STRING_LIMITS.items():
            value = getattr(user, field_name)
            if value is None:
                raise DataIntegrityError(field_name, "value is required")
            if len(value) > limit:
                raise DataIntegrityError(field_name, f"value exceeds {limit} characters")
        if user.private_section is not None:
            for field_name, limit in _SECTION_LIMITS.items():
                value = getattr(user.private_section, field_name)
                if value is not None and len(value) > limit:
                    raise DataIntegrityError(field_name, f"value exceeds {limit} characters")

    def _check_unique(self, user: User, key: Any) -> None:
        for other_key, row in self.database.users.items():
            if other_key == key:
                continue
            if row["normalized_user_name"] == user.normalized_user_name:
                raise ConstraintViolationError(
                    ConstraintNames.UNIQUE_NORMALIZED_USER_NAME, ConstraintKind.UNIQUE
                )
            if self.database.require_unique_email and row["normalized_email"] == user.normalized_email:
                raise ConstraintViolationError(
                    ConstraintNames.UNIQUE_NORMALIZED_EMAIL, ConstraintKind.UNIQUE
                )

    def _write_row(self, user: User, key: Any, version: int) -> None:
        self.database.users[key] = {
            "id": key,
            "user_name": user.user_name,
            "normalized_user_name": user.normalized_user_name,
            "email": user.email,
            "normalized_email": user.normalized_email,
            "row_version": version,
        }
        if user.private_section is not None:
            section = user.private_section
            self.database.private_sections[key] = {
                "user_id": key,
                "is_email_confirmed": section.is_email_confirmed,
                "password_hash": section.password_hash,
                "security_stamp": section.security_stamp,
            }

    def _insert(self, entry: TrackedEntry) -> Tuple[User, Any, int]:
        user = entry.user
        self._validate(user)
        key = user.id
        if key is None or key == 0:
            key = self.database.next_id()
        if key in self.database.users:
            raise ConstraintViolationError(ConstraintNames.USERS_PRIMARY_KEY, ConstraintKind.UNIQUE)
        self._check_unique(user, key)
        self._write_row(user, key, 1)
        return user, key, 1

    def _current_row(self, entry: TrackedEntry) -> Dict[str, Any]:
        row = self.database.users.get(entry.user.id)
        if row is None or row["row_version"] != entry.original_version:
            raise ConcurrencyError("User", mask_identifier(entry.user.id, prefix="user"))
        return row

    def _update(self, entry: TrackedEntry) -> Tuple[User, Any, int]:
        user = entry.user
        row = self._current_row(entry)
        self._validate(user)
        self._check_unique(user, user.id)
        version = row["row_version"] + 1
        self._write_row(user, user.id, version)
        return user, user.id, version

    def _delete(self, entry: TrackedEntry) -> None:
        self._current_row(entry)
        del self.database.users[entry.user.id]
        # Cascade to the private section.
        self.database.private_sections.pop(entry.user.id, None)

    async def _apply_changes(self, changes: List[TrackedEntry]) -> List[Tuple[User, Any, int]]:
        snapshot = self.database.snapshot()
        versions = []
        try:
            for entry in changes:
                if entry.state == EntryState.ADDED:
                    versions.append(self._insert(entry))
                elif entry.state == EntryState.MODIFIED:
                    versions.append(self._update(entry))
                elif entry.state == EntryState.DELETED:
                    self._delete(entry)
                self.database.write_count += 1
        except BaseException:
            logger.debug(f"Rolled back {len(changes)} pending user change(s)")
            self.database.restore(snapshot)
            raise
        return versions
