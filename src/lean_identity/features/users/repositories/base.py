"""Unit-of-work bookkeeping shared by the user data contexts."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from ....core.exceptions import InvalidArgumentError
from ....core.shared import CancellationToken, raise_if_cancelled
from ..entities import User, UserQuery

logger = logging.getLogger(__name__)


class EntryState(str, Enum):
    """Tracking state of a user in the pending unit of work."""
    UNCHANGED = "unchanged"
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass
class TrackedEntry:
    """A user registered with the unit of work."""
    user: User
    state: EntryState
    original_version: int


class BaseUserDataContext(ABC):
    """Query factories and change tracking for user data contexts.

    Subclasses execute queries and apply the pending changes against their
    storage. Tracking is by object identity: the same ``User`` instance must
    be passed to ``attach``/``update``/``remove``.
    """

    def __init__(self) -> None:
        self._entries: List[TrackedEntry] = []

    # Query factories

    def users(self) -> UserQuery:
        return UserQuery()

    def users_by_id(self, key: Any) -> UserQuery:
        return self.users().where_id(key)

    def users_by_name(self, normalized_user_name: str) -> UserQuery:
        return self.users().where_normalized_user_name(normalized_user_name)

    def users_by_email(self, normalized_email: str) -> UserQuery:
        return self.users().where_normalized_email(normalized_email)

    # Query execution

    @abstractmethod
    async def fetch(
        self, query: UserQuery, cancellation: Optional[CancellationToken] = None
    ) -> List[User]:
        ...

    @abstractmethod
    async def count(
        self, query: UserQuery, cancellation: Optional[CancellationToken] = None
    ) -> int:
        ...

    async def first_or_none(
        self, query: UserQuery, cancellation: Optional[CancellationToken] = None
    ) -> Optional[User]:
        users = await self.fetch(query.take(1), cancellation)
        return users[0] if users else None

    # Change tracking

    def _find_entry(self, user: User) -> Optional[TrackedEntry]:
        for entry in self._entries:
            if entry.user is user:
                return entry
        return None

    def _require_user(self, user: Optional[User]) -> User:
        if user is None:
            raise InvalidArgumentError("user")
        return user

    def add(self, user: User) -> None:
        user = self._require_user(user)
        entry = self._find_entry(user)
        if entry is None:
            self._entries.append(TrackedEntry(user, EntryState.ADDED, 0))
        elif entry.state == EntryState.DELETED:
            entry.state = EntryState.MODIFIED

    def attach(self, user: User) -> None:
        user = self._require_user(user)
        if self._find_entry(user) is None:
            self._entries.append(TrackedEntry(user, EntryState.UNCHANGED, user.row_version))

    def update(self, user: User) -> None:
        user = self._require_user(user)
        entry = self._find_entry(user)
        if entry is None:
            self._entries.append(TrackedEntry(user, EntryState.MODIFIED, user.row_version))
        elif entry.state == EntryState.UNCHANGED:
            entry.state = EntryState.MODIFIED

    def remove(self, user: User) -> None:
        user = self._require_user(user)
        entry = self._find_entry(user)
        if entry is None:
            self._entries.append(TrackedEntry(user, EntryState.DELETED, user.row_version))
        elif entry.state == EntryState.ADDED:
            # Never persisted, nothing to delete.
            self._entries.remove(entry)
        else:
            entry.state = EntryState.DELETED

    @property
    def has_changes(self) -> bool:
        return any(entry.state != EntryState.UNCHANGED for entry in self._entries)

    def discard_changes(self) -> None:
        self._entries.clear()

    async def save_changes(self, cancellation: Optional[CancellationToken] = None) -> int:
        """Apply pending changes atomically.

        The pending unit of work is cleared whether the save succeeds or not;
        row versions on the entities only move after a successful save.
        """
        raise_if_cancelled(cancellation, "save_changes")
        changes = [entry for entry in self._entries if entry.state != EntryState.UNCHANGED]
        if not changes:
            self._entries.clear()
            return 0

        try:
            versions = await self._apply_changes(changes)
        finally:
            self._entries.clear()

        for user, key, version in versions:
            if key != user.id:
                user.assign_key(key)
            user.row_version = version
        logger.debug(f"Saved {len(changes)} user change(s)")
        return len(changes)

    @abstractmethod
    async def _apply_changes(self, changes: List[TrackedEntry]) -> List[Tuple[User, Any, int]]:
        """Write ``changes`` atomically.

        Returns:
            ``(user, key, row_version)`` for every added or modified user;
            the key differs from ``user.id`` only when storage assigned it
        """
        ...
