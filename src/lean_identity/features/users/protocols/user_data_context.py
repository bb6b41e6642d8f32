"""Data access protocol consumed by the user stores."""

from typing import Any, List, Optional, Protocol, runtime_checkable

from ....core.shared import CancellationToken
from ..entities import User, UserQuery


@runtime_checkable
class UserDataContext(Protocol):
    """Protocol for user storage.

    Query methods return ``UserQuery`` values; nothing is read until one of
    the execution methods is awaited. Write primitives only register changes
    on the pending unit of work, which ``save_changes`` applies atomically.
    """

    def users(self) -> UserQuery:
        """All users with their private section joined."""
        ...

    def users_by_id(self, key: Any) -> UserQuery:
        ...

    def users_by_name(self, normalized_user_name: str) -> UserQuery:
        ...

    def users_by_email(self, normalized_email: str) -> UserQuery:
        ...

    async def fetch(
        self, query: UserQuery, cancellation: Optional[CancellationToken] = None
    ) -> List[User]:
        """Execute a query and materialize every matching user."""
        ...

    async def first_or_none(
        self, query: UserQuery, cancellation: Optional[CancellationToken] = None
    ) -> Optional[User]:
        """Execute a query and return its first user, or ``None``."""
        ...

    async def count(
        self, query: UserQuery, cancellation: Optional[CancellationToken] = None
    ) -> int:
        ...

    def add(self, user: User) -> None:
        """Register a new user for insertion."""
        ...

    def attach(self, user: User) -> None:
        """Start tracking a user loaded elsewhere."""
        ...

    def update(self, user: User) -> None:
        """Mark a tracked user as modified."""
        ...

    def remove(self, user: User) -> None:
        """Register a user (and its private section) for deletion."""
        ...

    async def save_changes(self, cancellation: Optional[CancellationToken] = None) -> int:
        """Apply pending changes atomically.

        Returns:
            Number of users written

        Raises:
            ConcurrencyError: If a user changed since it was read
            ConstraintViolationError: On uniqueness or foreign-key violations
            DataIntegrityError: If a value does not fit its column
        """
        ...

    def discard_changes(self) -> None:
        """Drop every pending change."""
        ...
