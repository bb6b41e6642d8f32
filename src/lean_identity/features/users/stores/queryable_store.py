"""Queryable capability store."""

from typing import List, Optional

from ....core.exceptions import InvalidArgumentError
from ....core.shared import CancellationToken
from ..entities import User, UserQuery
from .user_store import UserStore


class QueryableUserStore:
    """Exposes the lazy user query for administrative listings.

    Paging and filtering are whatever the query value and the data context
    provide; this store adds none of its own.
    """

    def __init__(self, store: UserStore):
        if store is None:
            raise InvalidArgumentError("store")
        self.store = store

    @property
    def users(self) -> UserQuery:
        return self.store.users

    async def list_users(
        self, query: Optional[UserQuery] = None, cancellation: Optional[CancellationToken] = None
    ) -> List[User]:
        """Execute ``query`` (all users when omitted)."""
        return await self.store.fetch(query if query is not None else self.users, cancellation)

    async def count_users(
        self, query: Optional[UserQuery] = None, cancellation: Optional[CancellationToken] = None
    ) -> int:
        return await self.store.count(query if query is not None else self.users, cancellation)
