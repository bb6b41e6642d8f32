"""Password capability store."""

from typing import Optional

from ....core.exceptions import InvalidArgumentError
from ....core.shared import CancellationToken
from ..entities import User
from .user_store import UserStore


class UserPasswordStore:
    """Password hash accessors. Nothing is saved until ``update`` is called."""

    def __init__(self, store: UserStore):
        if store is None:
            raise InvalidArgumentError("store")
        self.store = store

    async def get_password_hash(
        self, user: User, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        self.store.check_operation("get_password_hash", cancellation)
        return self.store.require_user(user).password_hash

    async def set_password_hash(
        self, user: User, password_hash: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self.store.check_operation("set_password_hash", cancellation)
        self.store.require_user(user).password_hash = password_hash

    async def has_password(self, user: User, cancellation: Optional[CancellationToken] = None) -> bool:
        self.store.check_operation("has_password", cancellation)
        return bool(self.store.require_user(user).password_hash)
