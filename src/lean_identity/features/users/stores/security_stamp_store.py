"""Security stamp capability store."""

from typing import Optional

from ....core.exceptions import InvalidArgumentError
from ....core.shared import CancellationToken
from ..entities import User
from .user_store import UserStore


class UserSecurityStampStore:
    """Security stamp accessors. When to rotate the stamp is up to the caller."""

    def __init__(self, store: UserStore):
        if store is None:
            raise InvalidArgumentError("store")
        self.store = store

    async def get_security_stamp(
        self, user: User, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        self.store.check_operation("get_security_stamp", cancellation)
        return self.store.require_user(user).security_stamp

    async def set_security_stamp(
        self, user: User, stamp: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self.store.check_operation("set_security_stamp", cancellation)
        self.store.require_user(user).security_stamp = stamp
