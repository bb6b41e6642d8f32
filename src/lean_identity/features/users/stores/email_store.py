"""Email capability store."""

from typing import Optional

from ....core.exceptions import InvalidArgumentError
from ....core.shared import CancellationToken
from ..entities import User
from .user_store import UserStore


class UserEmailStore:
    """Email ownership and confirmation on top of an embedded ``UserStore``.

    Changing the email leaves the confirmed flag alone; resetting it is the
    caller's policy.
    """

    def __init__(self, store: UserStore):
        if store is None:
            raise InvalidArgumentError("store")
        self.store = store

    async def get_email(self, user: User, cancellation: Optional[CancellationToken] = None) -> str:
        self.store.check_operation("get_email", cancellation)
        return self.store.require_user(user).email

    async def set_email(
        self, user: User, email: str, cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Set the email and recompute its normalized form."""
        self.store.check_operation("set_email", cancellation)
        user = self.store.require_user(user)
        user.email = email
        user.normalized_email = self.store.normalizer.normalize_email(email)

    async def get_normalized_email(
        self, user: User, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        self.store.check_operation("get_normalized_email", cancellation)
        return self.store.require_user(user).normalized_email

    async def set_normalized_email(
        self, user: User, normalized_email: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self.store.check_operation("set_normalized_email", cancellation)
        self.store.require_user(user).normalized_email = normalized_email

    async def get_email_confirmed(
        self, user: User, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        self.store.check_operation("get_email_confirmed", cancellation)
        return self.store.require_user(user).is_email_confirmed

    async def set_email_confirmed(
        self, user: User, confirmed: bool, cancellation: Optional[CancellationToken] = None
    ) -> None:
        self.store.check_operation("set_email_confirmed", cancellation)
        self.store.require_user(user).is_email_confirmed = confirmed

    async def find_by_email(
        self, normalized_email: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[User]:
        self.store.check_operation("find_by_email", cancellation)
        if normalized_email is None:
            raise InvalidArgumentError("normalized_email")
        context = self.store.context
        return await context.first_or_none(context.users_by_email(normalized_email), cancellation)
