"""Ready-made compositions of the capability stores.

Each composed store owns one ``UserStore`` and one adapter per capability,
all sharing that base, and forwards every capability method explicitly.
Applications that need a different subset can build their own composition
from the same adapters.
"""

from typing import List, Optional

from ....core.shared import CancellationToken
from ....core.value_objects import IdentityResult
from ..entities import User, UserQuery
from ..protocols import KeyConverter, LookupNormalizer, UserDataContext
from ..services import IdentityErrorDescriber
from .email_store import UserEmailStore
from .password_store import UserPasswordStore
from .queryable_store import QueryableUserStore
from .security_stamp_store import UserSecurityStampStore
from .user_store import UserStore


class StandardUserStore:
    """Base, email, password and queryable capabilities."""

    def __init__(
        self,
        context: UserDataContext,
        *,
        key_converter: Optional[KeyConverter] = None,
        normalizer: Optional[LookupNormalizer] = None,
        error_describer: Optional[IdentityErrorDescriber] = None,
        auto_save_changes: bool = True,
    ):
        self.base = UserStore(
            context,
            key_converter=key_converter,
            normalizer=normalizer,
            error_describer=error_describer,
            auto_save_changes=auto_save_changes,
        )
        self.emails = UserEmailStore(self.base)
        self.passwords = UserPasswordStore(self.base)
        self.queryable = QueryableUserStore(self.base)

    # Lifecycle and settings

    @property
    def context(self) -> UserDataContext:
        return self.base.context

    @property
    def auto_save_changes(self) -> bool:
        return self.base.auto_save_changes

    @auto_save_changes.setter
    def auto_save_changes(self, value: bool) -> None:
        self.base.auto_save_changes = value

    @property
    def is_disposed(self) -> bool:
        return self.base.is_disposed

    def dispose(self) -> None:
        self.base.dispose()

    def close(self) -> None:
        self.base.dispose()

    async def __aenter__(self):
        self.base.raise_if_disposed()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.base.dispose()

    async def save_changes(self, cancellation: Optional[CancellationToken] = None) -> int:
        return await self.base.save_changes(cancellation)

    # Base

    async def create(self, user: User, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        return await self.base.create(user, cancellation)

    async def update(self, user: User, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        return await self.base.update(user, cancellation)

    async def delete(self, user: User, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        return await self.base.delete(user, cancellation)

    async def find_by_id(self, user_id: Optional[str], cancellation: Optional[CancellationToken] = None) -> Optional[User]:
        return await self.base.find_by_id(user_id, cancellation)

    async def find_by_name(self, normalized_user_name: str, cancellation: Optional[CancellationToken] = None) -> Optional[User]:
        return await self.base.find_by_name(normalized_user_name, cancellation)

    async def get_user_id(self, user: User, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        return await self.base.get_user_id(user, cancellation)

    async def get_user_name(self, user: User, cancellation: Optional[CancellationToken] = None) -> str:
        return await self.base.get_user_name(user, cancellation)

    async def set_user_name(self, user: User, user_name: str, cancellation: Optional[CancellationToken] = None) -> None:
        await self.base.set_user_name(user, user_name, cancellation)

    async def get_normalized_user_name(self, user: User, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        return await self.base.get_normalized_user_name(user, cancellation)

    async def set_normalized_user_name(self, user: User, normalized_name: Optional[str], cancellation: Optional[CancellationToken] = None) -> None:
        await self.base.set_normalized_user_name(user, normalized_name, cancellation)

    # Email

    async def get_email(self, user: User, cancellation: Optional[CancellationToken] = None) -> str:
        return await self.emails.get_email(user, cancellation)

    async def set_email(self, user: User, email: str, cancellation: Optional[CancellationToken] = None) -> None:
        await self.emails.set_email(user, email, cancellation)

    async def get_normalized_email(self, user: User, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        return await self.emails.get_normalized_email(user, cancellation)

    async def set_normalized_email(self, user: User, normalized_email: Optional[str], cancellation: Optional[CancellationToken] = None) -> None:
        await self.emails.set_normalized_email(user, normalized_email, cancellation)

    async def get_email_confirmed(self, user: User, cancellation: Optional[CancellationToken] = None) -> bool:
        return await self.emails.get_email_confirmed(user, cancellation)

    async def set_email_confirmed(self, user: User, confirmed: bool, cancellation: Optional[CancellationToken] = None) -> None:
        await self.emails.set_email_confirmed(user, confirmed, cancellation)

    async def find_by_email(self, normalized_email: str, cancellation: Optional[CancellationToken] = None) -> Optional[User]:
        return await self.emails.find_by_email(normalized_email, cancellation)

    # Password

    async def get_password_hash(self, user: User, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        return await self.passwords.get_password_hash(user, cancellation)

    async def set_password_hash(self, user: User, password_hash: Optional[str], cancellation: Optional[CancellationToken] = None) -> None:
        await self.passwords.set_password_hash(user, password_hash, cancellation)

    async def has_password(self, user: User, cancellation: Optional[CancellationToken] = None) -> bool:
        return await self.passwords.has_password(user, cancellation)

    # Queryable

    @property
    def users(self) -> UserQuery:
        return self.queryable.users

    async def list_users(self, query: Optional[UserQuery] = None, cancellation: Optional[CancellationToken] = None) -> List[User]:
        return await self.queryable.list_users(query, cancellation)

    async def count_users(self, query: Optional[UserQuery] = None, cancellation: Optional[CancellationToken] = None) -> int:
        return await self.queryable.count_users(query, cancellation)


class StandardWithSecurityStampUserStore(StandardUserStore):
    """Standard capabilities plus the security stamp."""

    def __init__(self, context: UserDataContext, **options):
        super().__init__(context, **options)
        self.security_stamps = UserSecurityStampStore(self.base)

    async def get_security_stamp(self, user: User, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        return await self.security_stamps.get_security_stamp(user, cancellation)

    async def set_security_stamp(self, user: User, stamp: Optional[str], cancellation: Optional[CancellationToken] = None) -> None:
        await self.security_stamps.set_security_stamp(user, stamp, cancellation)
