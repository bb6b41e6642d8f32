"""Capability store protocol contracts.

Each protocol is independently satisfiable. An application depends on just
the capabilities it uses and receives a store that implements at least those.
"""

from typing import List, Optional, Protocol, runtime_checkable

from ....core.shared import CancellationToken
from ....core.value_objects import IdentityResult
from ..entities import User, UserQuery


@runtime_checkable
class UserStoreProtocol(Protocol):
    """Identity CRUD and name accessors."""

    async def create(self, user: User, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        ...

    async def update(self, user: User, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        ...

    async def delete(self, user: User, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        ...

    async def find_by_id(self, user_id: Optional[str], cancellation: Optional[CancellationToken] = None) -> Optional[User]:
        ...

    async def find_by_name(self, normalized_user_name: str, cancellation: Optional[CancellationToken] = None) -> Optional[User]:
        ...

    async def get_user_id(self, user: User, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        ...

    async def get_user_name(self, user: User, cancellation: Optional[CancellationToken] = None) -> str:
        ...

    async def set_user_name(self, user: User, user_name: str, cancellation: Optional[CancellationToken] = None) -> None:
        ...

    async def get_normalized_user_name(self, user: User, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        ...

    async def set_normalized_user_name(self, user: User, normalized_name: Optional[str], cancellation: Optional[CancellationToken] = None) -> None:
        ...


@runtime_checkable
class UserEmailStoreProtocol(Protocol):
    """Email ownership and confirmation."""

    async def get_email(self, user: User, cancellation: Optional[CancellationToken] = None) -> str:
        ...

    async def set_email(self, user: User, email: str, cancellation: Optional[CancellationToken] = None) -> None:
        ...

    async def get_normalized_email(self, user: User, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        ...

    async def set_normalized_email(self, user: User, normalized_email: Optional[str], cancellation: Optional[CancellationToken] = None) -> None:
        ...

    async def get_email_confirmed(self, user: User, cancellation: Optional[CancellationToken] = None) -> bool:
        ...

    async def set_email_confirmed(self, user: User, confirmed: bool, cancellation: Optional[CancellationToken] = None) -> None:
        ...

    async def find_by_email(self, normalized_email: str, cancellation: Optional[CancellationToken] = None) -> Optional[User]:
        ...


@runtime_checkable
class UserPasswordStoreProtocol(Protocol):
    """Password hash storage."""

    async def get_password_hash(self, user: User, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        ...

    async def set_password_hash(self, user: User, password_hash: Optional[str], cancellation: Optional[CancellationToken] = None) -> None:
        ...

    async def has_password(self, user: User, cancellation: Optional[CancellationToken] = None) -> bool:
        ...


@runtime_checkable
class UserSecurityStampStoreProtocol(Protocol):
    """Security stamp storage."""

    async def get_security_stamp(self, user: User, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        ...

    async def set_security_stamp(self, user: User, stamp: Optional[str], cancellation: Optional[CancellationToken] = None) -> None:
        ...


@runtime_checkable
class QueryableUserStoreProtocol(Protocol):
    """Enumeration of users for administrative listings."""

    @property
    def users(self) -> UserQuery:
        ...

    async def list_users(self, query: Optional[UserQuery] = None, cancellation: Optional[CancellationToken] = None) -> List[User]:
        ...

    async def count_users(self, query: Optional[UserQuery] = None, cancellation: Optional[CancellationToken] = None) -> int:
        ...
