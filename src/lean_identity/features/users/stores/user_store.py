"""Base user store: identity CRUD and user name accessors."""

import logging
from typing import Any, List, Optional

from ....core.exceptions import (
    ConcurrencyError,
    ConstraintViolationError,
    InvalidArgumentError,
    StoreDisposedError,
)
from ....core.shared import CancellationToken, raise_if_cancelled
from ....core.value_objects import IdentityResult
from ....utils.masking import mask_identifier
from ..entities import User, UserQuery
from ..protocols import KeyConverter, LookupNormalizer, UserDataContext
from ..services import IdentityErrorDescriber, TrivialLookupNormalizer, UuidKeyConverter

logger = logging.getLogger(__name__)


class UserStore:
    """Persists users through a ``UserDataContext``.

    Only ``create``, ``update``, ``delete`` and ``save_changes`` touch storage;
    the accessors act on the user instance the caller already holds. The
    capability stores embed an instance of this class and reuse its guards.
    """

    def __init__(
        self,
        context: UserDataContext,
        *,
        key_converter: Optional[KeyConverter] = None,
        normalizer: Optional[LookupNormalizer] = None,
        error_describer: Optional[IdentityErrorDescriber] = None,
        auto_save_changes: bool = True,
    ):
        """Initialize the store.

        Args:
            context: Data access collaborator
            key_converter: Maps external id strings to keys (UUID keys by default)
            normalizer: Canonicalizes names and emails (identity by default)
            error_describer: Builds errors for failure results
            auto_save_changes: Save after every create/update/delete; when
                False the caller batches writes and calls ``save_changes``
        """
        if context is None:
            raise InvalidArgumentError("context")
        self.context = context
        self.key_converter = key_converter or UuidKeyConverter()
        self.normalizer = normalizer or TrivialLookupNormalizer()
        self.error_describer = error_describer or IdentityErrorDescriber()
        self.auto_save_changes = auto_save_changes
        self._disposed = False

    # Lifecycle

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def raise_if_disposed(self) -> None:
        if self._disposed:
            raise StoreDisposedError(type(self).__name__)

    def check_operation(self, operation: str, cancellation: Optional[CancellationToken] = None) -> None:
        """Guard run at the start of every store operation."""
        self.raise_if_disposed()
        raise_if_cancelled(cancellation, operation)

    @staticmethod
    def require_user(user: Optional[User]) -> User:
        if user is None:
            raise InvalidArgumentError("user")
        return user

    def dispose(self) -> None:
        """Mark the store as disposed. Further calls raise StoreDisposedError."""
        self._disposed = True

    def close(self) -> None:
        self.dispose()

    async def __aenter__(self) -> "UserStore":
        self.raise_if_disposed()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    # Persistence

    async def save_changes(self, cancellation: Optional[CancellationToken] = None) -> int:
        """Save pending changes regardless of ``auto_save_changes``.

        Unlike create/update/delete, storage errors are raised here, not
        converted to results.
        """
        self.check_operation("save_changes", cancellation)
        return await self.context.save_changes(cancellation)

    async def _persist(
        self, user: User, operation: str, cancellation: Optional[CancellationToken]
    ) -> IdentityResult:
        if not self.auto_save_changes:
            return IdentityResult.success()
        try:
            await self.context.save_changes(cancellation)
        except ConcurrencyError:
            logger.warning(
                f"Concurrency conflict on {operation} of {mask_identifier(user.id, prefix='user')}"
            )
            return IdentityResult.failed(self.error_describer.concurrency_failure())
        except ConstraintViolationError as e:
            logger.warning(
                f"Constraint '{e.constraint_name}' violated on {operation} of "
                f"{mask_identifier(user.id, prefix='user')}"
            )
            return IdentityResult.failed(
                self.error_describer.from_constraint_violation(e, user.user_name, user.email)
            )
        return IdentityResult.success()

    def _fill_normalized_fields(self, user: User) -> None:
        if user.normalized_user_name is None:
            user.normalized_user_name = self.normalizer.normalize_name(user.user_name)
        if user.normalized_email is None:
            user.normalized_email = self.normalizer.normalize_email(user.email)

    async def create(self, user: User, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        """Create ``user``, assigning a key when it does not carry one."""
        self.check_operation("create", cancellation)
        self.require_user(user)

        if user.id is None or user.id == self.key_converter.zero:
            user.assign_key(self.key_converter.new_key())
        self._fill_normalized_fields(user)

        self.context.add(user)
        result = await self._persist(user, "create", cancellation)
        if result.succeeded:
            logger.info(f"Created user {mask_identifier(user.id, prefix='user')}")
        return result

    async def update(self, user: User, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        self.check_operation("update", cancellation)
        self.require_user(user)

        self.context.attach(user)
        self.context.update(user)
        return await self._persist(user, "update", cancellation)

    async def delete(self, user: User, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        self.check_operation("delete", cancellation)
        self.require_user(user)

        self.context.remove(user)
        result = await self._persist(user, "delete", cancellation)
        if result.succeeded:
            logger.info(f"Deleted user {mask_identifier(user.id, prefix='user')}")
        return result

    # Lookups

    async def find_by_id(
        self, user_id: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> Optional[User]:
        """Find a user by external id.

        Raises:
            KeyFormatError: If ``user_id`` cannot be parsed into the key type
        """
        self.check_operation("find_by_id", cancellation)
        key = self.convert_id_from_string(user_id)
        if key == self.key_converter.zero:
            return None
        return await self.context.first_or_none(self.context.users_by_id(key), cancellation)

    async def find_by_name(
        self, normalized_user_name: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[User]:
        self.check_operation("find_by_name", cancellation)
        if normalized_user_name is None:
            raise InvalidArgumentError("normalized_user_name")
        return await self.context.first_or_none(
            self.context.users_by_name(normalized_user_name), cancellation
        )

    @property
    def users(self) -> UserQuery:
        """Lazy query over every user."""
        self.raise_if_disposed()
        return self.context.users()

    async def fetch(
        self, query: UserQuery, cancellation: Optional[CancellationToken] = None
    ) -> List[User]:
        self.check_operation("fetch", cancellation)
        return await self.context.fetch(query, cancellation)

    async def count(
        self, query: UserQuery, cancellation: Optional[CancellationToken] = None
    ) -> int:
        self.check_operation("count", cancellation)
        return await self.context.count(query, cancellation)

    # Accessors

    def convert_id_from_string(self, user_id: Optional[str]) -> Any:
        """Parse an external id; the zero key for None or empty text."""
        return self.key_converter.from_external(user_id)

    def convert_id_to_string(self, key: Any) -> Optional[str]:
        return self.key_converter.to_external(key)

    async def get_user_id(self, user: User, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        self.check_operation("get_user_id", cancellation)
        return self.convert_id_to_string(self.require_user(user).id)

    async def get_user_name(self, user: User, cancellation: Optional[CancellationToken] = None) -> str:
        self.check_operation("get_user_name", cancellation)
        return self.require_user(user).user_name

    async def set_user_name(
        self, user: User, user_name: str, cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Set the user name and recompute its normalized form."""
        self.check_operation("set_user_name", cancellation)
        user = self.require_user(user)
        user.user_name = user_name
        user.normalized_user_name = self.normalizer.normalize_name(user_name)

    async def get_normalized_user_name(
        self, user: User, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        self.check_operation("get_normalized_user_name", cancellation)
        return self.require_user(user).normalized_user_name

    async def set_normalized_user_name(
        self, user: User, normalized_name: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self.check_operation("set_normalized_user_name", cancellation)
        self.require_user(user).normalized_user_name = normalized_name
