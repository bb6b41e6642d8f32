"""User domain entities.

The public profile (``User``) and the private credential record
(``UserPrivateSection``) are stored separately and joined 1:1 on the user's
key. Callers only ever see ``User``; the credential fields are exposed as
properties that read through to the private section.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Optional

from ....core.exceptions import InvalidArgumentError


@dataclass
class UserPrivateSection:
    """Credential data owned by exactly one user and keyed by the same id."""

    user_id: Any
    is_email_confirmed: bool = False
    password_hash: Optional[str] = None
    security_stamp: Optional[str] = None


@dataclass
class User:
    """User identity record.

    ``row_version`` belongs to storage: collaborators set it when a record is
    loaded or saved and use it to detect concurrent writes. Zero means the
    record has never been persisted. ``credentials_loaded`` is False when the
    record was fetched without its private section; reading or writing a
    credential field then raises ``InvalidArgumentError``.
    """

    id: Any = None
    user_name: str = ""
    email: str = ""
    normalized_user_name: Optional[str] = None
    normalized_email: Optional[str] = None
    private_section: Optional[UserPrivateSection] = field(default=None, repr=False)
    row_version: int = field(default=0, compare=False)
    credentials_loaded: bool = field(default=True, compare=False, repr=False)

    def _require_credentials(self) -> None:
        if not self.credentials_loaded:
            raise InvalidArgumentError(
                "user", "credentials were not loaded; fetch the user with its private section"
            )

    def _get_private_section(self) -> UserPrivateSection:
        """Get the private section, creating it on first credential write."""
        self._require_credentials()
        if self.private_section is None:
            self.private_section = UserPrivateSection(user_id=self.id)
        return self.private_section

    @property
    def has_private_section(self) -> bool:
        return self.private_section is not None

    @property
    def is_email_confirmed(self) -> bool:
        self._require_credentials()
        if self.private_section is None:
            return False
        return self.private_section.is_email_confirmed

    @is_email_confirmed.setter
    def is_email_confirmed(self, value: bool) -> None:
        self._get_private_section().is_email_confirmed = value

    @property
    def password_hash(self) -> Optional[str]:
        self._require_credentials()
        if self.private_section is None:
            return None
        return self.private_section.password_hash

    @password_hash.setter
    def password_hash(self, value: Optional[str]) -> None:
        self._get_private_section().password_hash = value

    @property
    def security_stamp(self) -> Optional[str]:
        self._require_credentials()
        if self.private_section is None:
            return None
        return self.private_section.security_stamp

    @security_stamp.setter
    def security_stamp(self, value: Optional[str]) -> None:
        self._get_private_section().security_stamp = value

    def assign_key(self, key: Any) -> None:
        """Assign the user's key. Keys are immutable once assigned."""
        if self.row_version > 0 and key != self.id:
            raise ValueError("User key cannot be reassigned after creation")
        self.id = key
        if self.private_section is not None:
            self.private_section.user_id = key

    def detached_copy(self) -> "User":
        """Return an independent copy sharing no mutable state."""
        return copy.deepcopy(self)
