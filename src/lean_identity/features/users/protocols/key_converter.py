"""Identity key conversion protocol contract."""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyConverter(Protocol):
    """Protocol for mapping between external id strings and typed keys.

    Store method signatures always use strings for ids, so the key type can
    be a UUID, an integer or plain text without changing them.
    """

    @property
    def zero(self) -> Any:
        """The key type's zero value, meaning "no key"."""
        ...

    def from_external(self, value: Optional[str]) -> Any:
        """Parse an external id.

        Returns:
            The typed key, or ``zero`` for ``None`` or an empty string

        Raises:
            KeyFormatError: If the text cannot be parsed
        """
        ...

    def to_external(self, key: Any) -> Optional[str]:
        """Render a key as text, or ``None`` for the zero key."""
        ...

    def new_key(self) -> Any:
        """Generate a key for a record about to be created.

        May return ``zero`` when the storage engine assigns keys itself.
        """
        ...
