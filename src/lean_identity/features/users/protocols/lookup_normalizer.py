"""Lookup normalizer protocol contract."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class LookupNormalizer(Protocol):
    """Protocol for canonicalizing names and emails used as lookup keys.

    Implementations must be pure, deterministic and idempotent.
    """

    def normalize_name(self, name: Optional[str]) -> Optional[str]:
        ...

    def normalize_email(self, email: Optional[str]) -> Optional[str]:
        ...
