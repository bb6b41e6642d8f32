"""User feature services."""

from .key_converters import (
    UuidKeyConverter,
    IntKeyConverter,
    StrKeyConverter,
    get_key_converter,
)
from .lookup_normalizers import (
    TrivialLookupNormalizer,
    UpperInvariantLookupNormalizer,
    CaseFoldLookupNormalizer,
    get_lookup_normalizer,
)
from .error_describer import IdentityErrorDescriber

__all__ = [
    "UuidKeyConverter",
    "IntKeyConverter",
    "StrKeyConverter",
    "get_key_converter",
    "TrivialLookupNormalizer",
    "UpperInvariantLookupNormalizer",
    "CaseFoldLookupNormalizer",
    "get_lookup_normalizer",
    "IdentityErrorDescriber",
]
