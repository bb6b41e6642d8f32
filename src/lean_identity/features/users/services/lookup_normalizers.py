"""Lookup normalizers for user names and emails."""

import unicodedata
from typing import Dict, Optional, Type, Union

from ....config.constants import LookupNormalizerType
from ....core.exceptions import InvalidArgumentError
from ..protocols import LookupNormalizer


class TrivialLookupNormalizer:
    """Identity normalizer.

    Leaves case-insensitivity to the storage collation.
    """

    def normalize_name(self, name: Optional[str]) -> Optional[str]:
        return name

    def normalize_email(self, email: Optional[str]) -> Optional[str]:
        return email


class UpperInvariantLookupNormalizer:
    """NFKC-normalized, stripped, upper-cased lookup keys."""

    def _normalize(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        upper = unicodedata.normalize("NFKC", value).strip().upper()
        return unicodedata.normalize("NFKC", upper)

    def normalize_name(self, name: Optional[str]) -> Optional[str]:
        return self._normalize(name)

    def normalize_email(self, email: Optional[str]) -> Optional[str]:
        return self._normalize(email)


class CaseFoldLookupNormalizer:
    """NFKC-normalized, stripped, case-folded lookup keys.

    Folding can change NFKC form (e.g. U+1E9E), so the result is
    re-normalized to keep the function idempotent.
    """

    def _normalize(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        folded = unicodedata.normalize("NFKC", value).strip().casefold()
        return unicodedata.normalize("NFKC", folded)

    def normalize_name(self, name: Optional[str]) -> Optional[str]:
        return self._normalize(name)

    def normalize_email(self, email: Optional[str]) -> Optional[str]:
        return self._normalize(email)


_NORMALIZERS: Dict[LookupNormalizerType, Type] = {
    LookupNormalizerType.TRIVIAL: TrivialLookupNormalizer,
    LookupNormalizerType.UPPER: UpperInvariantLookupNormalizer,
    LookupNormalizerType.CASEFOLD: CaseFoldLookupNormalizer,
}


def get_lookup_normalizer(
    normalizer_type: Union[LookupNormalizerType, str] = LookupNormalizerType.TRIVIAL,
) -> LookupNormalizer:
    """Resolve a lookup normalizer from its configured name."""
    try:
        return _NORMALIZERS[LookupNormalizerType(normalizer_type)]()
    except ValueError as e:
        raise InvalidArgumentError(
            "normalizer_type", f"unsupported lookup normalizer '{normalizer_type}'"
        ) from e
