"""Key converters for the supported identity key types."""

from typing import Dict, Optional, Type, Union
from uuid import UUID

from ....config.constants import KeyType
from ....core.exceptions import InvalidArgumentError, KeyFormatError
from ....utils.uuid import generate_uuid_v7
from ..protocols import KeyConverter


class UuidKeyConverter:
    """UUID keys. New keys are time-ordered UUIDv7 values."""

    key_type = KeyType.UUID
    zero = UUID(int=0)

    def from_external(self, value: Optional[str]) -> UUID:
        if not value:
            return self.zero
        try:
            return UUID(value)
        except (ValueError, TypeError, AttributeError) as e:
            raise KeyFormatError(str(value), "uuid", str(e)) from e

    def to_external(self, key: Optional[UUID]) -> Optional[str]:
        if key is None or key == self.zero:
            return None
        return str(key)

    def new_key(self) -> UUID:
        return generate_uuid_v7()


class IntKeyConverter:
    """Integer keys assigned by the database (identity column)."""

    key_type = KeyType.INT
    zero = 0

    def from_external(self, value: Optional[str]) -> int:
        if not value:
            return self.zero
        try:
            return int(value.strip())
        except (ValueError, TypeError, AttributeError) as e:
            raise KeyFormatError(str(value), "int", str(e)) from e

    def to_external(self, key: Optional[int]) -> Optional[str]:
        if key is None or key == self.zero:
            return None
        return str(key)

    def new_key(self) -> int:
        # Zero leaves assignment to the identity column.
        return self.zero


class StrKeyConverter:
    """Opaque string keys. New keys are UUIDv7 text."""

    key_type = KeyType.STR
    zero = ""

    def from_external(self, value: Optional[str]) -> str:
        if value is None:
            return self.zero
        if not isinstance(value, str):
            raise KeyFormatError(str(value), "str", "expected text")
        return value

    def to_external(self, key: Optional[str]) -> Optional[str]:
        if not key:
            return None
        return key

    def new_key(self) -> str:
        return str(generate_uuid_v7())


_CONVERTERS: Dict[KeyType, Type] = {
    KeyType.UUID: UuidKeyConverter,
    KeyType.INT: IntKeyConverter,
    KeyType.STR: StrKeyConverter,
}


def get_key_converter(key_type: Union[KeyType, str] = KeyType.UUID) -> KeyConverter:
    """Resolve a key converter from its configured name."""
    try:
        return _CONVERTERS[KeyType(key_type)]()
    except ValueError as e:
        raise InvalidArgumentError("key_type", f"unsupported key type '{key_type}'") from e
