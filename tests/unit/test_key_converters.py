"""Tests for key converters."""

import pytest
from uuid import UUID, uuid4

from lean_identity.config.constants import KeyType
from lean_identity.core.exceptions import InvalidArgumentError, KeyFormatError
from lean_identity.features.users.protocols import KeyConverter
from lean_identity.features.users.services import (
    IntKeyConverter,
    StrKeyConverter,
    UuidKeyConverter,
    get_key_converter,
)


class TestUuidKeyConverter:
    """Test UUID key conversion."""

    def test_round_trip(self):
        converter = UuidKeyConverter()
        key = uuid4()
        assert converter.from_external(converter.to_external(key)) == key

    def test_empty_values_map_to_zero(self):
        converter = UuidKeyConverter()
        assert converter.from_external(None) == UUID(int=0)
        assert converter.from_external("") == UUID(int=0)
        assert converter.to_external(UUID(int=0)) is None
        assert converter.to_external(None) is None

    def test_invalid_value_raises_key_format_error(self):
        with pytest.raises(KeyFormatError) as exc_info:
            UuidKeyConverter().from_external("not-a-uuid")
        assert exc_info.value.key_type == "uuid"

    def test_new_keys_are_uuid_v7_and_unique(self):
        converter = UuidKeyConverter()
        keys = {converter.new_key() for _ in range(50)}
        assert len(keys) == 50
        assert all(key.version == 7 for key in keys)


class TestIntKeyConverter:
    """Test integer key conversion."""

    def test_parse_and_format(self):
        converter = IntKeyConverter()
        assert converter.from_external("42") == 42
        assert converter.from_external(" 7 ") == 7
        assert converter.to_external(42) == "42"

    def test_zero_and_empty(self):
        converter = IntKeyConverter()
        assert converter.from_external(None) == 0
        assert converter.to_external(0) is None
        assert converter.new_key() == 0

    def test_invalid_value(self):
        with pytest.raises(KeyFormatError):
            IntKeyConverter().from_external("abc")


class TestStrKeyConverter:
    """Test string key conversion."""

    def test_passthrough(self):
        converter = StrKeyConverter()
        assert converter.from_external("user-1") == "user-1"
        assert converter.to_external("user-1") == "user-1"

    def test_zero_and_empty(self):
        converter = StrKeyConverter()
        assert converter.from_external(None) == ""
        assert converter.to_external("") is None

    def test_new_key_is_uuid_text(self):
        key = StrKeyConverter().new_key()
        assert UUID(key).version == 7


class TestGetKeyConverter:
    """Test converter resolution from configuration."""

    @pytest.mark.parametrize("key_type, expected", [
        (KeyType.UUID, UuidKeyConverter),
        ("int", IntKeyConverter),
        ("str", StrKeyConverter),
    ])
    def test_resolves_known_types(self, key_type, expected):
        converter = get_key_converter(key_type)
        assert isinstance(converter, expected)
        assert isinstance(converter, KeyConverter)

    def test_unknown_type(self):
        with pytest.raises(InvalidArgumentError):
            get_key_converter("guid")
