"""Tests for the base user store over the in-memory context."""

import pytest
from uuid import UUID

from lean_identity.core.exceptions import (
    ConstraintViolationError,
    DataIntegrityError,
    InvalidArgumentError,
    KeyFormatError,
    OperationCancelledError,
    StoreDisposedError,
)
from lean_identity.core.shared import CancellationToken
from lean_identity.features.users.entities import User
from lean_identity.features.users.protocols import UserStoreProtocol
from lean_identity.features.users.services import IntKeyConverter, StrKeyConverter
from lean_identity.features.users.stores import UserStore


class TestUserStoreCreate:
    """Test creating users."""

    @pytest.mark.asyncio
    async def test_create_assigns_key_and_normalizes(self, user_store, sample_user):
        result = await user_store.create(sample_user)

        assert result.succeeded
        assert isinstance(sample_user.id, UUID)
        assert sample_user.id.version == 7
        assert sample_user.row_version == 1
        assert sample_user.normalized_user_name == "alice"
        assert sample_user.normalized_email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_create_keeps_supplied_normalized_values(self, user_store):
        user = User(user_name="Alice", email="a@x", normalized_user_name="custom")
        await user_store.create(user)
        assert user.normalized_user_name == "custom"

    @pytest.mark.asyncio
    async def test_create_none_raises(self, user_store, memory_database):
        with pytest.raises(InvalidArgumentError):
            await user_store.create(None)
        assert memory_database.write_count == 0

    @pytest.mark.asyncio
    async def test_duplicate_user_name_is_failure_result(self, user_store):
        assert (await user_store.create(User(user_name="alice", email="a@x"))).succeeded

        result = await user_store.create(User(user_name="ALICE", email="b@x"))

        assert not result.succeeded
        assert result.error_codes == ("DuplicateUserName",)
        assert "ALICE" in result.errors[0].description

    @pytest.mark.asyncio
    async def test_duplicate_email_allowed_by_default(self, user_store):
        assert (await user_store.create(User(user_name="alice", email="same@x"))).succeeded
        assert (await user_store.create(User(user_name="bob", email="same@x"))).succeeded

    @pytest.mark.asyncio
    async def test_duplicate_email_when_required_unique(self, user_store, memory_database):
        memory_database.require_unique_email = True
        await user_store.create(User(user_name="alice", email="same@x"))

        result = await user_store.create(User(user_name="bob", email="SAME@x"))

        assert result.error_codes == ("DuplicateEmail",)

    @pytest.mark.asyncio
    async def test_too_long_value_raises(self, user_store):
        with pytest.raises(DataIntegrityError) as exc_info:
            await user_store.create(User(user_name="a" * 257, email="a@x"))
        assert exc_info.value.field == "user_name"

    @pytest.mark.asyncio
    async def test_int_keys_assigned_by_storage(self, memory_context):
        store = UserStore(memory_context, key_converter=IntKeyConverter())
        first, second = User(user_name="a", email="a@x"), User(user_name="b", email="b@x")

        await store.create(first)
        await store.create(second)

        assert (first.id, second.id) == (1, 2)
        assert await store.get_user_id(first) == "1"
        assert (await store.find_by_id("2")).user_name == "b"

    @pytest.mark.asyncio
    async def test_str_keys(self, memory_context):
        store = UserStore(memory_context, key_converter=StrKeyConverter())
        user = User(id="alice-key", user_name="alice", email="a@x")

        await store.create(user)

        assert user.id == "alice-key"
        assert (await store.find_by_id("alice-key")).id == "alice-key"


class TestUserStoreLookups:
    """Test finding users."""

    @pytest.mark.asyncio
    async def test_find_by_id_round_trip(self, user_store, sample_user):
        await user_store.create(sample_user)
        user_id = await user_store.get_user_id(sample_user)

        found = await user_store.find_by_id(user_id)

        assert found == sample_user
        assert found is not sample_user
        assert found.row_version == 1

    @pytest.mark.asyncio
    async def test_id_conversion_uses_configured_key_type(self, memory_context):
        store = UserStore(memory_context, key_converter=IntKeyConverter())
        user = User(user_name="alice", email="a@x")
        await store.create(user)

        assert store.convert_id_from_string("1") == 1
        assert store.convert_id_from_string("") == 0
        assert store.convert_id_to_string(0) is None
        assert await store.get_user_id(user) == store.convert_id_to_string(user.id) == "1"
        with pytest.raises(KeyFormatError):
            await store.find_by_id("one")

    @pytest.mark.asyncio
    async def test_find_by_id_missing_or_empty(self, user_store):
        assert await user_store.find_by_id(None) is None
        assert await user_store.find_by_id("") is None
        assert await user_store.find_by_id("0190a8f0-0000-7000-8000-000000000000") is None

    @pytest.mark.asyncio
    async def test_find_by_id_malformed(self, user_store):
        with pytest.raises(KeyFormatError):
            await user_store.find_by_id("not-a-uuid")

    @pytest.mark.asyncio
    async def test_find_by_name_is_exact_on_normalized_value(self, user_store, sample_user):
        await user_store.create(sample_user)
        assert (await user_store.find_by_name("alice")).id == sample_user.id
        assert await user_store.find_by_name("Alice") is None

    @pytest.mark.asyncio
    async def test_find_by_name_none(self, user_store):
        with pytest.raises(InvalidArgumentError):
            await user_store.find_by_name(None)


class TestUserStoreUpdateDelete:
    """Test updating and deleting users."""

    @pytest.mark.asyncio
    async def test_update_persists_and_bumps_version(self, user_store, sample_user):
        await user_store.create(sample_user)
        await user_store.set_user_name(sample_user, "Alicia")

        result = await user_store.update(sample_user)

        assert result.succeeded
        assert sample_user.row_version == 2
        assert sample_user.normalized_user_name == "alicia"
        assert (await user_store.find_by_name("alicia")).user_name == "Alicia"

    @pytest.mark.asyncio
    async def test_stale_update_is_concurrency_failure(self, user_store, sample_user):
        await user_store.create(sample_user)
        stale = await user_store.find_by_name("alice")
        await user_store.update(sample_user)

        result = await user_store.update(stale)

        assert result.error_codes == ("ConcurrencyFailure",)

    @pytest.mark.asyncio
    async def test_update_to_taken_name(self, user_store):
        await user_store.create(User(user_name="alice", email="a@x"))
        bob = User(user_name="bob", email="b@x")
        await user_store.create(bob)

        await user_store.set_user_name(bob, "Alice")
        result = await user_store.update(bob)

        assert result.error_codes == ("DuplicateUserName",)
        assert (await user_store.find_by_name("bob")) is not None

    @pytest.mark.asyncio
    async def test_delete_removes_user_and_private_section(self, user_store, sample_user, memory_database):
        sample_user.password_hash = "hash"
        await user_store.create(sample_user)
        assert sample_user.id in memory_database.private_sections

        result = await user_store.delete(sample_user)

        assert result.succeeded
        assert await user_store.find_by_id(str(sample_user.id)) is None
        assert sample_user.id not in memory_database.private_sections

    @pytest.mark.asyncio
    async def test_delete_missing_user_is_concurrency_failure(self, user_store):
        ghost = User(id=UUID("0190a8f0-0000-7000-8000-000000000001"), user_name="ghost", row_version=1)
        result = await user_store.delete(ghost)
        assert result.has_error("ConcurrencyFailure")


class TestUserStoreLifecycle:
    """Test disposal, cancellation and batching."""

    @pytest.mark.asyncio
    async def test_disposed_store_rejects_every_operation(self, user_store, sample_user):
        user_store.dispose()
        assert user_store.is_disposed

        with pytest.raises(StoreDisposedError):
            await user_store.create(sample_user)
        with pytest.raises(StoreDisposedError):
            await user_store.find_by_name("alice")
        with pytest.raises(StoreDisposedError):
            await user_store.get_user_name(sample_user)
        with pytest.raises(StoreDisposedError):
            user_store.users

    @pytest.mark.asyncio
    async def test_context_manager_disposes(self, memory_context):
        async with UserStore(memory_context) as store:
            assert not store.is_disposed
        assert store.is_disposed

    @pytest.mark.asyncio
    async def test_disposed_check_precedes_cancellation(self, user_store, sample_user):
        user_store.dispose()
        with pytest.raises(StoreDisposedError):
            await user_store.create(sample_user, CancellationToken.cancelled())

    @pytest.mark.asyncio
    async def test_cancelled_token_stops_before_any_write(self, user_store, sample_user, memory_database):
        with pytest.raises(OperationCancelledError):
            await user_store.create(sample_user, CancellationToken.cancelled())
        assert memory_database.users == {}
        assert memory_database.write_count == 0

    @pytest.mark.asyncio
    async def test_auto_save_off_batches_writes(self, memory_context, memory_database):
        store = UserStore(memory_context, auto_save_changes=False)
        alice, bob = User(user_name="alice", email="a@x"), User(user_name="bob", email="b@x")

        assert (await store.create(alice)).succeeded
        assert (await store.create(bob)).succeeded
        assert memory_database.users == {}

        assert await store.save_changes() == 2
        assert len(memory_database.users) == 2
        assert alice.row_version == 1

    @pytest.mark.asyncio
    async def test_save_changes_raises_storage_errors(self, memory_context):
        store = UserStore(memory_context, auto_save_changes=False)
        await store.create(User(user_name="alice", email="a@x"))
        await store.create(User(user_name="alice", email="b@x"))

        with pytest.raises(ConstraintViolationError):
            await store.save_changes()

    def test_requires_context(self):
        with pytest.raises(InvalidArgumentError):
            UserStore(None)

    def test_satisfies_protocol(self, user_store):
        assert isinstance(user_store, UserStoreProtocol)
