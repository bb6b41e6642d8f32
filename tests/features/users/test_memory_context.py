"""Tests for the in-memory user data context."""

import pytest

from lean_identity.core.exceptions import (
    ConcurrencyError,
    ConstraintViolationError,
    DataIntegrityError,
    InvalidArgumentError,
    OperationCancelledError,
)
from lean_identity.core.shared import CancellationToken
from lean_identity.features.users.entities import User
from lean_identity.features.users.protocols import UserDataContext
from lean_identity.features.users.repositories import (
    EntryState,
    InMemoryUserDataContext,
)


def make_user(key, name):
    return User(
        id=key,
        user_name=name,
        email=f"{name}@example.com",
        normalized_user_name=name,
        normalized_email=f"{name}@example.com",
    )


class TestChangeTracking:
    """Test the unit of work."""

    def test_satisfies_protocol(self, memory_context):
        assert isinstance(memory_context, UserDataContext)

    def test_add_then_remove_cancels_out(self, memory_context):
        user = make_user(1, "alice")
        memory_context.add(user)
        memory_context.remove(user)
        assert not memory_context.has_changes

    def test_attach_is_unchanged_until_update(self, memory_context):
        user = make_user(1, "alice")
        memory_context.attach(user)
        assert not memory_context.has_changes
        memory_context.update(user)
        assert memory_context.has_changes
        assert memory_context._entries[0].state == EntryState.MODIFIED

    def test_none_rejected(self, memory_context):
        with pytest.raises(InvalidArgumentError):
            memory_context.add(None)

    @pytest.mark.asyncio
    async def test_save_with_nothing_pending(self, memory_context):
        assert await memory_context.save_changes() == 0

    @pytest.mark.asyncio
    async def test_discard_changes(self, memory_context, memory_database):
        memory_context.add(make_user(1, "alice"))
        memory_context.discard_changes()
        assert await memory_context.save_changes() == 0
        assert memory_database.users == {}

    @pytest.mark.asyncio
    async def test_cancelled_save(self, memory_context, memory_database):
        memory_context.add(make_user(1, "alice"))
        with pytest.raises(OperationCancelledError):
            await memory_context.save_changes(CancellationToken.cancelled())
        assert memory_database.users == {}


class TestAtomicSave:
    """Test that a failed save leaves storage untouched."""

    @pytest.mark.asyncio
    async def test_batch_rolls_back_on_conflict(self, memory_context, memory_database):
        first, duplicate = make_user(1, "alice"), make_user(2, "alice")
        memory_context.add(first)
        memory_context.add(duplicate)

        with pytest.raises(ConstraintViolationError):
            await memory_context.save_changes()

        assert memory_database.users == {}
        assert memory_database.write_count == 0
        assert first.row_version == 0
        assert not memory_context.has_changes

    @pytest.mark.asyncio
    async def test_duplicate_primary_key(self, memory_context):
        memory_context.add(make_user(1, "alice"))
        await memory_context.save_changes()

        memory_context.add(make_user(1, "bob"))
        with pytest.raises(ConstraintViolationError) as exc_info:
            await memory_context.save_changes()
        assert exc_info.value.constraint_name == "pk_users"

    @pytest.mark.asyncio
    async def test_missing_required_value(self, memory_context):
        user = make_user(1, "alice")
        user.normalized_email = None
        memory_context.add(user)
        with pytest.raises(DataIntegrityError):
            await memory_context.save_changes()

    @pytest.mark.asyncio
    async def test_private_section_length(self, memory_context):
        user = make_user(1, "alice")
        user.security_stamp = "x" * 37
        memory_context.add(user)
        with pytest.raises(DataIntegrityError) as exc_info:
            await memory_context.save_changes()
        assert exc_info.value.field == "security_stamp"

    @pytest.mark.asyncio
    async def test_version_mismatch(self, memory_context):
        user = make_user(1, "alice")
        memory_context.add(user)
        await memory_context.save_changes()

        stale = make_user(1, "alice")
        stale.row_version = 7
        memory_context.update(stale)
        with pytest.raises(ConcurrencyError):
            await memory_context.save_changes()


class TestQueries:
    """Test query execution."""

    @pytest.mark.asyncio
    async def test_fetch_returns_detached_copies(self, memory_context, memory_database):
        user = make_user(1, "alice")
        memory_context.add(user)
        await memory_context.save_changes()

        found = await memory_context.first_or_none(memory_context.users_by_id(1))
        found.user_name = "changed"

        assert memory_database.users[1]["user_name"] == "alice"

    @pytest.mark.asyncio
    async def test_multi_key_ordering(self, memory_context):
        for key, name, email in [(1, "b", "x@e"), (2, "a", "y@e"), (3, "c", "x@e")]:
            memory_context.add(User(
                id=key, user_name=name, email=email,
                normalized_user_name=name, normalized_email=email,
            ))
        await memory_context.save_changes()

        query = memory_context.users().order_by("email").order_by("user_name", descending=True)
        users = await memory_context.fetch(query)

        assert [u.user_name for u in users] == ["c", "b", "a"]

    @pytest.mark.asyncio
    async def test_contexts_share_database(self, memory_database):
        writer = InMemoryUserDataContext(memory_database)
        reader = InMemoryUserDataContext(memory_database)
        writer.add(make_user(1, "alice"))
        await writer.save_changes()

        assert await reader.count(reader.users_by_name("alice")) == 1
