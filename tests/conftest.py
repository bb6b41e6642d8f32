"""Pytest configuration and fixtures for lean-identity tests."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from lean_identity.features.users.entities import User
from lean_identity.features.users.repositories import (
    InMemoryUserDatabase,
    InMemoryUserDataContext,
)
from lean_identity.features.users.services import CaseFoldLookupNormalizer
from lean_identity.features.users.stores import (
    StandardWithSecurityStampUserStore,
    UserStore,
)


@pytest.fixture
def memory_database():
    """Shared in-memory users/private sections tables."""
    return InMemoryUserDatabase()


@pytest.fixture
def memory_context(memory_database):
    """In-memory data context over the shared tables."""
    return InMemoryUserDataContext(memory_database)


@pytest.fixture
def user_store(memory_context):
    """Base user store with UUID keys and case-folding lookups."""
    return UserStore(memory_context, normalizer=CaseFoldLookupNormalizer())


@pytest.fixture
def identity_store(memory_context):
    """Fully featured store over the in-memory context."""
    return StandardWithSecurityStampUserStore(
        memory_context, normalizer=CaseFoldLookupNormalizer()
    )


@pytest.fixture
def store_factory(memory_database):
    """Build independent stores (one context each) over the same tables."""
    def factory(**options):
        options.setdefault("normalizer", CaseFoldLookupNormalizer())
        return StandardWithSecurityStampUserStore(
            InMemoryUserDataContext(memory_database), **options
        )
    return factory


@pytest.fixture
def sample_user():
    """Unsaved user without a key."""
    return User(user_name="Alice", email="Alice@Example.com")


@pytest.fixture
def mock_connection():
    """Mock asyncpg connection used inside transactions."""
    conn = AsyncMock()
    conn.execute = AsyncMock()
    conn.fetchval = AsyncMock()
    return conn


@pytest.fixture
def mock_database_manager(mock_connection):
    """Mock DatabaseManager whose transaction yields ``mock_connection``."""
    manager = MagicMock()
    manager.fetch = AsyncMock(return_value=[])
    manager.fetchval = AsyncMock()
    manager.execute = AsyncMock()

    @asynccontextmanager
    async def transaction():
        yield mock_connection

    manager.transaction = MagicMock(side_effect=transaction)
    return manager
