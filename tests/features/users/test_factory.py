"""Tests for building stores from settings."""

from lean_identity.config.settings import IdentityStoreSettings
from lean_identity.features.users.repositories import AsyncpgUserDataContext
from lean_identity.features.users.services import (
    CaseFoldLookupNormalizer,
    IntKeyConverter,
    TrivialLookupNormalizer,
)
from lean_identity.features.users.stores import (
    StandardWithSecurityStampUserStore,
    create_user_store,
)


class TestCreateUserStore:
    """Test the store factory."""

    def test_applies_settings(self, memory_context):
        settings = IdentityStoreSettings(
            _env_file=None, key_type="int", lookup_normalizer="casefold", auto_save_changes=False
        )

        store = create_user_store(memory_context, settings)

        assert isinstance(store, StandardWithSecurityStampUserStore)
        assert store.context is memory_context
        assert isinstance(store.base.key_converter, IntKeyConverter)
        assert isinstance(store.base.normalizer, CaseFoldLookupNormalizer)
        assert store.auto_save_changes is False

    def test_overrides_win(self, memory_context):
        settings = IdentityStoreSettings(_env_file=None, lookup_normalizer="casefold")
        store = create_user_store(
            memory_context, settings, normalizer=TrivialLookupNormalizer(), auto_save_changes=True
        )
        assert isinstance(store.base.normalizer, TrivialLookupNormalizer)
        assert store.auto_save_changes is True

    def test_defaults_to_postgres_context(self):
        settings = IdentityStoreSettings(
            _env_file=None, database_url="postgresql://localhost/identity", db_schema="accounts"
        )
        store = create_user_store(settings=settings)

        assert isinstance(store.context, AsyncpgUserDataContext)
        assert store.context.users_table == "accounts.users"
