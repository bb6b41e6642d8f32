"""Build user stores from settings."""

import logging
from typing import Optional

from ....config.settings import IdentityStoreSettings, get_settings
from ....database.connection import get_database
from ..protocols import UserDataContext
from ..repositories import AsyncpgUserDataContext
from ..services import get_key_converter, get_lookup_normalizer
from .composed import StandardWithSecurityStampUserStore

logger = logging.getLogger(__name__)


def create_user_store(
    context: Optional[UserDataContext] = None,
    settings: Optional[IdentityStoreSettings] = None,
    **overrides,
) -> StandardWithSecurityStampUserStore:
    """Create a fully featured user store.

    Args:
        context: Data context to use; defaults to a PostgreSQL context on the
            global database manager
        settings: Settings to read; defaults to the cached process settings
        **overrides: Store options that take precedence over settings
            (key_converter, normalizer, error_describer, auto_save_changes)
    """
    settings = settings or get_settings()
    if context is None:
        context = AsyncpgUserDataContext(get_database(settings), settings.db_schema)

    options = {
        "key_converter": get_key_converter(settings.key_type),
        "normalizer": get_lookup_normalizer(settings.lookup_normalizer),
        "auto_save_changes": settings.auto_save_changes,
    }
    options.update(overrides)

    logger.debug(
        f"Creating user store with {type(context).__name__}, "
        f"key type '{options['key_converter'].key_type.value}'"
    )
    return StandardWithSecurityStampUserStore(context, **options)
