"""User data contexts."""

from .base import BaseUserDataContext, EntryState, TrackedEntry
from .memory_user_context import InMemoryUserDatabase, InMemoryUserDataContext
from .asyncpg_user_context import AsyncpgUserDataContext, translate_database_error

__all__ = [
    "BaseUserDataContext",
    "EntryState",
    "TrackedEntry",
    "InMemoryUserDatabase",
    "InMemoryUserDataContext",
    "AsyncpgUserDataContext",
    "translate_database_error",
]
