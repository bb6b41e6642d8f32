"""
Configuration for lean-identity stores.

Settings are loaded from environment variables prefixed with ``LEAN_IDENTITY_``
(or a ``.env`` file) and cached for the life of the process.
"""
import re
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DatabaseSchemas, KeyType, LookupNormalizerType

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")


class IdentityStoreSettings(BaseSettings):
    """Runtime configuration for the identity stores and their database."""

    model_config = SettingsConfigDict(
        env_prefix="LEAN_IDENTITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_url: Optional[str] = Field(default=None)
    db_schema: str = Field(default=DatabaseSchemas.DEFAULT)
    db_pool_min_size: int = Field(default=2, ge=1)
    db_pool_max_size: int = Field(default=10, ge=1)
    db_command_timeout: float = Field(default=30.0, gt=0)
    application_name: str = Field(default="lean-identity")

    # Store Behaviour
    auto_save_changes: bool = Field(default=True)
    lookup_normalizer: LookupNormalizerType = Field(default=LookupNormalizerType.TRIVIAL)
    key_type: KeyType = Field(default=KeyType.UUID)

    @field_validator("db_schema")
    @classmethod
    def validate_db_schema(cls, value: str) -> str:
        """Schema names are interpolated into SQL, so only plain identifiers are allowed."""
        if not _IDENTIFIER_PATTERN.match(value):
            raise ValueError(f"Invalid schema name: {value}")
        return value

    @field_validator("database_url")
    @classmethod
    def strip_driver_suffix(cls, value: Optional[str]) -> Optional[str]:
        """asyncpg does not understand SQLAlchemy-style ``+asyncpg`` DSNs."""
        if value and "+asyncpg" in value:
            return value.replace("+asyncpg", "")
        return value

    def get_pool_config(self) -> dict:
        """Get asyncpg pool keyword arguments."""
        return {
            "min_size": self.db_pool_min_size,
            "max_size": max(self.db_pool_max_size, self.db_pool_min_size),
            "command_timeout": self.db_command_timeout,
        }


@lru_cache(maxsize=1)
def get_settings() -> IdentityStoreSettings:
    """Get the cached process-wide settings."""
    return IdentityStoreSettings()
