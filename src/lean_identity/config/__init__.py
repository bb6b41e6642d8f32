"""Configuration module for lean-identity."""

from .constants import (
    ColumnLimits,
    DatabaseSchemas,
    ConstraintNames,
    IdentityErrorCode,
    ConstraintKind,
    LookupNormalizerType,
    KeyType,
)
from .logging_config import (
    setup_logging,
    get_logger,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)
from .settings import IdentityStoreSettings, get_settings

__all__ = [
    "ColumnLimits",
    "DatabaseSchemas",
    "ConstraintNames",
    "IdentityErrorCode",
    "ConstraintKind",
    "LookupNormalizerType",
    "KeyType",
    "setup_logging",
    "get_logger",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
    "IdentityStoreSettings",
    "get_settings",
]
