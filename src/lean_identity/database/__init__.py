"""Database access for lean-identity."""

from .connection import (
    DatabaseManager,
    get_database,
    init_database,
    close_database,
)
from .schema import build_schema_statements, ensure_schema, validate_schema_name

__all__ = [
    "DatabaseManager",
    "get_database",
    "init_database",
    "close_database",
    "build_schema_statements",
    "ensure_schema",
    "validate_schema_name",
]
