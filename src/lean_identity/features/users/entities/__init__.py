"""User entities."""

from .user import User, UserPrivateSection
from .user_query import UserQuery, QueryFilter, QueryOrder, QUERYABLE_FIELDS

__all__ = [
    "User",
    "UserPrivateSection",
    "UserQuery",
    "QueryFilter",
    "QueryOrder",
    "QUERYABLE_FIELDS",
]
