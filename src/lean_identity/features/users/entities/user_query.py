"""Lazy, composable user queries.

A ``UserQuery`` only describes what to fetch. Collaborators translate it into
their own query language when it is executed, so callers can keep refining a
query (ordering, paging) before anything touches storage.
"""

from dataclasses import dataclass, replace
from typing import Any, FrozenSet, Optional, Tuple

from ....core.exceptions import InvalidArgumentError

QUERYABLE_FIELDS: FrozenSet[str] = frozenset({
    "id",
    "user_name",
    "normalized_user_name",
    "email",
    "normalized_email",
})


def _validate_field(field_name: str) -> str:
    if field_name not in QUERYABLE_FIELDS:
        raise InvalidArgumentError("field", f"'{field_name}' is not a queryable user field")
    return field_name


@dataclass(frozen=True)
class QueryFilter:
    """Equality filter on a single user field."""

    field: str
    value: Any


@dataclass(frozen=True)
class QueryOrder:
    """Sort key for a query."""

    field: str
    descending: bool = False


@dataclass(frozen=True)
class UserQuery:
    """Immutable description of a user query."""

    filters: Tuple[QueryFilter, ...] = ()
    ordering: Tuple[QueryOrder, ...] = ()
    offset: int = 0
    limit: Optional[int] = None
    include_private_section: bool = True

    def where(self, field_name: str, value: Any) -> "UserQuery":
        """Add an equality filter."""
        query_filter = QueryFilter(_validate_field(field_name), value)
        return replace(self, filters=self.filters + (query_filter,))

    def where_id(self, key: Any) -> "UserQuery":
        return self.where("id", key)

    def where_normalized_user_name(self, normalized_user_name: str) -> "UserQuery":
        return self.where("normalized_user_name", normalized_user_name)

    def where_normalized_email(self, normalized_email: str) -> "UserQuery":
        return self.where("normalized_email", normalized_email)

    def order_by(self, field_name: str, descending: bool = False) -> "UserQuery":
        """Append a sort key."""
        order = QueryOrder(_validate_field(field_name), descending)
        return replace(self, ordering=self.ordering + (order,))

    def skip(self, count: int) -> "UserQuery":
        if count < 0:
            raise InvalidArgumentError("count", "must not be negative")
        return replace(self, offset=count)

    def take(self, count: int) -> "UserQuery":
        if count < 0:
            raise InvalidArgumentError("count", "must not be negative")
        return replace(self, limit=count)

    def without_private_section(self) -> "UserQuery":
        """Do not join credential data (for listings that never need it)."""
        return replace(self, include_private_section=False)

    def matches(self, values: dict) -> bool:
        """Check whether a row of field values satisfies every filter."""
        return all(values.get(f.field) == f.value for f in self.filters)
