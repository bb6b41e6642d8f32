"""Tests for lazy user queries."""

import pytest

from lean_identity.core.exceptions import InvalidArgumentError
from lean_identity.features.users.entities import QueryFilter, QueryOrder, UserQuery


class TestUserQuery:
    """Test query composition."""

    def test_defaults(self):
        query = UserQuery()
        assert query.filters == ()
        assert query.ordering == ()
        assert query.offset == 0
        assert query.limit is None
        assert query.include_private_section is True

    def test_refinements_do_not_mutate(self):
        base = UserQuery()
        refined = base.where_normalized_email("a@x").order_by("user_name").skip(2).take(5)

        assert base == UserQuery()
        assert refined.filters == (QueryFilter("normalized_email", "a@x"),)
        assert refined.ordering == (QueryOrder("user_name", False),)
        assert refined.offset == 2
        assert refined.limit == 5

    def test_multiple_orderings_accumulate(self):
        query = UserQuery().order_by("email").order_by("user_name", descending=True)
        assert [o.field for o in query.ordering] == ["email", "user_name"]
        assert query.ordering[1].descending is True

    def test_unknown_field_rejected(self):
        with pytest.raises(InvalidArgumentError):
            UserQuery().where("password_hash", "x")
        with pytest.raises(InvalidArgumentError):
            UserQuery().order_by("row_version")

    def test_negative_paging_rejected(self):
        with pytest.raises(InvalidArgumentError):
            UserQuery().skip(-1)
        with pytest.raises(InvalidArgumentError):
            UserQuery().take(-1)

    def test_without_private_section(self):
        assert UserQuery().without_private_section().include_private_section is False

    def test_matches(self):
        query = UserQuery().where_id(1).where_normalized_user_name("alice")
        assert query.matches({"id": 1, "normalized_user_name": "alice"})
        assert not query.matches({"id": 1, "normalized_user_name": "bob"})
        assert UserQuery().matches({})
