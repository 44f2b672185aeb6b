"""Tests for UserRegistry."""

import pytest

from hvz_orgs.control_plane.users import UserRegistry
from hvz_orgs.shared.exceptions import ConflictError, NotFoundError, UserNotFoundError


class TestUserRegistry:
    def test_register_and_get(self):
        users = UserRegistry()
        user = users.register("jane", name="Jane", email="jane@example.com")
        assert users.get("jane") == user
        assert users.exists("jane")

    def test_unknown_user(self):
        users = UserRegistry()
        assert users.exists("ghost") is False
        assert users.exists("") is False
        with pytest.raises(UserNotFoundError):
            users.get("ghost")

    def test_not_found_is_a_not_found_error(self):
        with pytest.raises(NotFoundError):
            UserRegistry().get("")

    def test_duplicate_registration(self):
        users = UserRegistry()
        users.register("jane")
        with pytest.raises(ConflictError, match="jane"):
            users.register("jane")

