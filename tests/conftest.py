"""Shared fixtures for all tests."""

import pytest

from hvz_orgs.control_plane.games import GameRegistry
from hvz_orgs.control_plane.orgs import UNIQUE_FIELDS, OrganizationStore
from hvz_orgs.control_plane.services import Services
from hvz_orgs.control_plane.users import UserRegistry
from hvz_orgs.shared.store import InMemoryStore


class CountingStore(InMemoryStore):
    """InMemoryStore that records how often it is read."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.reads = 0

    def get(self, key):
        self.reads += 1
        return super().get(key)

    def find_by(self, field, value):
        self.reads += 1
        return super().find_by(field, value)


@pytest.fixture
def users():
    registry = UserRegistry()
    for user_id in ("0", "1", "2", "3"):
        registry.register(user_id, name=f"user {user_id}")
    return registry


@pytest.fixture
def games():
    return GameRegistry()


@pytest.fixture
def org_store():
    return CountingStore(unique_fields=UNIQUE_FIELDS)


@pytest.fixture
def orgs(users, games, org_store):
    return OrganizationStore(users=users, games=games, store=org_store)


@pytest.fixture
def org(orgs):
    return orgs.create_org("Test Org", "testurl", "1")


@pytest.fixture
def services(orgs, users, games):
    return Services(orgs=orgs, users=users, games=games)
