"""Tests for OrganizationStore lifecycle and lookups."""

import pytest
from structlog.testing import capture_logs

from hvz_orgs.shared.exceptions import ConflictError, NotFoundError, OrgNotFoundError, UserNotFoundError
from hvz_orgs.shared.validation import ValidationError


class TestCreateOrg:
    def test_initial_state(self, orgs):
        org = orgs.create_org("Test Org", "testurl", "0")
        assert org.org_id
        assert org.name == "Test Org"
        assert org.url == "testurl"
        assert org.owner_id == "0"
        assert org.administrators == {"0"}
        assert org.moderators == frozenset()
        assert org.games == ()
        assert org.active_game_id is None
        assert org.created_at is not None

    def test_create_then_read_are_equal(self, orgs):
        created = orgs.create_org("Test Org", "testurl", "0")
        assert orgs.find_by_id(created.org_id) == created

    def test_unknown_creator_rejected(self, orgs, org_store):
        with pytest.raises(UserNotFoundError, match="ghost"):
            orgs.create_org("Test Org", "testurl", "ghost")
        assert org_store.find_by("url", "testurl") == []

    def test_duplicate_url_conflicts(self, orgs, org):
        with pytest.raises(ConflictError, match="testurl"):
            orgs.create_org("Other Org", "testurl", "2")

    def test_names_need_not_be_unique(self, orgs, org):
        other = orgs.create_org("Test Org", "otherurl", "2")
        assert other.org_id != org.org_id

    def test_empty_name_rejected(self, orgs):
        with pytest.raises(ValidationError, match="org_name"):
            orgs.create_org("  ", "testurl", "0")

    def test_bad_url_rejected(self, orgs):
        with pytest.raises(ValidationError, match="url"):
            orgs.create_org("Test Org", "Not A Slug", "0")

    @pytest.mark.parametrize(
        "name", ["Café Zombies", "UNC Charlotte: Fall 2024", "Humans & Zombies", "HvZ!"]
    )
    def test_accepts_any_printable_name(self, orgs, name):
        org = orgs.create_org(name, "some-url", "1")
        assert orgs.get_by_name(name) == org

    def test_logs_creation(self, orgs):
        with capture_logs() as logs:
            org = orgs.create_org("Test Org", "testurl", "0")
        created = [e for e in logs if e["event"] == "org_created"]
        assert created and created[0]["org_id"] == org.org_id


class TestLookup:
    def test_find_by_id(self, orgs, org):
        assert orgs.find_by_id(org.org_id) == org

    def test_find_by_name(self, orgs, org):
        assert orgs.find_by_name("Test Org") == org

    def test_find_by_url(self, orgs, org):
        assert orgs.find_by_url("testurl") == org

    def test_find_unknown_returns_none(self, orgs, org):
        assert orgs.find_by_id("000000000000000000000000") is None
        assert orgs.find_by_name("nope") is None
        assert orgs.find_by_url("nope") is None

    def test_empty_keys_skip_the_store(self, orgs, org, org_store):
        reads = org_store.reads
        assert orgs.find_by_id("") is None
        assert orgs.find_by_name("") is None
        assert orgs.find_by_url("") is None
        assert org_store.reads == reads

    def test_get_by_id(self, orgs, org):
        assert orgs.get_by_id(org.org_id) == org

    def test_get_by_id_unknown_raises(self, orgs):
        with pytest.raises(NotFoundError, match="000000000000000000000000"):
            orgs.get_by_id("000000000000000000000000")

    def test_get_by_url(self, orgs, org):
        assert orgs.get_by_url("testurl") == org

    def test_get_by_url_unknown_raises(self, orgs, org):
        with pytest.raises(OrgNotFoundError) as exc:
            orgs.get_by_url("none")
        assert exc.value.field == "url"

    def test_get_by_name(self, orgs, org):
        assert orgs.get_by_name("Test Org") == org
        with pytest.raises(OrgNotFoundError):
            orgs.get_by_name("missing")

    def test_list_owned_by(self, orgs, org):
        orgs.create_org("Second", "second", "1")
        orgs.create_org("Elsewhere", "elsewhere", "2")
        owned = orgs.list_owned_by("1")
        assert {o.url for o in owned} == {"testurl", "second"}
        assert orgs.list_owned_by("") == []

    def test_snapshots_are_immutable(self, orgs, org):
        with pytest.raises(AttributeError):
            org.owner_id = "2"
        assert not hasattr(org.administrators, "add")
