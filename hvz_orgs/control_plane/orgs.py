"""Organization management: lifecycle, membership and the game-creation gate.

Mutations never take a snapshot from the caller: each is expressed as a pure
function of the stored document and applied through ``Store.update``, with
any invariant that depends on current state (owner stays an admin, one
active game per org) checked inside that atomic update. The returned
Organization is always the store's post-image.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from hvz_orgs.control_plane.games import GameDirectory
from hvz_orgs.control_plane.users import UserLookup
from hvz_orgs.shared.exceptions import (
    ConflictError,
    InvalidOperationError,
    OrgNotFoundError,
    StoreConflictError,
    UnauthorizedError,
)
from hvz_orgs.shared.logging import get_logger
from hvz_orgs.shared.models import Game, Organization
from hvz_orgs.shared.store import InMemoryStore, Store
from hvz_orgs.shared.validation import validate_id, validate_name, validate_slug

log = get_logger()

INDEXED_FIELDS = ("owner_id", "name")
UNIQUE_FIELDS = ("url",)


class OrganizationStore:
    """Sole writer of Organization documents."""

    def __init__(
        self,
        users: UserLookup,
        games: GameDirectory,
        store: Store[Organization] | None = None,
    ) -> None:
        self._users = users
        self._games = games
        self._store: Store[Organization] = store or InMemoryStore(unique_fields=UNIQUE_FIELDS)

    # --- Creation ---

    def create_org(self, name: str, url: str, creator_user_id: str) -> Organization:
        name = validate_name(name, field="org_name")
        url = validate_slug(url, field="url")
        creator_user_id = validate_id(creator_user_id, field="creator_user_id")
        self._users.get(creator_user_id)

        org = Organization(
            name=name,
            url=url,
            owner_id=creator_user_id,
            administrators=frozenset({creator_user_id}),
        )
        try:
            stored = self._store.insert(org.org_id, org)
        except StoreConflictError as e:
            log.warning("org_create_rejected", url=url, reason="url_taken")
            raise ConflictError(f"org url {url!r} is already taken") from e

        log.info("org_created", org_id=stored.org_id, name=name, url=url, owner_id=creator_user_id)
        return stored

    # --- Lookup ---

    def find_by_id(self, org_id: str) -> Organization | None:
        if not org_id:
            return None
        return self._store.get(org_id)

    def find_by_name(self, name: str) -> Organization | None:
        if not name:
            return None
        return self._store.find_one("name", name)

    def find_by_url(self, url: str) -> Organization | None:
        if not url:
            return None
        return self._store.find_one("url", url)

    def get_by_id(self, org_id: str) -> Organization:
        org = self.find_by_id(org_id)
        if org is None:
            raise OrgNotFoundError(org_id)
        return org

    def get_by_name(self, name: str) -> Organization:
        org = self.find_by_name(name)
        if org is None:
            raise OrgNotFoundError(name, field="name")
        return org

    def get_by_url(self, url: str) -> Organization:
        org = self.find_by_url(url)
        if org is None:
            raise OrgNotFoundError(url, field="url")
        return org

    def list_owned_by(self, owner_id: str) -> list[Organization]:
        if not owner_id:
            return []
        return self._store.find_by("owner_id", owner_id)

    # --- Active game ---

    def set_active_game(self, org_id: str, game_id: str) -> Organization:
        """Point the org at ``game_id``. Does not check that the game exists."""
        org = self.get_by_id(org_id)
        if org.active_game_id == game_id:
            return org

        updated = self._update(org_id, lambda o: replace(o, active_game_id=game_id))
        log.info(
            "org_active_game_set",
            org_id=org_id,
            game_id=game_id,
            previous_game_id=org.active_game_id,
        )
        return updated

    def clear_active_game(self, org_id: str) -> Organization:
        org = self.get_by_id(org_id)
        if not org.active_game_id:
            return org

        updated = self._update(org_id, lambda o: replace(o, active_game_id=None))
        log.info("org_active_game_cleared", org_id=org_id, game_id=org.active_game_id)
        return updated

    def find_active_game(self, org_id: str) -> Game | None:
        org = self.get_by_id(org_id)
        if not org.active_game_id:
            return None
        game = self._games.find_by_id(org.active_game_id)
        if game is None:
            log.warning("org_active_game_dangling", org_id=org_id, game_id=org.active_game_id)
        return game

    def create_game(self, name: str, requester_user_id: str, org_id: str) -> Game:
        """Create a game for the org and make it the active game.

        Only administrators may do this, and only while the org has no
        active game. The final write is conditional on ``active_game_id``
        still being empty, so of two concurrent callers exactly one wins;
        the other gets ConflictError. The loser's game record is left
        unattached to the org.
        """
        org = self.get_by_id(org_id)

        if not org.is_admin(requester_user_id):
            log.warning("game_create_rejected", org_id=org_id, user_id=requester_user_id, reason="not_admin")
            raise UnauthorizedError(
                f"user {requester_user_id!r} is not an administrator of org {org_id!r}; "
                "non-admin cannot create game",
                user_id=requester_user_id,
            )
        name = validate_name(name, field="game_name")
        if org.active_game_id:
            log.warning("game_create_rejected", org_id=org_id, active_game_id=org.active_game_id, reason="active_game")
            raise ConflictError(
                f"org {org_id!r} already has an active game {org.active_game_id!r}"
            )

        game = self._games.create(name, requester_user_id, org_id)
        try:
            self._update(
                org_id,
                lambda o: replace(o, active_game_id=game.game_id, games=o.games + (game.game_id,)),
                condition=lambda o: not o.active_game_id,
                reason="active game already set",
            )
        except StoreConflictError as e:
            log.warning("game_create_lost_race", org_id=org_id, orphaned_game_id=game.game_id)
            raise ConflictError(
                f"org {org_id!r} already has an active game; game {game.game_id!r} was not activated"
            ) from e

        log.info("org_game_started", org_id=org_id, game_id=game.game_id, creator_id=requester_user_id)
        return game

    # --- Membership ---

    def get_admins(self, org_id: str) -> frozenset[str]:
        return self.get_by_id(org_id).administrators

    def get_moderators(self, org_id: str) -> frozenset[str]:
        return self.get_by_id(org_id).moderators

    def add_admin(self, org_id: str, user_id: str) -> Organization:
        self.get_by_id(org_id)
        self._users.get(user_id)

        updated = self._update(org_id, lambda o: replace(o, administrators=o.administrators | {user_id}))
        log.info("org_admin_added", org_id=org_id, user_id=user_id)
        return updated

    def remove_admin(self, org_id: str, user_id: str) -> Organization:
        org = self.get_by_id(org_id)
        if org.owner_id == user_id:
            raise InvalidOperationError(_owner_removal_message(org_id, user_id))

        try:
            updated = self._update(
                org_id,
                lambda o: replace(o, administrators=o.administrators - {user_id}),
                condition=lambda o: o.owner_id != user_id,
                reason="user became owner",
            )
        except StoreConflictError as e:
            raise InvalidOperationError(_owner_removal_message(org_id, user_id)) from e

        log.info("org_admin_removed", org_id=org_id, user_id=user_id)
        return updated

    def add_moderator(self, org_id: str, user_id: str) -> Organization:
        self.get_by_id(org_id)
        self._users.get(user_id)

        updated = self._update(org_id, lambda o: replace(o, moderators=o.moderators | {user_id}))
        log.info("org_moderator_added", org_id=org_id, user_id=user_id)
        return updated

    def remove_moderator(self, org_id: str, user_id: str) -> Organization:
        updated = self._update(org_id, lambda o: replace(o, moderators=o.moderators - {user_id}))
        log.info("org_moderator_removed", org_id=org_id, user_id=user_id)
        return updated

    def set_owner(self, org_id: str, new_owner_id: str) -> Organization:
        """Transfer ownership. The previous owner stays an administrator."""
        org = self.get_by_id(org_id)
        if not org.is_admin(new_owner_id):
            raise InvalidOperationError(_owner_not_admin_message(org_id, new_owner_id))

        try:
            updated = self._update(
                org_id,
                lambda o: replace(o, owner_id=new_owner_id),
                condition=lambda o: o.is_admin(new_owner_id),
                reason="new owner is no longer an administrator",
            )
        except StoreConflictError as e:
            raise InvalidOperationError(_owner_not_admin_message(org_id, new_owner_id)) from e

        log.info("org_owner_changed", org_id=org_id, owner_id=new_owner_id, previous_owner_id=org.owner_id)
        return updated

    def _update(
        self,
        org_id: str,
        mutate: Callable[[Organization], Organization],
        condition: Callable[[Organization], bool] | None = None,
        reason: str = "precondition failed",
    ) -> Organization:
        updated = self._store.update(org_id, mutate, condition, reason)
        if updated is None:
            raise OrgNotFoundError(org_id)
        return updated


def _owner_removal_message(org_id: str, user_id: str) -> str:
    return (
        f"user {user_id!r} is the owner of org {org_id!r}; "
        "the owner cannot be removed from the org's administrators"
    )


def _owner_not_admin_message(org_id: str, user_id: str) -> str:
    return (
        f"user {user_id!r} is not an administrator of org {org_id!r}; "
        "new owner must already be an administrator"
    )
