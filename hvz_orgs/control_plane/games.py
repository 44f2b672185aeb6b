"""Game directory contract and a store-backed game registry."""

from __future__ import annotations

from abc import ABC, abstractmethod

from hvz_orgs.shared.exceptions import GameNotFoundError
from hvz_orgs.shared.logging import get_logger
from hvz_orgs.shared.models import Game
from hvz_orgs.shared.store import InMemoryStore, Store
from hvz_orgs.shared.validation import validate_name

log = get_logger()


class GameDirectory(ABC):
    """Game records as seen by the organization layer.

    Game-play state (players, roles, tags) belongs to the game subsystem and
    is not part of this contract.
    """

    @abstractmethod
    def create(self, name: str, creator_user_id: str, org_id: str) -> Game: ...

    @abstractmethod
    def find_by_id(self, game_id: str) -> Game | None: ...

    def get_by_id(self, game_id: str) -> Game:
        game = self.find_by_id(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return game


class GameRegistry(GameDirectory):
    """GameDirectory over a Store[Game]."""

    def __init__(self, store: Store[Game] | None = None) -> None:
        self._store: Store[Game] = store or InMemoryStore()

    def create(self, name: str, creator_user_id: str, org_id: str) -> Game:
        name = validate_name(name, field="game_name")
        game = Game(name=name, creator_id=creator_user_id, org_id=org_id)
        self._store.insert(game.game_id, game)
        log.info("game_created", game_id=game.game_id, org_id=org_id, creator_id=creator_user_id)
        return game

    def find_by_id(self, game_id: str) -> Game | None:
        if not game_id:
            return None
        return self._store.get(game_id)

    def list_for_org(self, org_id: str) -> list[Game]:
        return self._store.find_by("org_id", org_id)
