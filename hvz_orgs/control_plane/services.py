"""Wires the organization, user and game services onto their stores."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable

from hvz_orgs.control_plane.games import GameRegistry
from hvz_orgs.control_plane.orgs import INDEXED_FIELDS, UNIQUE_FIELDS, OrganizationStore
from hvz_orgs.control_plane.users import UserRegistry
from hvz_orgs.shared.logging import get_logger
from hvz_orgs.shared.models import Game, Organization, User

log = get_logger()


@dataclass
class Services:
    orgs: OrganizationStore
    users: UserRegistry
    games: GameRegistry
    closers: list[Callable[[], None]] = field(default_factory=list)

    def close(self) -> None:
        """Release backend connections (Postgres pools)."""
        while self.closers:
            self.closers.pop()()


def _create_stores(database_url: str | None) -> dict[str, Any]:
    """Create Postgres-backed stores if a database URL is configured."""
    if not database_url:
        log.info("persistence_memory")
        return {}

    from hvz_orgs.shared.postgres_store import PostgresStore

    log.info("persistence_postgres", dsn=database_url.split("@")[-1])
    return {
        "orgs": PostgresStore(
            "orgs",
            deserializer=Organization.from_dict,
            dsn=database_url,
            indexed_fields=INDEXED_FIELDS,
            unique_fields=UNIQUE_FIELDS,
        ),
        "users": PostgresStore("users", deserializer=User.from_dict, dsn=database_url),
        "games": PostgresStore(
            "games",
            deserializer=Game.from_dict,
            dsn=database_url,
            indexed_fields=("org_id",),
        ),
    }


def create_services(database_url: str | None = None) -> Services:
    """Build the service graph. Falls back to DATABASE_URL, then in-memory."""
    stores = _create_stores(database_url or os.environ.get("DATABASE_URL"))
    users = UserRegistry(store=stores.get("users"))
    games = GameRegistry(store=stores.get("games"))
    orgs = OrganizationStore(users=users, games=games, store=stores.get("orgs"))
    closers = [store.close for store in stores.values()]
    return Services(orgs=orgs, users=users, games=games, closers=closers)
