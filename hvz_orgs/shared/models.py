"""Core data models for the HvZ organization platform."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


# --- Organization ---

@dataclass(frozen=True)
class Organization:
    """Immutable snapshot of an organization as stored.

    Changes go through OrganizationStore, which writes a new document and
    hands back the stored post-image.
    """

    name: str
    url: str
    owner_id: str
    org_id: str = field(default_factory=_new_id)
    administrators: frozenset[str] = frozenset()
    moderators: frozenset[str] = frozenset()
    games: tuple[str, ...] = ()
    active_game_id: str | None = None
    created_at: datetime = field(default_factory=_utc_now)

    def is_admin(self, user_id: str) -> bool:
        return user_id in self.administrators

    def is_moderator(self, user_id: str) -> bool:
        return user_id in self.moderators

    def to_dict(self) -> dict[str, Any]:
        return {
            "org_id": self.org_id,
            "name": self.name,
            "url": self.url,
            "owner_id": self.owner_id,
            "administrators": sorted(self.administrators),
            "moderators": sorted(self.moderators),
            "games": list(self.games),
            "active_game_id": self.active_game_id,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Organization:
        return cls(
            org_id=data["org_id"],
            name=data["name"],
            url=data["url"],
            owner_id=data["owner_id"],
            administrators=frozenset(data.get("administrators", ())),
            moderators=frozenset(data.get("moderators", ())),
            games=tuple(data.get("games", ())),
            active_game_id=data.get("active_game_id"),
            created_at=_parse_datetime(data["created_at"]),
        )


# --- Users ---

@dataclass(frozen=True)
class User:
    user_id: str = field(default_factory=_new_id)
    name: str = ""
    email: str = ""
    created_at: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        return cls(
            user_id=data["user_id"],
            name=data.get("name", ""),
            email=data.get("email", ""),
            created_at=_parse_datetime(data["created_at"]),
        )


# --- Games ---

@dataclass(frozen=True)
class Game:
    name: str
    creator_id: str
    org_id: str
    game_id: str = field(default_factory=_new_id)
    is_active: bool = True
    created_at: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "game_id": self.game_id,
            "name": self.name,
            "creator_id": self.creator_id,
            "org_id": self.org_id,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Game:
        return cls(
            game_id=data["game_id"],
            name=data["name"],
            creator_id=data["creator_id"],
            org_id=data["org_id"],
            is_active=data.get("is_active", True),
            created_at=_parse_datetime(data["created_at"]),
        )


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
