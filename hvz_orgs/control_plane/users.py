"""User lookup contract and a store-backed user registry."""

from __future__ import annotations

from abc import ABC, abstractmethod

from hvz_orgs.shared.exceptions import ConflictError, StoreConflictError, UserNotFoundError
from hvz_orgs.shared.logging import get_logger
from hvz_orgs.shared.models import User
from hvz_orgs.shared.store import InMemoryStore, Store
from hvz_orgs.shared.validation import validate_id

log = get_logger()


class UserLookup(ABC):
    """Existence check and fetch of users, owned by the identity subsystem."""

    @abstractmethod
    def exists(self, user_id: str) -> bool: ...

    @abstractmethod
    def get(self, user_id: str) -> User:
        """Return the user or raise UserNotFoundError."""


class UserRegistry(UserLookup):
    """UserLookup over a Store[User], for the CLI and local development."""

    def __init__(self, store: Store[User] | None = None) -> None:
        self._store: Store[User] = store or InMemoryStore()

    def register(self, user_id: str, name: str = "", email: str = "") -> User:
        user_id = validate_id(user_id, field="user_id")
        try:
            user = self._store.insert(user_id, User(user_id=user_id, name=name, email=email))
        except StoreConflictError as e:
            raise ConflictError(f"user {user_id!r} is already registered") from e
        log.info("user_registered", user_id=user_id)
        return user

    def exists(self, user_id: str) -> bool:
        return bool(user_id) and self._store.exists(user_id)

    def get(self, user_id: str) -> User:
        user = self._store.get(user_id) if user_id else None
        if user is None:
            raise UserNotFoundError(user_id)
        return user
