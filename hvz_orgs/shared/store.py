"""Keyed document store with interface-based design for backend swapping."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, TypeVar

from hvz_orgs.shared.exceptions import StoreConflictError

T = TypeVar("T")

Mutation = Callable[[T], T]
Condition = Callable[[T], bool]


class Store(ABC, Generic[T]):
    """Abstract store interface. Swap implementation for Postgres, etc.

    ``update`` is the unit of atomicity: the condition is evaluated and the
    mutation applied against the current document while no other writer can
    touch it, and the stored post-image is returned.
    """

    @abstractmethod
    def insert(self, key: str, value: T) -> T:
        """Write a new document. Raises StoreConflictError if the key or a
        unique field value is already taken."""

    @abstractmethod
    def get(self, key: str) -> T | None: ...

    @abstractmethod
    def find_by(self, field: str, value: Any) -> list[T]: ...

    @abstractmethod
    def update(
        self,
        key: str,
        mutate: Mutation[T],
        condition: Condition[T] | None = None,
        reason: str = "precondition failed",
    ) -> T | None:
        """Atomically apply ``mutate`` to the document at ``key``.

        Returns None if the key does not exist. Raises StoreConflictError
        (carrying ``reason``) if ``condition`` rejects the current document.
        """

    @abstractmethod
    def exists(self, key: str) -> bool: ...

    def find_one(self, field: str, value: Any) -> T | None:
        matches = self.find_by(field, value)
        return matches[0] if matches else None


class InMemoryStore(Store[T]):
    """Thread-safe in-memory store implementation."""

    def __init__(self, unique_fields: Iterable[str] = ()) -> None:
        self._data: dict[str, T] = {}
        self._unique_fields = tuple(unique_fields)
        self._lock = threading.RLock()

    def _check_unique(self, key: str, value: T) -> None:
        for field in self._unique_fields:
            wanted = getattr(value, field)
            for other_key, other in self._data.items():
                if other_key != key and getattr(other, field) == wanted:
                    raise StoreConflictError(key, f"{field} {wanted!r} already taken")

    def insert(self, key: str, value: T) -> T:
        with self._lock:
            if key in self._data:
                raise StoreConflictError(key, "key already exists")
            self._check_unique(key, value)
            self._data[key] = value
            return value

    def get(self, key: str) -> T | None:
        with self._lock:
            return self._data.get(key)

    def find_by(self, field: str, value: Any) -> list[T]:
        with self._lock:
            return [v for v in self._data.values() if getattr(v, field, None) == value]

    def update(
        self,
        key: str,
        mutate: Mutation[T],
        condition: Condition[T] | None = None,
        reason: str = "precondition failed",
    ) -> T | None:
        with self._lock:
            current = self._data.get(key)
            if current is None:
                return None
            if condition is not None and not condition(current):
                raise StoreConflictError(key, reason)
            updated = mutate(current)
            self._check_unique(key, updated)
            self._data[key] = updated
            return updated

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._data
