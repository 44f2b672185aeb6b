"""Custom exception hierarchy for the HvZ organization platform.

All platform-specific exceptions inherit from HvzError, allowing callers
(an API layer, the CLI) to catch broad or specific failure modes and map
them to their own response codes.
"""

from __future__ import annotations


class HvzError(Exception):
    """Base exception for all HvZ platform errors."""


# --- Identity / Lookup errors ---


class NotFoundError(HvzError):
    """Requested resource does not exist."""


class OrgNotFoundError(NotFoundError):
    """Organization not found."""

    def __init__(self, key: str, field: str = "id") -> None:
        self.key = key
        self.field = field
        super().__init__(f"org with {field} {key!r} not found")


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"user {user_id!r} not found")


class GameNotFoundError(NotFoundError):
    """Game not found."""

    def __init__(self, game_id: str) -> None:
        self.game_id = game_id
        super().__init__(f"game {game_id!r} not found")


# --- Rule errors ---


class UnauthorizedError(HvzError):
    """Actor lacks the role required for the action."""

    def __init__(self, reason: str, user_id: str | None = None) -> None:
        self.reason = reason
        self.user_id = user_id
        super().__init__(reason)


class ConflictError(HvzError):
    """Requested state change would violate an invariant (or lost a race)."""


class InvalidOperationError(HvzError):
    """Request is structurally disallowed regardless of actor."""


# --- Store errors ---


class StoreError(HvzError):
    """Base for persistence layer failures."""


class StoreConflictError(StoreError):
    """Conditional update precondition failed or a unique field is taken."""

    def __init__(self, key: str, reason: str = "") -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"{key}: {reason}" if reason else key)


class StoreWriteError(StoreError):
    """Failed to write to store."""


class StoreReadError(StoreError):
    """Failed to read from store."""


class ConfigurationError(HvzError):
    """Invalid or missing configuration."""
