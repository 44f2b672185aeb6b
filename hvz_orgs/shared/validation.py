"""Input validation for the HvZ platform. All boundary inputs must pass through here."""

from __future__ import annotations

import re

_SLUG_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9\-_]{0,62}[a-z0-9])?$")
_MAX_NAME_LENGTH = 128
_MAX_ID_LENGTH = 128


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


def validate_name(name: str, field: str = "name") -> str:
    """Validate a human-readable label (org name, game name).

    Any printable text is accepted, including non-ASCII letters and
    punctuation; only blank, over-long or control-character input is refused.
    """
    if not name or not name.strip():
        raise ValidationError(field, "cannot be empty")
    name = name.strip()
    if len(name) > _MAX_NAME_LENGTH:
        raise ValidationError(field, f"cannot exceed {_MAX_NAME_LENGTH} chars")
    if not name.isprintable():
        raise ValidationError(field, "cannot contain control characters")
    return name


def validate_slug(slug: str, field: str = "url") -> str:
    """Validate an org url handle (lowercase slug)."""
    if not slug or not slug.strip():
        raise ValidationError(field, "cannot be empty")
    slug = slug.strip()
    if not _SLUG_PATTERN.match(slug):
        raise ValidationError(
            field,
            "must be 1-64 chars of lowercase alphanumeric/hyphens/underscores, starting and ending with alphanumeric",
        )
    return slug


def validate_id(id_value: str, field: str = "id") -> str:
    """Validate an opaque identifier (user, org or game id)."""
    if not id_value or not id_value.strip():
        raise ValidationError(field, "cannot be empty")
    if len(id_value) > _MAX_ID_LENGTH:
        raise ValidationError(field, f"cannot exceed {_MAX_ID_LENGTH} chars")
    return id_value.strip()
