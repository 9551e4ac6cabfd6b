"""Canonical game id handling.

Provides a single source of truth for converting between the string ids seen
by API callers and the ObjectIds stored in MongoDB.
"""

from bson import ObjectId
from bson.errors import InvalidId


class InvalidGameId(ValueError):
    """Raised when a caller-supplied id is not a valid ObjectId."""


def parse_object_id(value: str) -> ObjectId:
    """Convert a string id into an ObjectId.

    Args:
        value: 24-character hex string as returned in a document's ``_id``

    Returns:
        The matching ObjectId

    Raises:
        InvalidGameId: If value is not a valid ObjectId

    Examples:
        >>> parse_object_id("65a1b2c3d4e5f6a7b8c9d0e1")
        ObjectId('65a1b2c3d4e5f6a7b8c9d0e1')
    """
    # ObjectId(None) would mint a fresh id
    if not isinstance(value, str):
        raise InvalidGameId(f"Invalid game id: {value!r}")
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise InvalidGameId(f"Invalid game id: {value!r}") from exc


def format_object_id(value: ObjectId) -> str:
    """Render an ObjectId the way it appears in JSON responses."""
    return str(value)


__all__ = ["InvalidGameId", "format_object_id", "parse_object_id"]
