from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from bson import ObjectId
from pymongo import DESCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from config import config
from ids import format_object_id, parse_object_id

logger = logging.getLogger(__name__)

GAMES_COLLECTION = "games"
CLICKS_COLLECTION = "clicks"

# Fields the store owns; never taken from a request body
RESERVED_FIELDS = ("_id", "createdAt", "updatedAt")

Document = dict[str, Any]


@lru_cache(maxsize=4)
def get_client(uri: str | None = None) -> MongoClient:
    """Get a MongoDB client, created on first use and reused afterwards.

    Args:
        uri: Optional connection string. If None, uses config.MONGODB_URI.

    Returns:
        MongoClient: Cached client for the given connection string.

    Note:
        MongoClient connects lazily and is thread-safe, so one instance is
        shared by every request handled in this process.
    """
    resolved = uri or config.MONGODB_URI
    logger.info("Creating MongoDB client")
    return MongoClient(resolved, tz_aware=True)


def get_database(client: MongoClient | None = None, name: str | None = None) -> Database:
    cl = client or get_client()
    return cl[name or config.database_name]


def get_collections(db: Database) -> tuple[Collection, Collection]:
    """Return (games, clicks) collections."""
    return db[GAMES_COLLECTION], db[CLICKS_COLLECTION]


def _now() -> datetime:
    # MongoDB keeps millisecond precision; truncate so writes read back identically
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def _format_datetime(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


def _to_json_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return format_object_id(value)
    if isinstance(value, datetime):
        return _format_datetime(value)
    if isinstance(value, Mapping):
        return {str(k): _to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json_value(v) for v in value]
    return value


def serialize_document(doc: Mapping[str, Any]) -> Document:
    """Convert a stored document into JSON-ready primitives (ObjectId → str, datetime → ISO Z)."""
    return _to_json_value(doc)


def _writable_fields(payload: Mapping[str, Any]) -> Document:
    return {k: v for k, v in payload.items() if k not in RESERVED_FIELDS}


def list_games(db: Database) -> list[Document]:
    """Return every game, highest rating first."""
    games, _ = get_collections(db)
    cursor = games.find().sort("rating", DESCENDING)
    return [serialize_document(doc) for doc in cursor]


def get_game(db: Database, game_id: str) -> Document | None:
    """Return one game by id, or None when no game has that id.

    Raises:
        InvalidGameId: If game_id is not a valid ObjectId
    """
    games, _ = get_collections(db)
    doc = games.find_one({"_id": parse_object_id(game_id)})
    return serialize_document(doc) if doc is not None else None


def create_game(db: Database, payload: Mapping[str, Any]) -> Document:
    """Persist a new game from arbitrary admin-supplied fields."""
    games, _ = get_collections(db)
    now = _now()
    doc: Document = {**_writable_fields(payload), "createdAt": now, "updatedAt": now}
    result = games.insert_one(doc)
    doc["_id"] = result.inserted_id
    logger.info("Created game %s", result.inserted_id)
    return serialize_document(doc)


def update_game(db: Database, game_id: str, payload: Mapping[str, Any]) -> Document | None:
    """Merge payload into an existing game and return the updated document.

    Returns:
        The updated game, or None when no game has that id.

    Raises:
        InvalidGameId: If game_id is not a valid ObjectId
    """
    games, _ = get_collections(db)
    changes = {**_writable_fields(payload), "updatedAt": _now()}
    doc = games.find_one_and_update(
        {"_id": parse_object_id(game_id)},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        return None
    logger.info("Updated game %s", game_id)
    return serialize_document(doc)


def delete_game(db: Database, game_id: str) -> Document | None:
    """Delete a game and return the removed document, or None if it did not exist."""
    games, _ = get_collections(db)
    doc = games.find_one_and_delete({"_id": parse_object_id(game_id)})
    if doc is None:
        return None
    logger.info("Deleted game %s", game_id)
    return serialize_document(doc)


def record_click(db: Database, game_id: Any) -> Document:
    """Append a click event for game_id. The game is not required to exist."""
    _, clicks = get_collections(db)
    now = _now()
    doc: Document = {"gameId": game_id, "createdAt": now, "updatedAt": now}
    result = clicks.insert_one(doc)
    doc["_id"] = result.inserted_id
    return serialize_document(doc)


__all__ = [
    "CLICKS_COLLECTION",
    "GAMES_COLLECTION",
    "create_game",
    "delete_game",
    "get_client",
    "get_collections",
    "get_database",
    "get_game",
    "list_games",
    "record_click",
    "serialize_document",
    "update_game",
]
