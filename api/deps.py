"""
FastAPI dependency injection providers.

Centralizes dependencies (DI) to keep endpoints decoupled from global imports.
"""

import secrets

from fastapi import Depends, Header, HTTPException
from pymongo.database import Database

from blob import BlobStore
from config import Config
from config import config as global_config
from store import get_client, get_database


def get_settings() -> Config:
    """
    FastAPI dependency to provide Config.

    Returns:
        Config: The global configuration instance.
    """
    return global_config


def get_db(cfg: Config = Depends(get_settings)) -> Database:
    """
    FastAPI dependency to provide the MongoDB database.

    Args:
        cfg: Configuration instance (injected)

    Returns:
        Database: Database handle on the cached client for cfg.MONGODB_URI
    """
    return get_database(get_client(cfg.MONGODB_URI), cfg.database_name)


def get_blob_store(cfg: Config = Depends(get_settings)) -> BlobStore:
    """FastAPI dependency to provide the public blob store."""
    return BlobStore.from_config(cfg)


def require_admin(
    authorization: str | None = Header(default=None),
    cfg: Config = Depends(get_settings),
) -> None:
    """
    Reject the request with 401 unless it carries ``Bearer <ADMIN_TOKEN>``.

    Raises:
        HTTPException: 401 when the header is missing, malformed, or does not
            match, and always when no ADMIN_TOKEN is configured.
    """
    token = None
    if authorization and authorization.startswith("Bearer "):
        token = authorization[len("Bearer "):]

    expected = cfg.ADMIN_TOKEN
    if not token or not expected or not secrets.compare_digest(token.encode(), expected.encode()):
        raise HTTPException(status_code=401, detail="Unauthorized")
