"""
Public game listing endpoints.

Read-only APIs to list games by rating and fetch a single game.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database

from store import get_game, list_games

from ..deps import get_db

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[dict[str, Any]])
def list_games_endpoint(db: Database = Depends(get_db)) -> list[dict[str, Any]]:
    """Return all games, highest rating first."""

    try:
        return list_games(db)
    except Exception as exc:
        logger.exception("Failed to fetch games")
        raise HTTPException(status_code=500, detail="Failed to fetch games") from exc


@router.get("/{game_id}", response_model=dict[str, Any])
def get_game_endpoint(game_id: str, db: Database = Depends(get_db)) -> dict[str, Any]:
    """Return one game; malformed ids are treated like any other store failure."""

    try:
        game = get_game(db, game_id)
    except Exception as exc:
        logger.exception("Failed to fetch game", extra={"game_id": game_id})
        raise HTTPException(status_code=500, detail="Failed to fetch game") from exc

    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return game
