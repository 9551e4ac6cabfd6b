"""
Admin game management endpoints.

Every route here sits behind require_admin (see routes/__init__.py), so
handlers only run for requests carrying the configured bearer token. Create
and update read their JSON body themselves, after that check, so a malformed
body from an unauthorized caller still gets 401.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from pymongo.database import Database

from store import create_game, delete_game, update_game

from ..deps import get_db
from ..models import MessageResponse

router = APIRouter()
logger = logging.getLogger(__name__)


async def read_game_fields(request: Request) -> dict[str, Any]:
    """Parse the request body as a JSON object of game fields.

    Raises:
        ValueError: If the body is not valid JSON or not a JSON object
    """
    body = await request.json()
    if not isinstance(body, dict):
        raise ValueError("Game body must be a JSON object")
    return body


@router.post("/games", status_code=201, response_model=dict[str, Any])
async def create_game_endpoint(request: Request, db: Database = Depends(get_db)) -> dict[str, Any]:
    """Persist the request body as a new game."""

    try:
        body = await read_game_fields(request)
        return await run_in_threadpool(create_game, db, body)
    except Exception as exc:
        logger.exception("Failed to create game")
        raise HTTPException(status_code=500, detail="Failed to create game") from exc


@router.put("/games/{game_id}", response_model=dict[str, Any])
async def update_game_endpoint(
    game_id: str,
    request: Request,
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    """Merge the request body into an existing game."""

    try:
        body = await read_game_fields(request)
        game = await run_in_threadpool(update_game, db, game_id, body)
    except Exception as exc:
        logger.exception("Failed to update game", extra={"game_id": game_id})
        raise HTTPException(status_code=500, detail="Failed to update game") from exc

    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return game


@router.delete("/games/{game_id}", response_model=MessageResponse)
def delete_game_endpoint(game_id: str, db: Database = Depends(get_db)) -> MessageResponse:
    try:
        game = delete_game(db, game_id)
    except Exception as exc:
        logger.exception("Failed to delete game", extra={"game_id": game_id})
        raise HTTPException(status_code=500, detail="Failed to delete game") from exc

    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return MessageResponse(message="Game deleted successfully")
