"""Click recording endpoint."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database

from store import record_click

from ..deps import get_db
from ..models import ClickRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=dict[str, Any])
def record_click_endpoint(req: ClickRequest, db: Database = Depends(get_db)) -> dict[str, Any]:
    """Append a click for req.gameId and return the stored record."""

    try:
        return record_click(db, req.gameId)
    except Exception as exc:
        logger.exception("Failed to record click")
        raise HTTPException(status_code=500, detail="Failed to record click") from exc
