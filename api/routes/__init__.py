"""
API route composition.

Provides a shared APIRouter instance for organizing route modules.
"""

from fastapi import APIRouter, Depends

from ..deps import require_admin
from ..models import ErrorResponse
from .admin import router as admin_router
from .clicks import router as clicks_router
from .games import router as games_router
from .upload import router as upload_router

# Shared router for all API routes
api_router = APIRouter(responses={500: {"model": ErrorResponse}})

# Public endpoints
api_router.include_router(games_router, prefix="/games", tags=["games"])
api_router.include_router(clicks_router, prefix="/clicks", tags=["clicks"])
api_router.include_router(upload_router, prefix="/upload", tags=["upload"])

# Admin endpoints share one bearer-token gate
api_router.include_router(
    admin_router,
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)
