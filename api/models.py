"""
Pydantic models for API contracts.

Contains request/response models for the EarnWale API endpoints. Game bodies
are free-form JSON objects and have no model here.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status")


class MessageResponse(BaseModel):
    message: str = Field(..., description="Human-readable message")


class ErrorResponse(BaseModel):
    """Body returned for every 4xx/5xx response."""

    error: str = Field(..., description="Error message")


class ClickRequest(BaseModel):
    """Request model for recording a click."""

    gameId: Any = Field(default=None, description="Identifier of the clicked game (not validated)")


class UploadResponse(BaseModel):
    url: str = Field(..., description="Public URL of the stored image")
