from __future__ import annotations

from typing import Annotated
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_DATABASE = "earnwale"


class Config(BaseSettings):
    """Centralized, type-safe configuration loaded from environment variables.

    Uses pydantic-settings to support .env files and runtime validation.
    """

    # Document store
    MONGODB_URI: str = Field(
        default="mongodb://localhost:27017/earnwale",
        description="MongoDB connection string for games and clicks.",
    )

    MONGODB_DATABASE: str | None = Field(
        default=None,
        description="Database name. Falls back to the database in MONGODB_URI, then 'earnwale'.",
    )

    # Admin auth
    ADMIN_TOKEN: str | None = Field(
        default=None,
        description="Static bearer token required by /api/admin routes. Unset rejects every admin call.",
    )

    # Blob storage
    BLOB_READ_WRITE_TOKEN: str | None = Field(
        default=None,
        description="Read/write token for the public blob store (required for uploads).",
    )

    BLOB_API_URL: str = Field(
        default="https://blob.vercel-storage.com",
        description="Base URL of the blob storage HTTP API.",
    )

    BLOB_API_VERSION: str = Field(default="7", description="Value sent in the x-api-version header.")
    BLOB_TIMEOUT: float = Field(default=30.0, gt=0, description="Blob upload timeout in seconds.")

    # Uploads
    MAX_UPLOAD_BYTES: int = Field(default=5 * 1024 * 1024, ge=1)

    # API configuration
    # Env value reaches parse_cors_origins as a raw string
    API_CORS_ORIGINS: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Allowed CORS origins for FastAPI (comma-separated env or JSON list).",
    )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("BLOB_API_URL")
    @classmethod
    def normalize_blob_api_url(cls, value: str) -> str:
        value = value.strip()
        if value.endswith("/"):
            value = value[:-1]
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("BLOB_API_URL must be a valid http(s) URL")
        return value

    @field_validator("MONGODB_URI")
    @classmethod
    def validate_mongodb_uri(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MONGODB_URI must start with mongodb:// or mongodb+srv://")
        return value

    @field_validator("ADMIN_TOKEN", "BLOB_READ_WRITE_TOKEN", "MONGODB_DATABASE", mode="before")
    @classmethod
    def blank_to_none(cls, v):  # type: ignore[no-redef]
        # Empty env vars mean "not configured"
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("API_CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):  # type: ignore[no-redef]
        """
        Accept list[str], JSON array string, or comma-separated string.

        Examples:
            - None or "" → []
            - ["http://localhost:3000"] → ["http://localhost:3000"]
            - '["http://localhost:3000"]' → ["http://localhost:3000"]
            - "http://localhost:3000,http://127.0.0.1:5173" → ["http://localhost:3000", "http://127.0.0.1:5173"]
        """
        if v is None or v == "":
            return []
        if isinstance(v, list):
            return [str(s).strip() for s in v if str(s).strip()]
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):
                import json

                try:
                    arr = json.loads(s)
                    return [str(x).strip() for x in arr if str(x).strip()]
                except json.JSONDecodeError:
                    pass
            return [p.strip() for p in s.split(",") if p.strip()]
        return [str(v).strip()]

    # Convenience helpers
    @property
    def database_name(self) -> str:
        if self.MONGODB_DATABASE:
            return self.MONGODB_DATABASE
        # Only the path matters; srv URIs would need DNS to parse fully
        path = urlparse(self.MONGODB_URI).path.lstrip("/")
        return path or DEFAULT_DATABASE

    @property
    def has_admin_token(self) -> bool:
        return bool(self.ADMIN_TOKEN)

    @property
    def has_blob_token(self) -> bool:
        return bool(self.BLOB_READ_WRITE_TOKEN)


# Eagerly load configuration at import time for convenience across modules
config = Config()
