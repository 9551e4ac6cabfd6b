"""Public blob storage client.

Provides BlobStore.put() for uploading files to the Vercel Blob HTTP API and
getting back their public URL.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote

import requests

from config import Config
from config import config as global_config

logger = logging.getLogger(__name__)


class BlobError(RuntimeError):
    """Raised when a blob cannot be stored."""


@dataclass(frozen=True)
class BlobResult:
    url: str
    pathname: str
    content_type: str | None = None


class BlobStore:
    """Thin client for storing public blobs over HTTP."""

    def __init__(
        self,
        token: str | None,
        *,
        base_url: str = "https://blob.vercel-storage.com",
        api_version: str = "7",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, cfg: Config | None = None) -> BlobStore:
        cfg = cfg or global_config
        return cls(
            cfg.BLOB_READ_WRITE_TOKEN,
            base_url=cfg.BLOB_API_URL,
            api_version=cfg.BLOB_API_VERSION,
            timeout=cfg.BLOB_TIMEOUT,
        )

    def put(self, pathname: str, data: bytes, *, content_type: str | None = None) -> BlobResult:
        """Upload data with public access under pathname.

        Args:
            pathname: Name to store the blob under (the original filename)
            data: Raw file contents
            content_type: MIME type recorded with the blob

        Returns:
            BlobResult with the public URL assigned by the store

        Raises:
            BlobError: If no token is configured, the request fails, or the
                response has no URL
        """
        if not self.token:
            raise BlobError("BLOB_READ_WRITE_TOKEN is required for uploads")
        if not pathname:
            raise BlobError("pathname is required")

        headers = {
            "authorization": f"Bearer {self.token}",
            "x-api-version": self.api_version,
            "x-access": "public",
        }
        if content_type:
            headers["x-content-type"] = content_type

        url = f"{self.base_url}/{quote(pathname)}"
        try:
            resp = self.session.put(url, data=data, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise BlobError(f"Blob upload failed: {exc}") from exc

        if not resp.ok:
            raise BlobError(f"Blob upload failed with status {resp.status_code}: {resp.text[:200]}")

        try:
            body = resp.json()
        except ValueError as exc:
            raise BlobError("Blob store returned a non-JSON response") from exc

        public_url = body.get("url") if isinstance(body, dict) else None
        if not public_url:
            raise BlobError("Blob store response did not include a url")

        logger.info("Stored blob %s", pathname)
        return BlobResult(
            url=str(public_url),
            pathname=str(body.get("pathname") or pathname),
            content_type=body.get("contentType") or content_type,
        )


__all__ = ["BlobError", "BlobResult", "BlobStore"]
