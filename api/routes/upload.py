"""
Image upload endpoint.

Accepts a single multipart ``file`` field, checks it is a reasonably sized
image and stores it in public blob storage.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from blob import BlobStore
from config import Config

from ..deps import get_blob_store, get_settings
from ..models import UploadResponse

router = APIRouter()
logger = logging.getLogger(__name__)

FILE_FIELD = "file"


@router.post(
    "",
    response_model=UploadResponse,
    summary="Upload an image",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "multipart/form-data": {
                    "schema": {
                        "type": "object",
                        "properties": {FILE_FIELD: {"type": "string", "format": "binary"}},
                    }
                }
            },
        }
    },
)
async def upload_endpoint(
    request: Request,
    cfg: Config = Depends(get_settings),
    blobs: BlobStore = Depends(get_blob_store),
) -> UploadResponse:
    """
    Store an uploaded image and return its public URL.

    The ``file`` form field must be an actual file part with a filename; a
    plain text field or a nameless part counts as no file.

    Raises:
        HTTPException: 400 when the file is missing, not an image, or larger
            than MAX_UPLOAD_BYTES; 500 for malformed forms and storage failures
    """
    try:
        async with request.form() as form:
            upload = form.get(FILE_FIELD)

            if not isinstance(upload, UploadFile) or not upload.filename:
                raise HTTPException(status_code=400, detail="No file provided")

            if not (upload.content_type or "").startswith("image/"):
                raise HTTPException(status_code=400, detail="File must be an image")

            limit = cfg.MAX_UPLOAD_BYTES
            # Read one byte past the limit so oversized files never load fully
            data = await upload.read(limit + 1)
            if len(data) > limit:
                raise HTTPException(status_code=400, detail="File size must be less than 5MB")

            result = await run_in_threadpool(blobs.put, upload.filename, data, content_type=upload.content_type)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("Upload error")
        raise HTTPException(status_code=500, detail="Failed to upload image") from exc

    return UploadResponse(url=result.url)
