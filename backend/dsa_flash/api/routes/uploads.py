"""Image upload and health routes."""

import logging

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status

from dsa_flash.config import sanitize_error
from dsa_flash.schemas.uploads import HealthResponse, ImageUploadResponse
from dsa_flash.services import image_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post("/upload", response_model=ImageUploadResponse)
async def upload_image(
    request: Request,
    image: UploadFile | None = File(None),
) -> ImageUploadResponse:
    """
    Store an image sent as multipart field ``image``.

    Returns the absolute URL the image is served from.
    """
    if image is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )

    data = await image.read()
    try:
        filename = await image_storage.save_image(image.filename, data)
    except OSError as e:
        logger.exception("Failed to store uploaded image %s", image.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=sanitize_error(e, generic_message="Failed to store image."),
        ) from e

    return ImageUploadResponse(
        image_url=image_storage.public_url(str(request.base_url), filename),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="OK", message="Server is running")
