"""Upload and health schemas."""

from dsa_flash.schemas.base import BaseSchema


class ImageUploadResponse(BaseSchema):
    """Public URL of a stored image."""

    image_url: str


class HealthResponse(BaseSchema):
    """Liveness check body."""

    status: str
    message: str
