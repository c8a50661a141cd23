"""Services for external integrations."""

from dsa_flash.services.images import image_storage

__all__ = ["image_storage"]
