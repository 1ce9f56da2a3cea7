"""Storage for uploaded product images, served back under UPLOAD_URL_PREFIX."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from plantshop.schemas.catalog import UploadedImage

if TYPE_CHECKING:
    from plantshop.core.config import Settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif", ".webp"})


class InvalidImageError(Exception):
    """Raised when an uploaded image is empty, too large or of an unsupported type."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def _extension(filename: str) -> str:
    return Path(filename).suffix.lower()


def validate_image(image: UploadedImage, settings: Settings) -> None:
    ext = _extension(image.filename)
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise InvalidImageError(
            f"Image must be one of: {', '.join(sorted(ALLOWED_IMAGE_EXTENSIONS))}."
        )
    if not image.content:
        raise InvalidImageError("Uploaded image is empty.")
    if len(image.content) > settings.MAX_IMAGE_BYTES:
        raise InvalidImageError(
            f"Image size must not exceed {settings.MAX_IMAGE_BYTES} bytes."
        )


def save_image(image: UploadedImage, settings: Settings) -> str:
    """
    Write the image to UPLOAD_DIR under a random name and return its public path.

    The original filename only contributes its extension.
    """
    validate_image(image, settings)
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    stored_name = f"{uuid.uuid4().hex}{_extension(image.filename)}"
    (upload_dir / stored_name).write_bytes(image.content)
    logger.info("Stored product image %s (%d bytes)", stored_name, len(image.content))
    return f"{settings.UPLOAD_URL_PREFIX}/{stored_name}"


def delete_image(image_url: str, settings: Settings) -> None:
    """Remove a stored upload given the public path save_image returned."""
    prefix = f"{settings.UPLOAD_URL_PREFIX}/"
    if not image_url.startswith(prefix):
        return
    stored = Path(settings.UPLOAD_DIR) / image_url[len(prefix):]
    stored.unlink(missing_ok=True)
    logger.info("Removed product image %s", stored.name)
