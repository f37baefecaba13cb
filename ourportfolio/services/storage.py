"""Image storage for profile, portfolio and project pictures."""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

from ourportfolio.config import get_settings
from ourportfolio.exceptions import AppError, ErrorKind

logger = logging.getLogger("ourportfolio")

IMAGE_SUBDIR = "images"
ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


@dataclass
class ImageUpload:
    """Raw image bytes received from a client."""

    data: bytes
    content_type: str | None


class StorageService:
    """Writes uploaded images to the upload directory and hands back their public URL."""

    def validate_image(self, content_type: str | None, size: int) -> str | None:
        """Validate image metadata. Returns error message or None if valid."""
        settings = get_settings()
        if content_type not in ALLOWED_IMAGE_TYPES:
            return f"Unsupported image type '{content_type}'. Allowed: {', '.join(sorted(ALLOWED_IMAGE_TYPES))}"
        if size == 0:
            return "Image is empty"
        if size > settings.MAX_IMAGE_SIZE_MB * 1024 * 1024:
            return f"Image too large ({size // (1024 * 1024)}MB). Maximum: {settings.MAX_IMAGE_SIZE_MB}MB"
        return None

    def upload_file(self, data: bytes, content_type: str | None) -> str:
        """Store image bytes and return the URL they are served from.

        Raises AppError(UNSUPPORTED_IMAGE) for bad input and AppError(STORAGE_FAILURE)
        when the write itself fails.
        """
        error = self.validate_image(content_type, len(data))
        if error:
            raise AppError(ErrorKind.UNSUPPORTED_IMAGE, error)

        settings = get_settings()
        stored_filename = f"{uuid.uuid4()}{ALLOWED_IMAGE_TYPES[content_type]}"
        image_dir = Path(settings.UPLOAD_DIR) / IMAGE_SUBDIR
        file_path = image_dir / stored_filename

        try:
            image_dir.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(data)
        except OSError as e:
            logger.error("Image upload failed for %s: %s", file_path, e)
            file_path.unlink(missing_ok=True)
            raise AppError(ErrorKind.STORAGE_FAILURE) from e

        return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{IMAGE_SUBDIR}/{stored_filename}"

    def resolve_path(self, url: str | None) -> Path | None:
        """Map a URL produced by upload_file back to its file. None for foreign URLs."""
        settings = get_settings()
        prefix = f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{IMAGE_SUBDIR}/"
        if not url or not url.startswith(prefix):
            return None
        name = url[len(prefix) :]
        if not name or "/" in name or name.startswith("."):
            return None
        return Path(settings.UPLOAD_DIR) / IMAGE_SUBDIR / name

    def delete_file(self, url: str | None) -> bool:
        """Remove a previously stored image. Returns True if a file was deleted."""
        file_path = self.resolve_path(url)
        if file_path is None or not file_path.exists():
            return False
        try:
            file_path.unlink()
        except OSError as e:
            logger.warning("Could not remove superseded image %s: %s", file_path, e)
            return False
        return True


_storage_service: StorageService | None = None


def get_storage_service() -> StorageService:
    """Get singleton storage service instance."""
    global _storage_service
    if _storage_service is None:
        _storage_service = StorageService()
    return _storage_service
