"""Image asset storage on the local filesystem."""

import logging
import os
import re
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from app.config import get_settings
from app.exceptions import ValidationError

logger = logging.getLogger("happy_homes")

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
URL_PREFIX = "/uploads"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str) -> str:
    """Reduce a client-supplied name to a short, path-free, ASCII-safe form."""
    name = _UNSAFE_CHARS.sub("_", Path(filename).name).strip("._")
    return name[-100:] or "image"


class ImageStore:
    """Stores uploaded images under ``upload_dir`` and hands out ``/uploads/<name>`` references."""

    def __init__(self, upload_dir: str | Path, max_size_mb: int = 10) -> None:
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_size_mb * 1024 * 1024
        self.max_size_mb = max_size_mb

    def validate_upload_metadata(self, filename: str, content_type: str | None) -> str | None:
        """Validate upload file metadata (extension + MIME). Returns error message or None if valid."""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            return f"Unsupported image type '{ext}'. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        if content_type and not content_type.startswith("image/"):
            return f"Invalid content type '{content_type}'. Must be an image."
        return None

    def make_stored_name(self, original_name: str) -> str:
        # Millisecond timestamp plus a random suffix: unique even for same-instant uploads.
        return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}-{safe_filename(original_name)}"

    def path_for(self, reference: str) -> Path:
        """Map a reference back to a file inside the upload directory."""
        return self.upload_dir / Path(reference).name

    async def store(self, upload: UploadFile) -> str:
        """Stream an uploaded image to disk. Returns its reference.

        Raises ValidationError for a bad type or an oversized file.
        """
        original_name = upload.filename or "image"
        error = self.validate_upload_metadata(original_name, upload.content_type)
        if error:
            raise ValidationError(error)

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        stored_name = self.make_stored_name(original_name)
        file_path = self.upload_dir / stored_name
        file_size = 0
        chunk_size = 1024 * 64

        try:
            with open(file_path, "wb") as f:
                while True:
                    chunk = await upload.read(chunk_size)
                    if not chunk:
                        break
                    file_size += len(chunk)
                    if file_size > self.max_bytes:
                        raise ValidationError(
                            f"Image '{original_name}' is too large. Maximum: {self.max_size_mb}MB"
                        )
                    f.write(chunk)
        except ValidationError:
            if file_path.exists():
                os.remove(file_path)
            raise

        return f"{URL_PREFIX}/{stored_name}"

    def delete(self, reference: str) -> bool:
        """Remove the file behind a reference. Missing files and OS errors are not fatal.

        Returns True if a file was removed.
        """
        file_path = self.path_for(reference)
        try:
            os.remove(file_path)
        except FileNotFoundError:
            return False
        except OSError:
            logger.exception("Failed to delete image %s", file_path)
            return False
        return True

    def delete_many(self, references: list[str]) -> None:
        for reference in references:
            self.delete(reference)


_image_store: ImageStore | None = None


def get_image_store() -> ImageStore:
    """Get singleton image store for the configured upload directory."""
    global _image_store
    if _image_store is None:
        settings = get_settings()
        _image_store = ImageStore(settings.UPLOAD_DIR, settings.MAX_IMAGE_SIZE_MB)
    return _image_store
