"""Filesystem storage for uploaded media."""

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Iterable
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

from echo_board.core.errors import InvalidArgumentError, PersistenceError
from echo_board.core.settings import settings
from echo_board.models import MediaRef, MediaType

logger = logging.getLogger(__name__)

UPLOADS_ROUTE = "/uploads"

# MIME types that do not mention the extension they belong to.
_MIME_HINTS = {
    "txt": "text/plain",
    "mov": "video/quicktime",
    "doc": "msword",
}


def classify_media(content_type: str | None) -> MediaType:
    """Map a MIME type onto the coarse media classification."""
    content_type = (content_type or "").lower()
    if content_type.startswith("image/"):
        return MediaType.IMAGE
    if content_type.startswith("video/"):
        return MediaType.VIDEO
    return MediaType.FILE


class MediaStorage:
    """Stores uploads on disk and releases them when their post goes away."""

    def __init__(
        self,
        root: Path | str,
        *,
        max_files: int = 5,
        max_bytes: int = 50 * 1024 * 1024,
        allowed_extensions: Iterable[str] = (),
    ) -> None:
        self.root = Path(root)
        self.max_files = max_files
        self.max_bytes = max_bytes
        self.allowed_extensions = {ext.lower().lstrip(".") for ext in allowed_extensions}

    def check_batch(self, count: int) -> None:
        """Validate the number of files in one upload request."""
        if count == 0:
            raise InvalidArgumentError("No files uploaded")
        if count > self.max_files:
            raise InvalidArgumentError(f"At most {self.max_files} files may be uploaded at once")

    def is_allowed(self, filename: str, content_type: str | None) -> bool:
        """Return True if both the extension and the MIME subtype are allowed.

        An empty allow list accepts everything.
        """
        if not self.allowed_extensions:
            return True
        extension = PurePosixPath(filename).suffix.lower().lstrip(".")
        mime = (content_type or "").lower()
        mime_ok = any(
            ext in mime or _MIME_HINTS.get(ext, ext) in mime
            for ext in self.allowed_extensions
        )
        return extension in self.allowed_extensions and mime_ok

    def save(
        self,
        filename: str,
        content_type: str | None,
        data: bytes,
        *,
        base_url: str,
    ) -> MediaRef:
        """Write one upload and return its descriptor.

        Raises:
            InvalidArgumentError: If the file is too large or of a disallowed type.
            PersistenceError: If the file cannot be written.
        """
        filename = PurePosixPath(filename or "upload").name
        if len(data) > self.max_bytes:
            raise InvalidArgumentError(f"{filename} exceeds the {self.max_bytes} byte limit")
        if not self.is_allowed(filename, content_type):
            raise InvalidArgumentError("Only images, videos, PDFs, and documents allowed")

        suffix = PurePosixPath(filename).suffix.lower()
        stored_name = f"upload-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            (self.root / stored_name).write_bytes(data)
        except OSError as exc:
            logger.exception("Failed to store upload %s", filename)
            raise PersistenceError(f"Could not store {filename}") from exc

        logger.info("Stored upload %s as %s (%d bytes)", filename, stored_name, len(data))
        return MediaRef(
            file_url=f"{base_url.rstrip('/')}{UPLOADS_ROUTE}/{stored_name}",
            file_name=filename,
            file_type=classify_media(content_type),
            file_size=len(data),
        )

    def delete(self, media: MediaRef) -> bool:
        """Best-effort removal of the file behind `media`.

        Only files directly inside the storage root are touched. Failures are
        logged and reported through the return value, never raised.
        """
        name = PurePosixPath(urlparse(media.file_url).path).name
        if not name:
            return False
        try:
            (self.root / name).unlink()
        except FileNotFoundError:
            logger.warning("Media file %s was already gone", name)
            return False
        except OSError:
            logger.warning("Could not delete media file %s", name, exc_info=True)
            return False
        return True

    def delete_all(self, media: Iterable[MediaRef]) -> None:
        for item in media:
            self.delete(item)


def build_media_storage() -> MediaStorage:
    """Create the storage configured by the application settings."""
    return MediaStorage(
        settings.upload_dir,
        max_files=settings.max_upload_files,
        max_bytes=settings.max_upload_bytes,
        allowed_extensions=settings.allowed_upload_extensions,
    )
