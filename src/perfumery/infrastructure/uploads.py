"""Product image uploads stored on the local filesystem."""

from __future__ import annotations

import random
import re
import time
from pathlib import Path

import structlog

from perfumery.domain.exceptions import UploadRejectedError

logger = structlog.get_logger(__name__)

ALLOWED_TYPES = re.compile(r"jpeg|jpg|png|gif|webp")
PUBLIC_PREFIX = "/uploads"


class ImageStore:
    """Validates and writes uploaded images into ``upload_dir``.

    Both the file extension and the declared MIME type must name an
    allowed image format.
    """

    def __init__(self, upload_dir: Path, max_bytes: int = 5 * 1024 * 1024) -> None:
        self._upload_dir = Path(upload_dir)
        self._max_bytes = max_bytes
        self._upload_dir.mkdir(parents=True, exist_ok=True)

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def save(self, filename: str, content_type: str | None, data: bytes) -> str:
        """Store one image and return its public path (``/uploads/<file>``)."""
        if len(data) > self._max_bytes:
            raise UploadRejectedError(
                f"File too large. Maximum size is {self._max_bytes // (1024 * 1024)}MB."
            )

        extension = Path(filename or "").suffix.lower()
        if not ALLOWED_TYPES.search(extension) or not ALLOWED_TYPES.search(content_type or ""):
            raise UploadRejectedError("Only image files are allowed!")

        stored_name = (
            f"perfume-{int(time.time() * 1000)}-{random.randint(0, 10**9 - 1)}{extension}"
        )
        (self._upload_dir / stored_name).write_bytes(data)
        logger.info("image_stored", file=stored_name, size=len(data))
        return f"{PUBLIC_PREFIX}/{stored_name}"

    def discard(self, public_path: str | None) -> None:
        """Remove an image stored by :meth:`save` whose product was never written."""
        if not public_path or not public_path.startswith(f"{PUBLIC_PREFIX}/"):
            return
        (self._upload_dir / public_path[len(PUBLIC_PREFIX) + 1:]).unlink(missing_ok=True)
        logger.info("image_discarded", file=public_path)
