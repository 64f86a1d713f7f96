"""Image upload staging and hand-off to the image host."""

from __future__ import annotations

import logging
import os
import tempfile

from werkzeug.datastructures import FileStorage

from storage.abstract_storage import AbstractStorage
from utils.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {"image/jpeg": ".jpg", "image/png": ".png"}


class UploadService:
    """Validate an uploaded image, stage it on disk, and push it to storage."""

    def __init__(
        self,
        storage: AbstractStorage,
        staging_dir: str,
        folder: str = "Blog",
        max_size: int = 2 * 1024 * 1024,
    ):
        self.storage = storage
        self.staging_dir = staging_dir
        self.folder = folder
        self.max_size = max_size

    def oversize_error(self) -> ValidationError:
        limit_mib = self.max_size / (1024 * 1024)
        return ValidationError(f"Image exceeds the maximum upload size of {limit_mib:g}MB")

    def _validate(self, file: FileStorage | None) -> str:
        if not isinstance(file, FileStorage) or not (file.filename or "").strip():
            raise ValidationError("An image file is required")

        suffix = ALLOWED_IMAGE_TYPES.get(file.mimetype)
        if suffix is None:
            raise ValidationError("Only JPEG and PNG images are allowed")

        file.stream.seek(0, os.SEEK_END)
        size = file.stream.tell()
        file.stream.seek(0)
        if size > self.max_size:
            raise self.oversize_error()
        return suffix

    def upload_image(self, file: FileStorage | None) -> str:
        """Return the hosted URL for ``file``."""

        suffix = self._validate(file)

        os.makedirs(self.staging_dir, exist_ok=True)
        fd, staged_path = tempfile.mkstemp(suffix=suffix, dir=self.staging_dir)
        os.close(fd)
        try:
            file.save(staged_path)
            url = self.storage.upload(staged_path, folder=self.folder)
        finally:
            if os.path.exists(staged_path):
                os.remove(staged_path)

        logger.info("Uploaded image to %s", url)
        return url
