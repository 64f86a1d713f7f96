"""Local filesystem image host."""

from __future__ import annotations

import os
import shutil
import uuid
from pathlib import Path

from werkzeug.utils import secure_filename

from .abstract_storage import AbstractStorage


class LocalStorage(AbstractStorage):
    """Copy uploads under ``base_directory`` and serve them from ``base_url``."""

    def __init__(self, upload_dir: str, base_url: str = "/uploads"):
        self.base_directory = Path(upload_dir).resolve()
        self.base_url = base_url.rstrip("/")
        os.makedirs(self.base_directory, exist_ok=True)

    def upload(self, source_path: str, folder: str) -> str:
        """Copy a staged file into ``folder`` and return the URL it is served at."""

        safe_folder = secure_filename(folder)
        if not safe_folder:
            raise ValueError("Folder must contain at least one valid character.")

        suffix = Path(source_path).suffix.lower()
        stored_name = f"{uuid.uuid4().hex}{suffix}"
        destination_dir = self.base_directory / safe_folder
        os.makedirs(destination_dir, exist_ok=True)
        shutil.copyfile(source_path, destination_dir / stored_name)

        return f"{self.base_url}/{safe_folder}/{stored_name}"

    def exists(self, path: str) -> bool:
        """Return True if the given relative path exists within the upload directory."""

        return (self.base_directory / path).is_file()

