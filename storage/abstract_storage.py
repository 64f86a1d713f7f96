"""Storage abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractStorage(ABC):
    """Interface for image hosting backends."""

    @abstractmethod
    def upload(self, source_path: str, folder: str) -> str:
        """Persist the file at ``source_path`` under ``folder``; return its public URL."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return whether the given relative path exists in storage."""
