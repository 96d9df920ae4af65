"""Durable key-value storage for serialized carts."""
import base64
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional


class CartStorageError(Exception):
    """Raised when cart storage cannot be read or written."""


class CartStorage(ABC):
    """Abstract base class for cart blob storage."""

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Get the blob stored under ``key``, or None."""
        pass

    @abstractmethod
    def save(self, key: str, blob: str) -> None:
        """Store ``blob`` under ``key``, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the blob stored under ``key`` if present."""
        pass


class InMemoryCartStorage(CartStorage):
    """Process-local storage, used in tests and as a fallback."""

    def __init__(self):
        self._blobs: Dict[str, str] = {}

    def load(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def save(self, key: str, blob: str) -> None:
        self._blobs[key] = blob

    def delete(self, key: str) -> None:
        self._blobs.pop(key, None)


class FileCartStorage(CartStorage):
    """Stores each cart as a JSON file in a directory."""

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        # Reversible encoding, so distinct keys never share a file
        name = base64.urlsafe_b64encode(key.encode("utf-8")).decode("ascii").rstrip("=")
        return self.directory / f"{name}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CartStorageError(f"Cannot read cart '{key}': {e}") from e

    def save(self, key: str, blob: str) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(blob, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise CartStorageError(f"Cannot write cart '{key}': {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise CartStorageError(f"Cannot delete cart '{key}': {e}") from e
