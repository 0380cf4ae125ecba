"""
String key-value storage backends for the user data blob.

Backends follow the browser localStorage contract: get_item / set_item /
remove_item on whole string values. Any failure of the underlying medium is
raised as StorageError; callers decide how to degrade.
"""

import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from unimaz.config import Settings, get_settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the persistence medium cannot be read or written."""


class CorruptStorageError(StorageError):
    """Raised when stored data was read but cannot be decoded."""


class StorageBackend(ABC):
    """Minimal string key-value store."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Stored value, or None if the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete key. Deleting a missing key is not an error."""


class MemoryStorage(StorageBackend):
    """Process-local storage, used for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class JsonFileStorage(StorageBackend):
    """
    All items kept in one JSON object on disk.

    Every write rewrites the file through a temporary sibling and os.replace,
    so readers never observe a partially written file.
    """

    def __init__(self, path: os.PathLike | str) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, str]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e

        if not raw.strip():
            return {}
        try:
            items = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptStorageError(f"Corrupt storage file {self.path}: {e}") from e
        if not isinstance(items, dict):
            raise CorruptStorageError(f"Corrupt storage file {self.path}: expected an object")
        return {str(k): v for k, v in items.items() if isinstance(v, str)}

    def _write_all(self, items: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(json.dumps(items, ensure_ascii=False, indent=2).encode("utf-8"))
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            try:
                items = self._read_all()
            except CorruptStorageError as e:
                # a corrupt file is replaced by the next write
                logger.warning("Discarding unreadable storage file: %s", e)
                items = {}
            items[key] = value
            self._write_all(items)

    def remove_item(self, key: str) -> None:
        with self._lock:
            items = self._read_all()
            if key in items:
                del items[key]
                self._write_all(items)


def create_storage(settings: Optional[Settings] = None) -> StorageBackend:
    """Build the backend selected by ``storage_backend``."""
    settings = settings or get_settings()
    if settings.storage_backend == "memory":
        return MemoryStorage()
    if settings.storage_backend == "supabase":
        from unimaz.db.supabase_storage import SupabaseStorage
        from unimaz.db.supabase_client import get_supabase_client

        return SupabaseStorage(
            get_supabase_client(),
            table=settings.supabase_table,
            user_id=settings.supabase_user_id,
        )
    return JsonFileStorage(settings.storage_path)
