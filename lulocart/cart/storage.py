from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Protocol

from pydantic import BaseModel, Field

from ..config import get_config
from ..logging import get_logger


class StorageResult(BaseModel):
    """Outcome of a storage write."""
    ok: bool = Field(description="Whether the value was written")
    error: Optional[str] = Field(default=None, description="Failure description when ok is False")


class CartStorage(Protocol):
    """
    Key/value storage for the persisted cart snapshot.

    Implementations report failures through the returned StorageResult (writes)
    or by returning None (reads); they do not raise.
    """

    def load(self, key: str) -> Optional[str]:
        """Return the stored text for ``key``, or None if absent or unreadable."""
        ...

    def save(self, key: str, value: str) -> StorageResult:
        """Store ``value`` under ``key``."""
        ...

    def delete(self, key: str) -> StorageResult:
        """Remove ``key``; removing an absent key succeeds."""
        ...


class InMemoryCartStorage(CartStorage):
    """Process-local storage, used by tests and server-side previews."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def save(self, key: str, value: str) -> StorageResult:
        self._values[key] = value
        return StorageResult(ok=True)

    def delete(self, key: str) -> StorageResult:
        self._values.pop(key, None)
        return StorageResult(ok=True)


class JsonFileCartStorage(CartStorage):
    """
    File-backed storage.
    - Each key is stored as ``<storage_dir>/<key>.json``.
    - ``storage_dir`` defaults to AppConfig.cart_storage_dir and is created on first write.
    """

    def __init__(self, storage_dir: str | Path = None) -> None:
        if storage_dir is None:
            storage_dir = get_config().cart_storage_dir
        self.storage_dir = Path(storage_dir)
        self.logger = get_logger(__name__)

    def _path(self, key: str) -> Path:
        return self.storage_dir / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning(f"Could not read cart snapshot {path}: {e}")
            return None

    def save(self, key: str, value: str) -> StorageResult:
        path = self._path(key)
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(value, encoding="utf-8")
        except OSError as e:
            return StorageResult(ok=False, error=f"Could not write {path}: {e}")
        return StorageResult(ok=True)

    def delete(self, key: str) -> StorageResult:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            return StorageResult(ok=False, error=f"Could not delete {self._path(key)}: {e}")
        return StorageResult(ok=True)
