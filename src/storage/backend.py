# src/storage/backend.py

"""Key-value persistence capability injected into services.

Services receive a :class:`StorageBackend` instead of checking the
environment to decide between filesystem and in-memory storage.
"""

import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol
from urllib.parse import quote

from src.config.settings import Settings

logger = logging.getLogger("promo_cards.storage")


class StorageBackend(Protocol):
    """get/set/list/delete over JSON-serialisable values."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl: float | None = None) -> None: ...

    def list(self, prefix: str = "") -> list[str]: ...

    def delete(self, key: str) -> bool: ...


@dataclass
class _Entry:
    value: Any
    expires_at: float | None


class MemoryBackend:
    """Process-local store with optional per-key TTL."""

    def __init__(self, default_ttl: float | None = None) -> None:
        self._entries: dict[str, _Entry] = {}
        self._default_ttl = default_ttl

    def _evict_expired(self, now: float) -> None:
        """Remove entries past their expiry."""
        expired = [
            k
            for k, e in self._entries.items()
            if e.expires_at is not None and now >= e.expires_at
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Evicted %d expired entries", len(expired))

    def get(self, key: str) -> Any | None:
        self._evict_expired(time.time())
        entry = self._entries.get(key)
        return None if entry is None else entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        ttl = ttl if ttl is not None else self._default_ttl
        expires_at = time.time() + ttl if ttl is not None else None
        self._entries[key] = _Entry(value=value, expires_at=expires_at)

    def list(self, prefix: str = "") -> list[str]:
        self._evict_expired(time.time())
        return sorted(k for k in self._entries if k.startswith(prefix))

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """Purge all entries, returning how many were removed."""
        count = len(self._entries)
        self._entries.clear()
        logger.info("Memory store purged (%d entries removed)", count)
        return count


class FileBackend:
    """One JSON file per key under a directory; survives restarts."""

    def __init__(
        self,
        directory: Path | None = None,
        default_ttl: float | None = None,
    ) -> None:
        self.directory = directory or Settings.CACHE_DIR
        self.directory.mkdir(parents=True, exist_ok=True)
        self._default_ttl = default_ttl

    @staticmethod
    def _filename(key: str) -> str:
        # Percent-encoding is reversible, so distinct keys never share a file
        return quote(key, safe="") + ".json"

    def _path(self, key: str) -> Path:
        return self.directory / self._filename(key)

    def _read(self, path: Path) -> dict[str, Any] | None:
        try:
            with open(path, encoding="utf-8") as f:
                record: dict[str, Any] = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Unreadable cache file %s: %s", path, exc)
            return None
        expires_at = record.get("expires_at")
        if expires_at is not None and time.time() >= expires_at:
            path.unlink(missing_ok=True)
            return None
        return record

    def get(self, key: str) -> Any | None:
        record = self._read(self._path(key))
        return None if record is None else record.get("value")

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        ttl = ttl if ttl is not None else self._default_ttl
        record = {
            "key": key,
            "value": value,
            "expires_at": time.time() + ttl if ttl is not None else None,
        }
        with open(self._path(key), "w", encoding="utf-8") as f:
            json.dump(record, f, ensure_ascii=False)

    def list(self, prefix: str = "") -> list[str]:
        keys: list[str] = []
        for path in sorted(self.directory.glob("*.json")):
            record = self._read(path)
            if record is not None:
                key = str(record.get("key", path.stem))
                if key.startswith(prefix):
                    keys.append(key)
        return keys

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        return True
