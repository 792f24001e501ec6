"""Tool capability caching.

This module provides the key/value cache that keeps detected ffmpeg facts
(version and encoder list) across invocations, so the tool is only probed
once per cache lifetime. The file-backed cache is stored as JSON in the
configured temp directory.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Protocol

from html5video.tools.models import CacheKey

logger = logging.getLogger(__name__)

# Default cache TTL: 24 hours
DEFAULT_CACHE_TTL_HOURS = 24

CACHE_FILE_NAME = "html5video-cache.json"

# Schema version for the cache file layout
CACHE_SCHEMA_VERSION = 1


def _datetime_to_iso(dt: datetime) -> str:
    """Convert datetime to ISO string for JSON serialization."""
    return dt.isoformat()


def _iso_to_datetime(s: str | None) -> datetime | None:
    """Convert ISO string back to datetime."""
    if s is None:
        return None
    try:
        return datetime.fromisoformat(s)
    except (ValueError, TypeError):
        return None


class KeyValueCache(Protocol):
    """Protocol for the capability cache.

    Values are JSON-compatible. Each key is written once per cache lifetime
    and read before any probing happens.
    """

    def read(self, key: CacheKey, default: Any = None) -> Any:
        """Return the cached value for key, or default on a miss."""
        ...

    def write(self, key: CacheKey, value: Any) -> None:
        """Store value under key."""
        ...

    def invalidate(self) -> None:
        """Drop every cached value."""
        ...


class MemoryCache:
    """In-process cache that lives as long as the object."""

    def __init__(self) -> None:
        self._values: dict[CacheKey, Any] = {}

    def read(self, key: CacheKey, default: Any = None) -> Any:
        return self._values.get(key, default)

    def write(self, key: CacheKey, value: Any) -> None:
        self._values[key] = value

    def invalidate(self) -> None:
        """Drop every cached value."""
        self._values.clear()


class FileCache:
    """JSON file cache with TTL-based invalidation.

    Every entry records when it was written; entries older than the TTL
    read as misses. Writes are atomic so concurrent readers never see a
    partially written file.
    """

    def __init__(
        self,
        cache_dir: Path,
        ttl_hours: int = DEFAULT_CACHE_TTL_HOURS,
    ) -> None:
        """Initialize the cache.

        Args:
            cache_dir: Directory holding the cache file.
            ttl_hours: Entry TTL in hours. 0 disables expiry.
        """
        self.cache_path = Path(cache_dir) / CACHE_FILE_NAME
        self.ttl = timedelta(hours=ttl_hours) if ttl_hours > 0 else None

    def _load(self) -> dict[str, Any]:
        """Load the raw entry mapping, or an empty one if unusable."""
        if not self.cache_path.exists():
            logger.debug("Cache file does not exist: %s", self.cache_path)
            return {}

        try:
            with open(self.cache_path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Failed to load cache: %s", e)
            return {}

        if not isinstance(data, dict) or data.get("schema") != CACHE_SCHEMA_VERSION:
            logger.warning(
                "Ignoring cache with unsupported schema: %s", self.cache_path
            )
            return {}

        entries = data.get("entries", {})
        return entries if isinstance(entries, dict) else {}

    def _is_expired(self, entry: dict[str, Any]) -> bool:
        if self.ttl is None:
            return False
        written_at = _iso_to_datetime(entry.get("written_at"))
        if written_at is None:
            return True
        return datetime.now(timezone.utc) > written_at + self.ttl

    def read(self, key: CacheKey, default: Any = None) -> Any:
        entry = self._load().get(key.value)
        if not isinstance(entry, dict) or "value" not in entry:
            return default
        if self._is_expired(entry):
            logger.debug("Cache entry %s expired", key.value)
            return default
        return entry["value"]

    def write(self, key: CacheKey, value: Any) -> None:
        entries = self._load()
        entries[key.value] = {
            "value": value,
            "written_at": _datetime_to_iso(datetime.now(timezone.utc)),
        }
        self._save(entries)

    def _save(self, entries: dict[str, Any]) -> None:
        """Write entries to disk.

        Uses atomic write (temp file + rename) to prevent corruption
        if the process crashes mid-write.
        """
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            json_content = json.dumps(
                {"schema": CACHE_SCHEMA_VERSION, "entries": entries}, indent=2
            )

            fd, temp_path_str = tempfile.mkstemp(
                suffix=self.cache_path.suffix,
                dir=self.cache_path.parent,
                text=True,
            )
            temp_path = Path(temp_path_str)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(json_content)
                temp_path.replace(self.cache_path)  # Atomic on POSIX
                logger.debug("Saved cache to %s", self.cache_path)
            except Exception:
                temp_path.unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.warning("Failed to save cache: %s", e)

    def invalidate(self) -> None:
        """Invalidate (delete) the cache."""
        if self.cache_path.exists():
            try:
                self.cache_path.unlink()
                logger.debug("Invalidated cache at %s", self.cache_path)
            except OSError as e:
                logger.warning("Failed to invalidate cache: %s", e)
