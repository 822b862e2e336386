"""
File-backed TTL cache for GitHub activity results.

All entries live in one JSON object on disk:

    {"<key>": {"data": <value>, "timestamp": <epoch ms>}, ...}

Entries are never evicted. An entry older than the TTL stays in the file but
reads as absent. The cache is best-effort throughout: read problems give an
empty cache and write problems come back as a failed CacheWriteResult, so a
broken cache never stops a fetch.
"""

import json
import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

MS_PER_MINUTE = 60_000


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class CacheEntry:
    """One cached value and when it was stored."""

    key: str
    value: Any
    stored_at: int  # epoch milliseconds

    def is_fresh(self, ttl_minutes: float, now: int) -> bool:
        return now - self.stored_at < ttl_minutes * MS_PER_MINUTE


@dataclass
class CacheReadResult:
    entries: dict[str, CacheEntry] = field(default_factory=dict)
    error: str | None = None


@dataclass
class CacheWriteResult:
    ok: bool
    error: str | None = None


class CacheStore:
    """
    Key -> (value, timestamp) mapping persisted as a single JSON file.

    Values are opaque to the store. Writes are whole-file read-modify-write;
    only one process is expected to use the file at a time.
    """

    def __init__(self, path: Path, clock: Callable[[], int] = _now_ms):
        self.path = path
        self._clock = clock

    def load(self) -> CacheReadResult:
        """Read every entry from disk, reporting (not raising) failures."""
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return CacheReadResult()
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            return CacheReadResult(error=f"Cache file {self.path} unreadable: {e}")
        if not isinstance(raw, dict):
            return CacheReadResult(error=f"Cache file {self.path} is not a JSON object")

        entries: dict[str, CacheEntry] = {}
        for key, item in raw.items():
            if not isinstance(item, dict) or "data" not in item:
                continue
            stored_at = item.get("timestamp")
            # bool is an int subclass; a boolean timestamp is garbage
            if isinstance(stored_at, bool) or not isinstance(stored_at, int | float):
                continue
            entries[key] = CacheEntry(key=key, value=item["data"], stored_at=int(stored_at))
        return CacheReadResult(entries=entries)

    def read(self) -> dict[str, CacheEntry]:
        """All entries on disk; empty if the file is missing or malformed."""
        result = self.load()
        if result.error:
            logger.debug(f"Ignoring cache: {result.error}")
        return result.entries

    def get(self, key: str, ttl_minutes: float) -> Any | None:
        """Return the value stored under ``key`` if it is younger than the TTL."""
        entry = self.read().get(key)
        if entry is None:
            logger.debug(f"Cache MISS: {key}")
            return None
        if not entry.is_fresh(ttl_minutes, self._clock()):
            logger.debug(f"Cache STALE: {key}")
            return None
        logger.debug(f"Cache HIT: {key}")
        return entry.value

    def write(self, key: str, value: Any) -> CacheWriteResult:
        """Store ``value`` under ``key`` and persist the whole mapping."""
        entries = self.read()
        payload = {k: {"data": e.value, "timestamp": e.stored_at} for k, e in entries.items()}
        payload[key] = {"data": value, "timestamp": self._clock()}
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            return CacheWriteResult(ok=False, error=f"Could not write cache file {self.path}: {e}")
        return CacheWriteResult(ok=True)
