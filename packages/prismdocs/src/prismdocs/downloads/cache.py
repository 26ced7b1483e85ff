"""Time-boxed download count cache keyed by package owner.

The cache is a single JSON object on disk. It is best effort: read or write
failures are logged and treated as a miss.
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from pathlib import Path

from ..core.context import RunContext
from ..core.logging import log_event
from ..core.serialize import dumps_json

CACHE_KEY_PREFIX = "prism_nuget_downloads_"


def cache_key(owner: str) -> str:
    return f"{CACHE_KEY_PREFIX}{owner.lower()}"


class DownloadCache:
    def __init__(
        self,
        ctx: RunContext,
        path: Path,
        ttl_seconds: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ctx = ctx
        self.path = path
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    @classmethod
    def from_context(cls, ctx: RunContext) -> "DownloadCache":
        return cls(ctx, ctx.downloads_cache_path, ctx.config.downloads_cache_ttl_seconds)

    def _read(self) -> dict[str, object]:
        if not self.path.is_file():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log_event(self.ctx, "warn", "downloads", "cache-read-failed", path=self.path, error=str(exc))
            return {}
        return payload if isinstance(payload, dict) else {}

    def _write(self, entries: dict[str, object]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(dumps_json(entries, pretty=True) + "\n", encoding="utf-8")
        except OSError as exc:
            log_event(self.ctx, "warn", "downloads", "cache-write-failed", path=self.path, error=str(exc))

    def get(self, owner: str) -> int | None:
        entries = self._read()
        key = cache_key(owner)
        entry = entries.get(key)
        if not isinstance(entry, dict):
            return None
        total = entry.get("totalDownloads")
        stamp = entry.get("timestamp")
        if isinstance(total, int) and isinstance(stamp, (int, float)) and self._clock() - stamp < self.ttl_seconds:
            log_event(self.ctx, "info", "downloads", "cache-hit", owner=owner, total=total)
            return total
        del entries[key]
        self._write(entries)
        return None

    def set(self, owner: str, total: int) -> None:
        entries = self._read()
        entries[cache_key(owner)] = {"totalDownloads": total, "timestamp": self._clock()}
        self._write(entries)
        log_event(self.ctx, "debug", "downloads", "cache-set", owner=owner, total=total)

    def clear(self, owner: str) -> None:
        entries = self._read()
        if entries.pop(cache_key(owner), None) is not None:
            self._write(entries)
        log_event(self.ctx, "info", "downloads", "cache-cleared", owner=owner)

    def clear_all(self) -> int:
        entries = self._read()
        kept = {key: value for key, value in entries.items() if not key.startswith(CACHE_KEY_PREFIX)}
        removed = len(entries) - len(kept)
        if removed:
            self._write(kept)
        log_event(self.ctx, "info", "downloads", "cache-cleared-all", removed=removed)
        return removed
