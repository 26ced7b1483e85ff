"""Total NuGet downloads for every package published by an owner.

Backed by the NuGet search service, which pages results with `skip`/`take`.
A cached total is served while it is younger than the configured TTL; a
failed query is only fatal when no fresh cache entry exists. Cache file I/O
runs in a worker thread.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx

from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_NETWORK
from ..core.logging import log_event
from .cache import DownloadCache

DEFAULT_OWNER = "PrismLibrary"

_ERROR_DETAIL_MAX_CHARS = 500


@dataclass
class DownloadsError(ScriptError):
    code: int = ERR_NETWORK
    kind: str = "downloads_error"


def _safe_error_detail(resp: httpx.Response) -> str:
    """Return a safe, truncated error detail string for exceptions/logs."""
    text = (resp.text or "").strip()
    if len(text) <= _ERROR_DETAIL_MAX_CHARS:
        return text
    return f"{text[: _ERROR_DETAIL_MAX_CHARS - 3]}..."


def _package_downloads(package: object) -> int:
    if not isinstance(package, dict):
        return 0
    value = package.get("totalDownloads")
    return int(value) if isinstance(value, (int, float)) else 0


async def _fetch_pages(ctx: RunContext, owner: str, client: httpx.AsyncClient) -> list[Any]:
    take = ctx.config.downloads_page_size
    skip = 0
    packages: list[Any] = []
    while True:
        params: dict[str, str | int] = {"q": f"owner:{owner}", "skip": skip, "take": take}
        log_event(ctx, "debug", "downloads", "fetch-page", owner=owner, skip=skip, take=take)
        resp = await client.get(ctx.config.downloads_search_url, params=params)
        if resp.status_code >= 400:
            detail = _safe_error_detail(resp)
            suffix = f" {detail}" if detail else ""
            raise DownloadsError(f"NuGet API error: {resp.status_code} {resp.reason_phrase}{suffix}")
        try:
            payload = resp.json()
        except ValueError as exc:
            raise DownloadsError("NuGet API returned invalid JSON") from exc
        rows = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(rows, list) or not rows:
            break
        packages.extend(rows)
        if len(rows) < take:
            break
        skip += take
    return packages


async def fetch_total_downloads(
    ctx: RunContext,
    owner: str | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    cache: DownloadCache | None = None,
    use_cache: bool = True,
) -> int:
    owner = owner or ctx.config.downloads_owner
    if use_cache and cache is None:
        cache = DownloadCache.from_context(ctx)
    if use_cache and cache is not None:
        cached = await asyncio.to_thread(cache.get, owner)
        if cached is not None:
            return cached

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=10) as owned:
                packages = await _fetch_pages(ctx, owner, owned)
        else:
            packages = await _fetch_pages(ctx, owner, client)
    except httpx.HTTPError as exc:
        log_event(ctx, "error", "downloads", "fetch-failed", owner=owner, error=str(exc))
        raise DownloadsError(f"NuGet API request failed: {exc}") from exc
    except DownloadsError as exc:
        log_event(ctx, "error", "downloads", "fetch-failed", owner=owner, error=str(exc))
        raise

    total = sum(_package_downloads(package) for package in packages)
    log_event(ctx, "info", "downloads", "fetched", owner=owner, packages=len(packages), total=total)
    if use_cache and cache is not None:
        await asyncio.to_thread(cache.set, owner, total)
    return total


def round_down_to_million(num: int | float) -> int:
    return int(num // 1_000_000) * 1_000_000


def format_downloads_in_millions(downloads: int | float) -> str:
    return f"{int(downloads // 1_000_000)}M+"
