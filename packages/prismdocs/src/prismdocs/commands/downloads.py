from __future__ import annotations

import argparse
import asyncio

from ..cli.output import add_json_flag, emit, wants_json
from ..core.context import RunContext
from ..downloads.cache import DownloadCache
from ..downloads.nuget import fetch_total_downloads, format_downloads_in_millions, round_down_to_million


def configure_downloads_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = sub.add_parser("downloads", help="NuGet download counter")
    dl_sub = parser.add_subparsers(dest="downloads_cmd")
    dl_sub.required = True

    total = dl_sub.add_parser("total", help="total downloads across an owner's packages")
    total.add_argument("--owner", help="NuGet package owner (default: configured owner)")
    total.add_argument("--no-cache", action="store_true", help="bypass the local cache")
    add_json_flag(total)

    clear = dl_sub.add_parser("clear-cache", help="drop cached totals")
    clear.add_argument("--owner", help="owner to clear (default: configured owner)")
    clear.add_argument("--all", action="store_true", help="clear every cached owner")
    add_json_flag(clear)


def run_downloads_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    owner = ns.owner or ctx.config.downloads_owner
    as_json = wants_json(ctx, ns)
    if ns.downloads_cmd == "total":
        total = asyncio.run(fetch_total_downloads(ctx, owner, use_cache=not ns.no_cache))
        payload = {
            "schema_version": 1,
            "tool": "prismdocs",
            "kind": "downloads-total",
            "status": "ok",
            "owner": owner,
            "total_downloads": total,
            "rounded": round_down_to_million(total),
            "label": format_downloads_in_millions(total),
        }
        if as_json:
            emit(payload, True)
        else:
            print(f"{owner}: {total} downloads ({payload['label']})")
        return 0

    if ns.downloads_cmd == "clear-cache":
        cache = DownloadCache.from_context(ctx)
        if ns.all:
            removed = cache.clear_all()
        else:
            cache.clear(owner)
            removed = None
        if as_json:
            emit(
                {
                    "schema_version": 1,
                    "tool": "prismdocs",
                    "kind": "downloads-clear-cache",
                    "status": "ok",
                    "owner": None if ns.all else owner,
                    "removed": removed,
                },
                True,
            )
        else:
            print("All download caches cleared" if ns.all else f"Cache cleared for {owner}")
        return 0

    return 2
