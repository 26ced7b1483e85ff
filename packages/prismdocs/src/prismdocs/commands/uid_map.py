from __future__ import annotations

import argparse
from pathlib import Path

from ..cli.output import add_json_flag, emit, wants_json
from ..core.context import RunContext
from ..xref.mapping import run_build
from ..xref.resolver import load_uid_mapping


def configure_uid_map_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = sub.add_parser("uid-map", help="build or inspect the uid -> route mapping artifact")
    uid_sub = parser.add_subparsers(dest="uid_map_cmd")
    uid_sub.required = True

    build = uid_sub.add_parser("build", help="scan docs front matter and rewrite uid-mapping.json")
    build.add_argument("--docs-dir", help="docs root (default: configured docs_dir)")
    build.add_argument("--out", help="artifact path (default: configured uid_mapping path)")
    add_json_flag(build)

    show = uid_sub.add_parser("show", help="print the mapping as the resolver loads it")
    show.add_argument("--mapping", help="explicit artifact path")
    add_json_flag(show)


def _resolve(ctx: RunContext, raw: str | None) -> Path | None:
    if not raw:
        return None
    path = Path(raw)
    return path if path.is_absolute() else ctx.repo_root / path


def run_uid_map_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    as_json = wants_json(ctx, ns)
    if ns.uid_map_cmd == "build":
        payload = run_build(ctx, docs_root=_resolve(ctx, ns.docs_dir), out=_resolve(ctx, ns.out))
        if as_json:
            emit(payload, True)
        else:
            print(f"UID mapping written to: {payload['output']}")
            print(f"Total UIDs found: {payload['count']}")
        return 0

    if ns.uid_map_cmd == "show":
        explicit = _resolve(ctx, ns.mapping)
        mapping = load_uid_mapping(ctx, [explicit] if explicit else None)
        if as_json:
            emit({"schema_version": 1, "tool": "prismdocs", "kind": "uid-map", "status": "ok", "count": len(mapping), "mapping": mapping}, True)
        else:
            for uid in sorted(mapping):
                print(f"{uid} -> {mapping[uid]}")
        return 0

    return 2
