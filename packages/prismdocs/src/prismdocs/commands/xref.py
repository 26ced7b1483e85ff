from __future__ import annotations

import argparse
from pathlib import Path

from ..cli.output import add_json_flag, emit, wants_json
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_USAGE
from ..xref.resolver import XREF_SCHEME, XrefResolver
from ..xref.strip_index import strip_index_markdown


def configure_xref_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = sub.add_parser("xref", help="resolve xref:<uid> references")
    xref_sub = parser.add_subparsers(dest="xref_cmd")
    xref_sub.required = True

    resolve = xref_sub.add_parser("resolve", help="resolve uids through the loaded mapping")
    resolve.add_argument("uids", nargs="+", help="uid or xref:<uid>")
    add_json_flag(resolve)

    render = xref_sub.add_parser("render", help="print a markdown file with xref links rewritten")
    render.add_argument("file")
    render.add_argument("--strip-index", action="store_true", help="also strip /index from resolved doc routes")


def run_xref_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    resolver = XrefResolver.from_context(ctx)
    if ns.xref_cmd == "resolve":
        rows = []
        for raw in ns.uids:
            target = raw if raw.startswith(XREF_SCHEME) else f"{XREF_SCHEME}{raw}"
            resolved = resolver.resolve(target)
            rows.append({"target": target, "resolved": resolved, "found": resolved != target})
        if wants_json(ctx, ns):
            emit({"schema_version": 1, "tool": "prismdocs", "kind": "xref-resolve", "status": "ok", "results": rows}, True)
        else:
            for row in rows:
                print(f"{row['target']} -> {row['resolved'] if row['found'] else '(unresolved)'}")
        return 0

    if ns.xref_cmd == "render":
        path = Path(ns.file)
        if not path.is_absolute():
            path = ctx.repo_root / path
        if not path.is_file():
            raise ScriptError(f"file not found: {path}", ERR_USAGE, kind="missing_file")
        text = resolver.rewrite_markdown(path.read_text(encoding="utf-8"))
        if ns.strip_index:
            text = strip_index_markdown(text, ctx.config.route_prefix)
        print(text, end="")
        return 0

    return 2
