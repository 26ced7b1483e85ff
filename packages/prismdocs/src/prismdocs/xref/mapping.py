"""Build `uid-mapping.json` from the `uid` declared in each document header."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CONFIG
from ..core.logging import log_event
from ..core.serialize import dumps_json
from .frontmatter import extract_uid
from .routes import route_path


def find_documents(root: Path, extensions: Iterable[str]) -> list[Path]:
    suffixes = tuple(extensions)
    return sorted(path for path in root.rglob("*") if path.is_file() and path.name.endswith(suffixes))


def is_excluded(relative: str, prefixes: Iterable[str]) -> bool:
    return any(relative.startswith(prefix) for prefix in prefixes)


def build_uid_mapping(ctx: RunContext, docs_root: Path | None = None) -> dict[str, str]:
    root = docs_root or ctx.docs_root
    documents = find_documents(root, ctx.config.document_extensions)
    log_event(ctx, "info", "uid-map", "scan", documents=len(documents), docs_root=root)
    mapping: dict[str, str] = {}
    declared_in: dict[str, str] = {}
    for path in documents:
        relative = path.relative_to(root).as_posix()
        if is_excluded(relative, ctx.config.exclude_prefixes):
            log_event(ctx, "debug", "uid-map", "excluded", file=relative)
            continue
        uid = extract_uid(path.read_text(encoding="utf-8", errors="ignore"))
        if uid is None:
            continue
        route = route_path(path, root, ctx.config.route_prefix)
        if uid in declared_in:
            log_event(ctx, "warn", "uid-map", "duplicate-uid", uid=uid, previous=declared_in[uid], file=relative)
        mapping[uid] = route
        declared_in[uid] = relative
        log_event(ctx, "info", "uid-map", "uid-found", uid=uid, route=route)
    return mapping


def write_uid_mapping(path: Path, mapping: dict[str, str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_json(mapping, pretty=True) + "\n", encoding="utf-8")
    return path


def run_build(ctx: RunContext, docs_root: Path | None = None, out: Path | None = None) -> dict[str, object]:
    root = docs_root or ctx.docs_root
    if not root.is_dir():
        raise ScriptError(f"docs directory not found: {root}", ERR_CONFIG, kind="missing_docs_root")
    mapping = build_uid_mapping(ctx, root)
    out_path = write_uid_mapping(out or ctx.uid_mapping_path, mapping)
    log_event(ctx, "info", "uid-map", "written", path=out_path, count=len(mapping))
    return {
        "schema_version": 1,
        "tool": "prismdocs",
        "kind": "uid-map-build",
        "status": "ok",
        "run_id": ctx.run_id,
        "docs_root": str(root),
        "output": str(out_path),
        "count": len(mapping),
    }
