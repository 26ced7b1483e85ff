"""Canonical route helpers.

`strip_index_suffix` is the single normalization rule for directory-index
routes. The uid mapping builder applies it when writing the artifact and the
resolver applies it again when reading, so a stale artifact still resolves
to the canonical route.
"""

from __future__ import annotations

from pathlib import Path

_INDEX_SUFFIXES = ("/index/", "/index")


def strip_index_suffix(route: str) -> str:
    """Drop trailing `/index` or `/index/` segments; idempotent."""
    stripped = True
    while stripped:
        stripped = False
        for suffix in _INDEX_SUFFIXES:
            if route.endswith(suffix):
                route = route[: -len(suffix)]
                stripped = True
                break
    return route


def route_path(path: Path, docs_root: Path, route_prefix: str = "/docs") -> str:
    """Map a document file to the route it is served at.

    `docs/navigation/basics.md` -> `/docs/navigation/basics`
    `docs/commands/index.md`    -> `/docs/commands`
    """
    relative = path.relative_to(docs_root).with_suffix("")
    return strip_index_suffix(f"{route_prefix.rstrip('/')}/{relative.as_posix()}")
