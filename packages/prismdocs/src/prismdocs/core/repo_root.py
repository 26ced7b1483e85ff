"""Repository root detection helpers.

`Path.cwd()` is only allowed in this module.
"""

from __future__ import annotations

from pathlib import Path

ROOT_MARKERS = (
    "configs/prismdocs.toml",
    "docusaurus.config.ts",
    "docusaurus.config.js",
)


def find_repo_root(start: Path | None = None) -> Path:
    """Walk up from `start` to the docs site root; fall back to `start` itself."""
    origin = (start or Path.cwd()).resolve()
    if origin.is_file():
        origin = origin.parent
    cur = origin
    while True:
        if any((cur / marker).exists() for marker in ROOT_MARKERS):
            return cur
        if cur.parent == cur:
            return origin
        cur = cur.parent


def working_dir() -> Path:
    return Path.cwd().resolve()
