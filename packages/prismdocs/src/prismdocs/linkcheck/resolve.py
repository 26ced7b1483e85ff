"""Resolution of a relative link against the set of documents in one tree.

Paths are root-relative posix strings; the tree is a plain set so the rules
stay independent of the filesystem.
"""

from __future__ import annotations

import posixpath
from collections.abc import Container
from dataclasses import dataclass
from typing import Literal

ResolutionKind = Literal["exact", "add_extension", "add_index", "missing"]


@dataclass(frozen=True)
class LinkTarget:
    clean: str
    suffix: str
    path: str | None = None
    absolute: bool = False


@dataclass(frozen=True)
class Resolution:
    kind: ResolutionKind
    actual_path: str | None = None

    @property
    def exists(self) -> bool:
        return self.kind != "missing"


def split_url(url: str) -> tuple[str, str]:
    """Split `url` into its path and the `#fragment` / `?query` remainder."""
    cut = len(url)
    for marker in "#?":
        index = url.find(marker)
        if index != -1:
            cut = min(cut, index)
    return url[:cut], url[cut:]


def resolve_link_path(source: str, url: str) -> LinkTarget:
    clean, suffix = split_url(url)
    if clean.startswith("/"):
        return LinkTarget(clean=clean, suffix=suffix, absolute=True)
    joined = posixpath.normpath(posixpath.join(posixpath.dirname(source), clean))
    return LinkTarget(clean=clean, suffix=suffix, path=joined)


def _child(path: str, name: str) -> str:
    return name if path in ("", ".") else f"{path.rstrip('/')}/{name}"


def find_target(relative: str, files: Container[str], extension: str = ".md") -> Resolution:
    if relative in files:
        return Resolution("exact", relative)
    if not relative.endswith(extension):
        candidate = relative + extension
        if candidate in files:
            return Resolution("add_extension", candidate)
    index_name = f"index{extension}"
    if relative != index_name and not relative.endswith(f"/{index_name}"):
        candidate = _child(relative, index_name)
        if candidate in files:
            return Resolution("add_index", candidate)
    return Resolution("missing")


def with_extension(clean: str, extension: str = ".md") -> str:
    base = clean.rstrip("/")
    return base if base.endswith(extension) else base + extension


def with_index(clean: str, extension: str = ".md") -> str:
    return _child(clean, f"index{extension}") if clean not in ("", ".") else f"./index{extension}"
