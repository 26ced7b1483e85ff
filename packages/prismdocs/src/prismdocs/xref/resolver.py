"""Rewrite `xref:<uid>` link targets into canonical routes.

The mapping is loaded once per process into an `XrefResolver` which is then
passed to every transform call; nothing is kept in module state. Unknown uids
are left untouched so the broken reference stays visible in rendered output.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from ..contracts.validate import UID_MAPPING_SCHEMA, validate_payload
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.logging import log_event
from ..core.repo_root import working_dir
from ..markdown import rewrite_link_targets
from .routes import strip_index_suffix

XREF_SCHEME = "xref:"
MAPPING_FILE = "uid-mapping.json"


@dataclass
class LinkNode:
    url: str
    text: str = ""
    title: str | None = None


def is_xref(target: str) -> bool:
    return target.startswith(XREF_SCHEME)


def default_mapping_candidates(ctx: RunContext) -> list[Path]:
    candidates = [working_dir() / MAPPING_FILE, ctx.uid_mapping_path, ctx.repo_root / MAPPING_FILE]
    return list(dict.fromkeys(candidates))


def load_uid_mapping(ctx: RunContext, candidates: Iterable[Path] | None = None) -> dict[str, str]:
    """Load the first existing mapping artifact; any failure yields an empty mapping."""
    paths = list(candidates) if candidates is not None else default_mapping_candidates(ctx)
    for path in paths:
        if not path.is_file():
            continue
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
            validate_payload(payload, UID_MAPPING_SCHEMA)
        except (OSError, ValueError, ScriptError) as exc:
            log_event(ctx, "warn", "xref", "mapping-load-failed", path=path, error=str(exc))
            return {}
        log_event(ctx, "debug", "xref", "mapping-loaded", path=path, count=len(payload))
        return dict(payload)
    log_event(ctx, "warn", "xref", "mapping-missing", candidates=[str(p) for p in paths])
    return {}


@dataclass(frozen=True)
class XrefResolver:
    ctx: RunContext
    mapping: Mapping[str, str]

    @classmethod
    def from_context(cls, ctx: RunContext, candidates: Iterable[Path] | None = None) -> "XrefResolver":
        return cls(ctx=ctx, mapping=MappingProxyType(load_uid_mapping(ctx, candidates)))

    def lookup(self, uid: str) -> str | None:
        route = self.mapping.get(uid)
        return strip_index_suffix(route) if route else None

    def resolve(self, target: str) -> str:
        if not is_xref(target):
            return target
        uid = target[len(XREF_SCHEME):]
        route = self.lookup(uid)
        if route is None:
            log_event(self.ctx, "warn", "xref", "unresolved", uid=uid)
            return target
        return route

    def resolve_nodes(self, nodes: Iterable[LinkNode]) -> None:
        for node in nodes:
            node.url = self.resolve(node.url)

    def rewrite_markdown(self, text: str) -> str:
        return rewrite_link_targets(text, self.resolve)
