"""Site configuration loaded from `configs/prismdocs.toml`.

Every key is optional; the defaults describe the Prism Library docs site
layout (`docs/`, `versioned_docs/`, `uid-mapping.json` at the root).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..contracts.validate import CONFIG_SCHEMA, validate_payload
from .errors import ScriptError
from .exit_codes import ERR_CONFIG

try:
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

CONFIG_PATH = Path("configs/prismdocs.toml")

# (section, key) -> SiteConfig field
_FIELD_MAP: dict[tuple[str, str], str] = {
    ("site", "route_prefix"): "route_prefix",
    ("site", "docs_dir"): "docs_dir",
    ("site", "versioned_docs_dir"): "versioned_docs_dir",
    ("uid_mapping", "path"): "uid_mapping_path",
    ("uid_mapping", "extensions"): "document_extensions",
    ("uid_mapping", "exclude_prefixes"): "exclude_prefixes",
    ("link_check", "extension"): "link_extension",
    ("downloads", "owner"): "downloads_owner",
    ("downloads", "cache_ttl_seconds"): "downloads_cache_ttl_seconds",
    ("downloads", "page_size"): "downloads_page_size",
    ("downloads", "search_url"): "downloads_search_url",
    ("downloads", "cache_path"): "downloads_cache_path",
}


@dataclass(frozen=True)
class SiteConfig:
    route_prefix: str = "/docs"
    docs_dir: str = "docs"
    versioned_docs_dir: str = "versioned_docs"
    uid_mapping_path: str = "uid-mapping.json"
    document_extensions: tuple[str, ...] = (".md", ".mdx")
    exclude_prefixes: tuple[str, ...] = ("tutorial-basics/", "tutorial-extras/")
    link_extension: str = ".md"
    downloads_owner: str = "PrismLibrary"
    downloads_cache_ttl_seconds: int = 60 * 60
    downloads_page_size: int = 30
    downloads_search_url: str = "https://azuresearch-usnc.nuget.org/query"
    downloads_cache_path: str = "artifacts/prismdocs/cache/nuget-downloads.json"

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, dict[str, object]] = {}
        for (section, key), name in _FIELD_MAP.items():
            value = getattr(self, name)
            payload.setdefault(section, {})[key] = list(value) if isinstance(value, tuple) else value
        return dict(payload)


def config_from_mapping(raw: dict[str, Any]) -> SiteConfig:
    values: dict[str, Any] = {}
    for (section, key), name in _FIELD_MAP.items():
        block = raw.get(section)
        if not isinstance(block, dict) or key not in block:
            continue
        value = block[key]
        values[name] = tuple(value) if isinstance(value, list) else value
    return SiteConfig(**values)


def load_site_config(repo_root: Path) -> SiteConfig:
    path = repo_root / CONFIG_PATH
    if not path.is_file():
        return SiteConfig()
    try:
        raw = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ScriptError(f"invalid config {path}: {exc}", ERR_CONFIG, kind="config_parse") from exc
    validate_payload(raw, CONFIG_SCHEMA, code=ERR_CONFIG)
    return config_from_mapping(raw)
