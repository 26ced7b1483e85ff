"""Second-pass normalization of already resolved internal links.

Runs after xref resolution and covers links that did not come from the
resolver (hand-written routes, generator-added suffixes).
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from ..markdown import rewrite_link_targets
from .resolver import LinkNode
from .routes import strip_index_suffix

_HREF_RE = re.compile(r"""(<a\b[^>]*?\bhref\s*=\s*)(["'])(.*?)\2""", re.IGNORECASE | re.DOTALL)


def strip_index_href(href: str, route_prefix: str = "/docs") -> str:
    if not href.startswith(route_prefix.rstrip("/") + "/"):
        return href
    return strip_index_suffix(href)


def strip_index_html(html: str, route_prefix: str = "/docs") -> str:
    def _sub(match: re.Match[str]) -> str:
        head, quote, href = match.groups()
        return f"{head}{quote}{strip_index_href(href, route_prefix)}{quote}"

    return _HREF_RE.sub(_sub, html)


def strip_index_markdown(text: str, route_prefix: str = "/docs") -> str:
    return rewrite_link_targets(text, lambda target: strip_index_href(target, route_prefix))


def strip_index_nodes(nodes: Iterable[LinkNode], route_prefix: str = "/docs") -> None:
    for node in nodes:
        node.url = strip_index_href(node.url, route_prefix)
