from __future__ import annotations

import re

from ..markdown import split_fences
from .model import LinkRecord

LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
# http, https, mailto and ftp are external; any other scheme (xref:, tel:, ...)
# is not a file path either
SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


def is_checked_target(url: str) -> bool:
    return bool(url) and not url.startswith("#") and not SCHEME_RE.match(url)


def _destination(raw: str) -> str:
    dest = raw.strip()
    if dest.startswith("<") and ">" in dest:
        return dest[1 : dest.index(">")]
    return dest.split(maxsplit=1)[0] if dest else dest


def extract_links(content: str, source: str) -> list[LinkRecord]:
    """Relative link records of a Markdown document, skipping fenced code."""
    links: list[LinkRecord] = []
    for segment in split_fences(content):
        if segment.fenced:
            continue
        for match in LINK_RE.finditer(segment.text):
            url = _destination(match.group(2))
            if not is_checked_target(url):
                continue
            line = content.count("\n", 0, segment.offset + match.start()) + 1
            links.append(LinkRecord(source=source, line=line, text=match.group(1), url=url))
    return links
