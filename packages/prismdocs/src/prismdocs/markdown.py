"""Markdown source scanning shared by the xref transforms and the link checker.

Only the parts of CommonMark that affect link detection are modelled: fenced
code blocks, inline code spans and images are opaque, inline link
destinations and reference definitions are rewritable.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

_FENCE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})")

# a code span never crosses a blank line; images are consumed whole
_TARGET_RE = re.compile(
    r"(?P<code>(?P<ticks>`+)(?:(?!\n[ \t]*\n).)*?(?<!`)(?P=ticks)(?!`))"
    r"|(?P<image>!\[[^\]\n]*\]\([^)\n]*\))"
    r"|(?P<head>\]\([ \t]*<?)(?P<target>[^\s)>]+)"
    r"|(?P<refhead>^ {0,3}\[[^\]\n]+\]:[ \t]*<?)(?P<reftarget>[^\s>]+)",
    re.DOTALL | re.MULTILINE,
)


@dataclass(frozen=True)
class Segment:
    offset: int
    text: str
    fenced: bool


def split_fences(text: str) -> Iterator[Segment]:
    """Yield consecutive segments of `text`, flagging fenced code blocks."""
    offset = 0
    start = 0
    buf: list[str] = []
    fence: str | None = None
    for line in text.splitlines(keepends=True):
        match = _FENCE_RE.match(line)
        if fence is None and match:
            if buf:
                yield Segment(start, "".join(buf), False)
            start, buf = offset, [line]
            fence = match.group("fence")
        elif fence is not None:
            buf.append(line)
            if match and match.group("fence")[0] == fence[0] and len(match.group("fence")) >= len(fence):
                if not line[match.end():].strip():
                    yield Segment(start, "".join(buf), True)
                    start, buf = offset + len(line), []
                    fence = None
        else:
            buf.append(line)
        offset += len(line)
    if buf:
        yield Segment(start, "".join(buf), fence is not None)


def rewrite_link_targets(text: str, rewrite: Callable[[str], str]) -> str:
    """Apply `rewrite` to every link destination outside code."""

    def _sub(match: re.Match[str]) -> str:
        if match.group("code") is not None or match.group("image") is not None:
            return match.group(0)
        if match.group("head") is not None:
            return match.group("head") + rewrite(match.group("target"))
        return match.group("refhead") + rewrite(match.group("reftarget"))

    return "".join(
        segment.text if segment.fenced else _TARGET_RE.sub(_sub, segment.text)
        for segment in split_fences(text)
    )
