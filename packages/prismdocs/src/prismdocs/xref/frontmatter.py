from __future__ import annotations

import re
from typing import Any

import yaml

FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
_KEY_LINE_RE = re.compile(r"^([A-Za-z_][\w-]*):[ \t]*(.*?)[ \t]*$", re.MULTILINE)

UID_FIELD = "uid"


def front_matter_block(text: str) -> str | None:
    match = FRONT_MATTER_RE.match(text.lstrip("\ufeff"))
    return match.group(1) if match else None


def _scan_keys(block: str) -> dict[str, Any]:
    return {key: value for key, value in _KEY_LINE_RE.findall(block)}


def extract_front_matter(text: str) -> dict[str, Any] | None:
    """Return the leading `---` delimited header as a mapping, or None when absent.

    Headers that are not valid YAML degrade to `key: value` line scanning.
    """
    block = front_matter_block(text)
    if block is None:
        return None
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError:
        return _scan_keys(block)
    return data if isinstance(data, dict) else {}


def extract_uid(text: str) -> str | None:
    block = front_matter_block(text)
    if block is None:
        return None
    value = (extract_front_matter(text) or {}).get(UID_FIELD)
    if value is not None and not isinstance(value, str):
        # YAML would turn `uid: 1.10` into 1.1; keep the author's spelling
        value = _scan_keys(block).get(UID_FIELD, value)
    if value is None:
        return None
    uid = str(value).strip()
    return uid or None
