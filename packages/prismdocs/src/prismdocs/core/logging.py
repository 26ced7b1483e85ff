from __future__ import annotations

import inspect
import json
import sys
from typing import TYPE_CHECKING

from .clock import utc_now_iso

if TYPE_CHECKING:
    from .context import RunContext

_LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _enabled(ctx: RunContext, level: str) -> bool:
    rank = _LEVELS.get(level, _LEVELS["info"])
    if rank >= _LEVELS["warn"]:
        return True
    if ctx.quiet:
        return False
    return rank >= _LEVELS["info"] or ctx.verbose


def _jsonable(value: object) -> object:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return str(value)


def log_event(ctx: RunContext, level: str, component: str, action: str, **fields: object) -> None:
    if not _enabled(ctx, level):
        return
    if ctx.log_json:
        caller = inspect.stack()[1]
        payload = {
            "ts": utc_now_iso(),
            "level": level,
            "run_id": ctx.run_id,
            "component": component,
            "action": action,
            "file": caller.filename,
            "line": caller.lineno,
            **{key: _jsonable(value) for key, value in fields.items()},
        }
        sys.stderr.write(json.dumps(payload, sort_keys=True) + "\n")
        return
    core = f"level={level} component={component} action={action}"
    extras = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    sys.stderr.write((core if not extras else f"{core} {extras}") + "\n")
