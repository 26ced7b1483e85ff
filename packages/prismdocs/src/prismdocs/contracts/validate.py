from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

from ..core.errors import ScriptError
from ..core.exit_codes import ERR_VALIDATION
from .schemas import schemas_root

CONFIG_SCHEMA = "prismdocs.config.v1"
UID_MAPPING_SCHEMA = "prismdocs.uid-mapping.v1"
LINKS_REPORT_SCHEMA = "prismdocs.links-report.v1"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    path = schemas_root() / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def validate_payload(payload: object, schema_name: str, code: int = ERR_VALIDATION) -> None:
    import jsonschema

    try:
        jsonschema.validate(payload, load_schema(schema_name))
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ScriptError(
            f"{schema_name} validation failed at {loc}: {exc.message}",
            code,
            kind="schema_validation",
        ) from exc
