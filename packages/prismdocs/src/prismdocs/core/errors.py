from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScriptError(Exception):
    message: str
    code: int
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> dict[str, object]:
        return {"code": self.code, "kind": self.kind, "message": self.message}
