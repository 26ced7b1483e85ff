"""CLI payload output helpers."""

from __future__ import annotations

import argparse

from ..core.context import RunContext
from ..core.serialize import dumps_json


def add_json_flag(parser: argparse.ArgumentParser, help_text: str = "emit JSON output") -> None:
    # distinct dest so the subcommand default never clobbers the global --json
    parser.add_argument("--json", dest="cmd_json", action="store_true", help=help_text)


def wants_json(ctx: RunContext, ns: argparse.Namespace) -> bool:
    return ctx.output_format == "json" or bool(getattr(ns, "cmd_json", False))


def emit(payload: dict[str, object], as_json: bool) -> None:
    print(dumps_json(payload, pretty=not as_json))


def resolve_output_format(*, cli_json: bool, cli_format: str | None) -> str:
    if cli_json:
        return "json"
    return cli_format or "text"


def render_error(*, as_json: bool, message: str, code: int, kind: str = "generic_error") -> str:
    if as_json:
        return dumps_json(
            {
                "schema_version": 1,
                "tool": "prismdocs",
                "status": "error",
                "errors": [{"code": code, "kind": kind, "message": message}],
            },
            pretty=False,
        )
    return message
