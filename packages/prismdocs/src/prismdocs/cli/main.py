from __future__ import annotations

import argparse
import sys
from collections.abc import Callable

from .. import __version__
from ..commands.downloads import configure_downloads_parser, run_downloads_command
from ..commands.links import configure_links_parser, run_links_command
from ..commands.uid_map import configure_uid_map_parser, run_uid_map_command
from ..commands.xref import configure_xref_parser, run_xref_command
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_INTERNAL
from ..core.logging import log_event
from .output import add_json_flag, emit, render_error, resolve_output_format, wants_json

COMMANDS: dict[str, Callable[[RunContext, argparse.Namespace], int]] = {
    "uid-map": run_uid_map_command,
    "xref": run_xref_command,
    "links": run_links_command,
    "downloads": run_downloads_command,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="prismdocs", description="Prism Library documentation site maintenance")
    p.add_argument("--version", action="version", version=f"prismdocs {__version__}")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--cwd", help="run command from an explicit site root")
    p.add_argument("--run-id", help="run identifier for log correlation")
    p.add_argument("--log-json", action="store_true", help="emit diagnostics as JSON lines on stderr")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable debug diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit warnings and errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    version_p = sub.add_parser("version", help="print tool version and site root")
    add_json_flag(version_p)
    config_p = sub.add_parser("config", help="configuration commands")
    config_sub = config_p.add_subparsers(dest="config_cmd", required=True)
    config_show = config_sub.add_parser("show", help="print the effective configuration")
    add_json_flag(config_show)

    configure_uid_map_parser(sub)
    configure_xref_parser(sub)
    configure_links_parser(sub)
    configure_downloads_parser(sub)
    return p


def _run(ctx: RunContext, ns: argparse.Namespace) -> int:
    as_json = wants_json(ctx, ns)
    if ns.cmd == "version":
        emit(
            {
                "schema_version": 1,
                "tool": "prismdocs",
                "kind": "version",
                "status": "ok",
                "version": __version__,
                "run_id": ctx.run_id,
                "repo_root": str(ctx.repo_root),
            },
            as_json,
        )
        return 0
    if ns.cmd == "config":
        emit({"schema_version": 1, "tool": "prismdocs", "kind": "config", "status": "ok", "config": ctx.config.to_payload()}, as_json)
        return 0
    handler = COMMANDS.get(ns.cmd)
    if handler is None:
        return 2
    return handler(ctx, ns)


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    fmt = resolve_output_format(cli_json=ns.json, cli_format=ns.format)
    as_json = fmt == "json" or bool(getattr(ns, "cmd_json", False))
    try:
        ctx = RunContext.from_args(
            run_id=ns.run_id,
            cwd=ns.cwd,
            output_format=fmt,  # type: ignore[arg-type]
            verbose=ns.verbose,
            quiet=ns.quiet,
            log_json=ns.log_json,
        )
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, repo_root=ctx.repo_root)
        return _run(ctx, ns)
    except ScriptError as exc:
        print(render_error(as_json=as_json, message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
