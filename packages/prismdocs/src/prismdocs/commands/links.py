from __future__ import annotations

import argparse

from ..cli.output import add_json_flag, emit, wants_json
from ..core.context import RunContext
from ..core.exit_codes import ERR_LINKS
from ..linkcheck.render import render_text
from ..linkcheck.verify import verify_docs


def configure_links_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = sub.add_parser("links", help="relative link integrity for docs and versioned docs")
    links_sub = parser.add_subparsers(dest="links_cmd")
    links_sub.required = True

    verify = links_sub.add_parser("verify", help="report broken and non-canonical relative links")
    verify.add_argument("--strict", action="store_true", help="exit non-zero when errors are found")
    add_json_flag(verify)


def run_links_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    if ns.links_cmd == "verify":
        report = verify_docs(ctx)
        if wants_json(ctx, ns):
            emit(report.to_payload(ctx.run_id), True)
        else:
            print(render_text(report))
        if ns.strict and report.total_errors:
            return ERR_LINKS
        return 0
    return 2
