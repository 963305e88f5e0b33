"""
dumpinfo command-line entry point.

Run ``dumpinfo report`` as the first step of a CI job to write the
diagnostic snapshot into the build log.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Mapping, Optional

from cli.commands import categories as categories_cmd
from cli.commands import report as report_cmd
from cli.context import CliContext

STATUS_EXIT = {
    "ok": 0,
    "partial": 1,
    "aborted": 2,
    "error": 2,
}

COMMANDS = {
    "report": report_cmd,
    "categories": categories_cmd,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dumpinfo",
        description="Write a diagnostic snapshot of the CI host into the build log",
    )
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    parser.add_argument("--quiet", "-q", action="store_true", help="Suppress non-critical logs")
    parser.add_argument("--verbose", "-v", action="store_true", help="Increase logging verbosity")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    for module in COMMANDS.values():
        module.add_parser(subparsers)
    return parser


def configure_context(args: argparse.Namespace) -> CliContext:
    return CliContext(
        json_mode=getattr(args, "json", False),
        quiet=getattr(args, "quiet", False),
        verbose=getattr(args, "verbose", False),
    )


def extract_exit_code(result: Mapping[str, Any]) -> int:
    status = str(result.get("status", "ok")).lower()
    return STATUS_EXIT.get(status, 0)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    ctx = configure_context(args)

    module = COMMANDS.get(args.command)
    if module is None:
        parser.print_help()
        return 1
    result = module.handle(ctx, args)

    if ctx.json_mode and isinstance(result, Dict):
        json.dump(result, sys.stdout, indent=2)
        sys.stdout.write("\n")
    return extract_exit_code(result)


if __name__ == "__main__":
    sys.exit(main())
