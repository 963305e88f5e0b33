"""
Categories subcommand: list the registered report categories.
"""

from __future__ import annotations

import argparse
from typing import Any, MutableMapping

from cli.context import CliContext
from dumpinfo import registry
from engine import bootstrap_categories


def add_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    subparsers.add_parser("categories", help="List report categories in report order")


def handle(ctx: CliContext, args: argparse.Namespace) -> MutableMapping[str, Any]:
    bootstrap_categories(announce=ctx.debug)
    described = registry().describe()
    if not ctx.json_mode:
        for entry in described:
            aliases = f" (aliases: {', '.join(entry['aliases'])})" if entry["aliases"] else ""
            print(f"{entry['id']}{aliases}: {entry['description']}")
    return {"status": "ok", "categories": described}
