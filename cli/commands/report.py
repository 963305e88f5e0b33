"""
Report subcommand: the job-setup hook that writes the snapshot to the log.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, MutableMapping

from cli.context import CliContext
from dumpinfo import registry
from dumpinfo.config import DEFAULT_CONFIG_PATH, ReportConfig, load_config, normalize
from dumpinfo.errors import ConfigError, SinkFailure
from dumpinfo.reporter import generate_report
from dumpinfo.sinks import ListSink, StreamSink
from engine import bootstrap_categories
from hosts import HOSTS, host_module

_BOOTSTRAPPED = False


def _ensure_bootstrapped() -> None:
    global _BOOTSTRAPPED
    if not _BOOTSTRAPPED:
        bootstrap_categories()
        _BOOTSTRAPPED = True


def _flag_dest(category_id: str) -> str:
    return f"category_{category_id}"


def add_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    _ensure_bootstrapped()
    report = subparsers.add_parser(
        "report",
        help="Write the diagnostic snapshot to stdout",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    report.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Per-job toggle file (default: {DEFAULT_CONFIG_PATH})",
    )
    toggles = report.add_argument_group("categories")
    toggles.add_argument("--all", action="store_true", help="Enable every category")
    for spec in registry().categories():
        toggles.add_argument(
            f"--{spec.category_id.replace('_', '-')}",
            dest=_flag_dest(spec.category_id),
            action="store_true",
            help=spec.description,
        )

    host = report.add_argument_group("host")
    host.add_argument("--host", choices=sorted(HOSTS), default="local", help="Host to snapshot")
    host.add_argument("--jenkins-url", default=None, help="Jenkins controller URL (or JENKINS_URL)")
    host.add_argument("--jenkins-user", default=None, help="Jenkins user (or JENKINS_USER)")
    host.add_argument("--no-mask", action="store_true", help="Print sensitive values instead of masking them")


def _resolve_config(ctx: CliContext, args: argparse.Namespace) -> ReportConfig:
    table = registry()
    path = args.config if args.config is not None else DEFAULT_CONFIG_PATH
    if args.config is not None and not path.exists():
        raise ConfigError("config file not found", source=str(path))
    config = load_config(path, table)
    if path.exists():
        ctx.debug(f"Loaded toggles from {path}")

    if args.all:
        return ReportConfig.of(*table.ids())
    flagged = [spec.category_id for spec in table.categories() if getattr(args, _flag_dest(spec.category_id), False)]
    return normalize(config.with_enabled(*flagged), table)


def _build_host(args: argparse.Namespace) -> Any:
    module = host_module(args.host)
    mask = not args.no_mask
    if args.host == "jenkins":
        return module.JenkinsHost.from_env(url=args.jenkins_url, user=args.jenkins_user, mask=mask)
    return module.LocalHost(mask=mask)


def handle(ctx: CliContext, args: argparse.Namespace) -> MutableMapping[str, Any]:
    _ensure_bootstrapped()
    try:
        config = _resolve_config(ctx, args)
        host = _build_host(args)
    except ConfigError as exc:
        ctx.error(str(exc))
        return {"status": "error", "message": str(exc)}

    enabled = [name for name in registry().ids() if config.is_enabled(name)]
    ctx.debug(f"Enabled categories: {', '.join(enabled) or '<none>'}")

    sink = ListSink() if ctx.json_mode else StreamSink(sys.stdout)
    try:
        result = generate_report(config, host, sink)
    except SinkFailure as exc:
        ctx.error(str(exc))
        payload: Dict[str, Any] = exc.result.describe()
        payload["status"] = "aborted"
        payload["message"] = str(exc)
        return payload

    for name in result.failed:
        ctx.warn(f"{name}: {result.outcome(name).error}")

    payload = result.describe()
    if result.partial:
        payload["message"] = f"Snapshot written with {len(result.failed)} unavailable category(ies)"
    else:
        payload["message"] = f"Snapshot written ({result.lines_written} lines)"
    if ctx.json_mode:
        payload["lines"] = list(sink.lines)
    else:
        ctx.info(payload["message"])
    return payload
