"""
Diagnostic snapshot reporter.

Writes the host identity line, then every enabled category in registry
order, one line per item, straight to the sink. A category whose provider
fails is recorded and replaced by a single marker line; a failing sink
aborts the report with :class:`~dumpinfo.errors.SinkFailure`.

Without an explicit registry the built-in categories are bootstrapped on
first use. Enabled names no registered category answers to raise
:class:`~dumpinfo.errors.ConfigError` before anything is written.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from . import CategoryRegistry, CategorySpec, registry
from .config import ReportConfig, normalize
from .errors import SinkFailure
from .formatters import escape_line, format_failure, format_host
from .metadata import HOST_OUTCOME, CategoryOutcome, ReportResult
from .providers import ProviderSet
from .sinks import LineSink


def generate_report(
    config: ReportConfig,
    providers: ProviderSet,
    sink: LineSink,
    *,
    categories: Optional[CategoryRegistry] = None,
) -> ReportResult:
    if categories is None:
        from engine import bootstrap_categories

        bootstrap_categories()
        table = registry()
    else:
        table = categories
    config = normalize(config, table)
    result = ReportResult()

    _write_host(providers, sink, result)
    for spec in table.categories():
        if config.enables(spec):
            _write_category(spec, providers, sink, result)
    return result


def _emit(sink: LineSink, line: str, result: ReportResult) -> None:
    try:
        sink.write_line(escape_line(line))
    except Exception as exc:  # noqa: BLE001
        raise SinkFailure(result, exc) from exc


def _fail(
    category_id: str,
    exc: BaseException,
    outcome: CategoryOutcome,
    sink: LineSink,
    result: ReportResult,
) -> None:
    outcome.failed = True
    outcome.error = f"{type(exc).__name__}: {exc}"
    _emit(sink, format_failure(category_id, exc), result)
    outcome.marker_written = True


def _write_host(providers: ProviderSet, sink: LineSink, result: ReportResult) -> None:
    outcome = result.host
    try:
        line = format_host(providers.host_identity())
    except Exception as exc:  # noqa: BLE001
        _fail(HOST_OUTCOME, exc, outcome, sink, result)
        return
    _emit(sink, line, result)
    outcome.lines += 1


def _write_category(
    spec: CategorySpec,
    providers: ProviderSet,
    sink: LineSink,
    result: ReportResult,
) -> None:
    outcome = result.outcome(spec.category_id)
    try:
        items: Iterator[Any] = iter(spec.query(providers))
    except Exception as exc:  # noqa: BLE001
        _fail(spec.category_id, exc, outcome, sink, result)
        return

    while True:
        try:
            item = next(items)
        except StopIteration:
            return
        except Exception as exc:  # noqa: BLE001
            _fail(spec.category_id, exc, outcome, sink, result)
            return
        try:
            line = spec.formatter(item)
        except Exception as exc:  # noqa: BLE001
            _fail(spec.category_id, exc, outcome, sink, result)
            return
        _emit(sink, line, result)
        outcome.lines += 1
