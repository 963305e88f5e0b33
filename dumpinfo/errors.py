"""
Custom exceptions for the dumpinfo registry/report layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .metadata import ReportResult


class DumpInfoError(RuntimeError):
    pass


class CategoryAlreadyRegistered(DumpInfoError):
    def __init__(self, category_id: str) -> None:
        super().__init__(f"Category '{category_id}' already registered")
        self.category_id = category_id


class CategoryNotFound(DumpInfoError):
    def __init__(self, category_id: str) -> None:
        super().__init__(f"Category '{category_id}' not found")
        self.category_id = category_id


class ConfigError(DumpInfoError):
    def __init__(self, message: str, *, source: Optional[str] = None) -> None:
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")
        self.source = source


class HostQueryError(DumpInfoError):
    def __init__(self, query: str, reason: str) -> None:
        super().__init__(f"Host query '{query}' failed: {reason}")
        self.query = query
        self.reason = reason


class SinkFailure(DumpInfoError):
    """
    The output sink rejected a write; the report was aborted.

    ``result`` holds the outcomes recorded up to the failing write.
    """

    def __init__(self, result: "ReportResult", cause: BaseException) -> None:
        super().__init__(f"Report aborted after {result.lines_written} line(s): {cause}")
        self.result = result
        self.cause = cause
