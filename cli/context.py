"""
Shared CLI context utilities.

Operator messages go to stderr so stdout carries nothing but report lines
(or the JSON payload under ``--json``).
"""

from __future__ import annotations

from dataclasses import dataclass
import sys


@dataclass
class CliContext:
    json_mode: bool = False
    quiet: bool = False
    verbose: bool = False

    def log(self, level: str, message: str) -> None:
        if self.quiet and level.lower() == "info":
            return
        formatted = f"[{level}] {message}" if self.verbose else message
        print(formatted, file=sys.stderr)

    def debug(self, message: str) -> None:
        if self.verbose:
            self.log("debug", message)

    def info(self, message: str) -> None:
        self.log("info", message)

    def warn(self, message: str) -> None:
        self.log("warn", message)

    def error(self, message: str) -> None:
        self.log("error", message)
