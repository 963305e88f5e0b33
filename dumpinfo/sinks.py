"""
Line sinks: append-only destinations for report lines.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Protocol, TextIO


class LineSink(Protocol):
    def write_line(self, text: str) -> None:
        ...


class StreamSink:
    """
    Write newline-terminated lines to a text stream (a build log, stdout).

    Each line is flushed as soon as it is written so a long report shows up
    in a live log incrementally.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def write_line(self, text: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()


class ListSink:
    def __init__(self) -> None:
        self.lines: List[str] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)

    def getvalue(self) -> str:
        return "".join(line + "\n" for line in self.lines)
