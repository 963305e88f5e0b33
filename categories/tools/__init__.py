"""
Tools category: configured JDK installations.
"""

from __future__ import annotations

from typing import Any, Iterable

from dumpinfo import register_category
from dumpinfo.formatters import format_tool

CATEGORY_ID = "tools"
POSITION = 20


def _query(providers: Any) -> Iterable[Any]:
    return providers.tools()


def register():
    return register_category(
        CATEGORY_ID,
        query=_query,
        formatter=format_tool,
        position=POSITION,
        description="JDK tool installations and their install paths",
        aliases=("jdks",),
    )
