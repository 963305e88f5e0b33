"""
System properties of the host process.
"""

from __future__ import annotations

from typing import Any, Iterable

from dumpinfo import register_category
from dumpinfo.formatters import format_key_value

CATEGORY_ID = "system_properties"
POSITION = 40


def _query(providers: Any) -> Iterable[Any]:
    return providers.system_properties()


def register():
    return register_category(
        CATEGORY_ID,
        query=_query,
        formatter=format_key_value,
        position=POSITION,
        description="Host system properties as key = value lines",
        aliases=("systemProperties",),
    )
