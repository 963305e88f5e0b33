"""
Plugins category.
"""

from __future__ import annotations

from typing import Any, Iterable

from dumpinfo import register_category
from dumpinfo.formatters import format_plugin

CATEGORY_ID = "plugins"
POSITION = 30


def _query(providers: Any) -> Iterable[Any]:
    return providers.plugins()


def register():
    return register_category(
        CATEGORY_ID,
        query=_query,
        formatter=format_plugin,
        position=POSITION,
        description="Installed plugins with version and enabled state",
    )
