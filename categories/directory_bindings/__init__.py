"""
Directory-service bindings (naming contexts, name-service sources).
"""

from __future__ import annotations

from typing import Any, Iterable

from dumpinfo import register_category
from dumpinfo.formatters import format_key_value

CATEGORY_ID = "directory_bindings"
POSITION = 60


def _query(providers: Any) -> Iterable[Any]:
    return providers.directory_bindings()


def register():
    return register_category(
        CATEGORY_ID,
        query=_query,
        formatter=format_key_value,
        position=POSITION,
        description="Directory-service bindings as name = target lines",
        aliases=("directoryBindings",),
    )
