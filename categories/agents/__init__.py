"""
Agents category: compute agents (computers) attached to the host.
"""

from __future__ import annotations

from typing import Any, Iterable

from dumpinfo import register_category
from dumpinfo.formatters import format_agent

CATEGORY_ID = "agents"
POSITION = 10


def _query(providers: Any) -> Iterable[Any]:
    return providers.agents()


def register():
    return register_category(
        CATEGORY_ID,
        query=_query,
        formatter=format_agent,
        position=POSITION,
        description="Agents attached to the host with status and executor count",
        aliases=("computers",),
    )
