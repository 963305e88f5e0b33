"""
Environment variables category. Sensitive values are masked by the formatter.
"""

from __future__ import annotations

from typing import Any, Iterable

from dumpinfo import register_category
from dumpinfo.formatters import format_key_value

CATEGORY_ID = "environment_variables"
POSITION = 50


def _query(providers: Any) -> Iterable[Any]:
    return providers.environment_variables()


def register():
    return register_category(
        CATEGORY_ID,
        query=_query,
        formatter=format_key_value,
        position=POSITION,
        description="Host environment variables as key = value lines",
        aliases=("environmentVariables", "env"),
    )
