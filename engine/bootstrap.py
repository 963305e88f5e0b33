"""
Bootstraps the built-in report categories.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from dumpinfo import load_category

_KNOWN_CATEGORIES = (
    "categories.agents",
    "categories.tools",
    "categories.plugins",
    "categories.system_properties",
    "categories.environment_variables",
    "categories.directory_bindings",
)


def bootstrap_categories(announce: Optional[Callable[[str], None]] = None) -> Dict[str, Dict]:
    """
    Import the built-in categories and register them with the dumpinfo registry.

    Safe to call repeatedly; modules already loaded are not registered twice.
    Returns a mapping keyed by category id describing each registered category.
    """

    registered: Dict[str, Dict] = {}
    for module_name in _KNOWN_CATEGORIES:
        spec = load_category(module_name)
        if spec is None:
            continue
        registered[spec.category_id] = spec.describe()
        if announce is not None:
            announce(f"[✓] category loaded: {spec.category_id}")
    return registered
