"""
Category registry for the dumpinfo diagnostic snapshot reporter.

Report categories register a query (how to read items from a host) and a
formatter (how to render one item as one line) under a category id. The
reporter walks the registry in ``position`` order, so adding a category is a
registration rather than a change to the report routine.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .errors import CategoryAlreadyRegistered, CategoryNotFound

__all__ = [
    "CategoryQuery",
    "CategoryFormatter",
    "CategorySpec",
    "CategoryRegistry",
    "register_category",
    "describe_category",
    "registry",
    "load_category",
    "list_loaded",
]

CategoryQuery = Callable[[Any], Iterable[Any]]
CategoryFormatter = Callable[[Any], str]


@dataclass(frozen=True)
class CategorySpec:
    category_id: str
    query: CategoryQuery
    formatter: CategoryFormatter
    position: int
    description: Optional[str] = None
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    def describe(self) -> Dict[str, Any]:
        return {
            "id": self.category_id,
            "position": self.position,
            "description": self.description or "",
            "aliases": list(self.aliases),
        }


class CategoryRegistry:
    def __init__(self) -> None:
        self._registry: Dict[str, CategorySpec] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        *,
        category_id: str,
        query: CategoryQuery,
        formatter: CategoryFormatter,
        position: int,
        description: Optional[str] = None,
        aliases: Iterable[str] = (),
    ) -> CategorySpec:
        names = [category_id, *aliases]
        for name in names:
            if name in self._registry or name in self._aliases:
                raise CategoryAlreadyRegistered(name)
        spec = CategorySpec(
            category_id=category_id,
            query=query,
            formatter=formatter,
            position=position,
            description=description,
            aliases=tuple(aliases),
        )
        self._registry[category_id] = spec
        for alias in spec.aliases:
            self._aliases[alias] = category_id
        return spec

    def resolve(self, name: str) -> str:
        if name in self._registry:
            return name
        try:
            return self._aliases[name]
        except KeyError as exc:
            raise CategoryNotFound(name) from exc

    def get(self, category_id: str) -> CategorySpec:
        return self._registry[self.resolve(category_id)]

    def categories(self) -> List[CategorySpec]:
        return sorted(self._registry.values(), key=lambda spec: (spec.position, spec.category_id))

    def ids(self) -> List[str]:
        return [spec.category_id for spec in self.categories()]

    def describe(self) -> List[Dict[str, Any]]:
        return [spec.describe() for spec in self.categories()]


_GLOBAL_REGISTRY = CategoryRegistry()
LOADED_CATEGORIES: Dict[str, "LoadedCategory"] = {}


@dataclass
class LoadedCategory:
    module_name: str
    module: ModuleType
    category_id: Optional[str]
    spec: Optional[CategorySpec]


def register_category(
    category_id: str,
    *,
    query: CategoryQuery,
    formatter: CategoryFormatter,
    position: int,
    description: Optional[str] = None,
    aliases: Iterable[str] = (),
) -> CategorySpec:
    """
    Register a new report category with the process-global registry.
    """

    return _GLOBAL_REGISTRY.register(
        category_id=category_id,
        query=query,
        formatter=formatter,
        position=position,
        description=description,
        aliases=aliases,
    )


def describe_category(category_id: str) -> Dict[str, Any]:
    return _GLOBAL_REGISTRY.get(category_id).describe()


def registry() -> CategoryRegistry:
    return _GLOBAL_REGISTRY


def _normalize_module_name(module_name: str) -> tuple[str, str]:
    if not module_name:
        raise ValueError("module_name must be provided")
    if "." not in module_name:
        qualified = f"categories.{module_name}"
    else:
        qualified = module_name
    key = qualified.split(".", maxsplit=1)[-1]
    return qualified, key


def load_category(module_name: str) -> Optional[CategorySpec]:
    """
    Import a category module and call its ``register()`` hook once.
    """

    qualified, key = _normalize_module_name(module_name)
    if key in LOADED_CATEGORIES:
        return LOADED_CATEGORIES[key].spec

    module = importlib.import_module(qualified)
    register_fn = getattr(module, "register", None)
    spec: Optional[CategorySpec] = None
    category_id: Optional[str] = None
    if callable(register_fn):
        spec = register_fn()
        if isinstance(spec, CategorySpec):
            category_id = spec.category_id
    LOADED_CATEGORIES[key] = LoadedCategory(
        module_name=qualified,
        module=module,
        category_id=category_id,
        spec=spec,
    )
    return spec


def list_loaded() -> list[str]:
    return list(LOADED_CATEGORIES.keys())
