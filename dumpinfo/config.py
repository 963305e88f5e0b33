"""
Per-job report configuration and its YAML persistence.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, TYPE_CHECKING

import yaml

from .errors import CategoryNotFound, ConfigError

if TYPE_CHECKING:
    from . import CategoryRegistry, CategorySpec

DEFAULT_CONFIG_PATH = Path(".dumpinfo.yml")
CONFIG_ROOT = "dump"

# Toggle names persisted by earlier releases of the job configuration.
LEGACY_FLAGS = {
    "dumpComputers": "agents",
    "dumpJdks": "tools",
    "dumpPlugins": "plugins",
}


@dataclass(frozen=True)
class ReportConfig:
    enabled: FrozenSet[str] = frozenset()

    @classmethod
    def of(cls, *names: str) -> "ReportConfig":
        return cls(enabled=frozenset(names))

    @classmethod
    def from_flags(cls, flags: Mapping[str, Any], *, source: Optional[str] = None) -> "ReportConfig":
        names = set()
        for name, value in flags.items():
            if not isinstance(value, bool):
                raise ConfigError(f"toggle '{name}' must be true or false, got {value!r}", source=source)
            if value:
                names.add(LEGACY_FLAGS.get(name, name))
        return cls(enabled=frozenset(names))

    def is_enabled(self, name: str) -> bool:
        return name in self.enabled

    def enables(self, spec: "CategorySpec") -> bool:
        if spec.category_id in self.enabled:
            return True
        return any(alias in self.enabled for alias in spec.aliases)

    def with_enabled(self, *names: str) -> "ReportConfig":
        return ReportConfig(enabled=self.enabled | frozenset(names))

    def as_flags(self, categories: "CategoryRegistry") -> Dict[str, bool]:
        return {spec.category_id: self.enables(spec) for spec in categories.categories()}


def normalize(config: ReportConfig, categories: "CategoryRegistry", *, source: Optional[str] = None) -> ReportConfig:
    """
    Resolve aliases to category ids, rejecting names no category answers to.
    """

    resolved = set()
    for name in sorted(config.enabled):
        try:
            resolved.add(categories.resolve(name))
        except CategoryNotFound as exc:
            raise ConfigError(f"unknown category '{name}'", source=source) from exc
    return ReportConfig(enabled=frozenset(resolved))


def load_yaml(path: Path) -> Dict:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML: {exc}", source=str(path)) from exc


def write_yaml(path: Path, payload: Dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(payload, handle, sort_keys=False)


def load_config(path: Path | str = DEFAULT_CONFIG_PATH, categories: Optional["CategoryRegistry"] = None) -> ReportConfig:
    """
    Read the job's toggles from ``path``.

    The toggles may sit at the document root or under a ``dump:`` key. A
    missing file yields a configuration with every category disabled.
    """

    path = Path(path)
    raw = load_yaml(path)
    if not isinstance(raw, dict):
        raise ConfigError("expected a mapping of category toggles", source=str(path))
    flags = raw.get(CONFIG_ROOT, raw)
    if flags is None:
        flags = {}
    if not isinstance(flags, dict):
        raise ConfigError(f"'{CONFIG_ROOT}' must be a mapping of category toggles", source=str(path))
    config = ReportConfig.from_flags(flags, source=str(path))
    if categories is not None:
        config = normalize(config, categories, source=str(path))
    return config


def save_config(path: Path | str, config: ReportConfig, categories: "CategoryRegistry") -> None:
    write_yaml(Path(path), {CONFIG_ROOT: config.as_flags(categories)})
