"""
Read-only records handed out by host providers.

Every field except the identifying name is optional; formatters render
missing values as placeholders instead of failing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Pattern

SENSITIVE_PATTERNS = (
    "TOKEN",
    "SECRET",
    "PASSWORD",
    "PASSWD",
    "CREDENTIAL",
    "API_KEY",
    "PRIVATE_KEY",
    "AUTHORIZATION",
    "BASIC_AUTH",
)


@dataclass(frozen=True)
class HostIdentity:
    name: Optional[str]
    version: Optional[str] = None
    node: Optional[str] = None


@dataclass(frozen=True)
class AgentRecord:
    name: Optional[str]
    online: Optional[bool] = None
    executors: Optional[int] = None


@dataclass(frozen=True)
class ToolRecord:
    name: Optional[str]
    home: Optional[str] = None


@dataclass(frozen=True)
class PluginRecord:
    short_name: Optional[str]
    display_name: Optional[str] = None
    version: Optional[str] = None
    enabled: Optional[bool] = None


@dataclass(frozen=True)
class KeyValueItem:
    key: Optional[str]
    value: Optional[str] = None
    sensitive: bool = False


def sensitive_matcher(patterns: Iterable[str] = SENSITIVE_PATTERNS) -> Pattern[str]:
    alternatives = "|".join(re.escape(p) for p in patterns if p)
    if not alternatives:
        return re.compile(r"(?!)")
    # Patterns match whole "_"-separated words: GIT_AUTHOR_NAME is not AUTHORIZATION.
    return re.compile(rf"(?:^|_)(?:{alternatives})(?:_|$)", re.IGNORECASE)


_DEFAULT_MATCHER = sensitive_matcher()
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def looks_sensitive(key: Optional[str], matcher: Pattern[str] = _DEFAULT_MATCHER) -> bool:
    if not key:
        return False
    # Dotted, dashed and camelCase names split into words: keyStorePassword, jenkins.auth.token.
    normalised = _CAMEL_BOUNDARY.sub("_", key.replace(".", "_").replace("-", "_"))
    return bool(matcher.search(normalised))


def key_value(key: str, value: Optional[str], *, mask: bool = True) -> KeyValueItem:
    return KeyValueItem(key=key, value=value, sensitive=mask and looks_sensitive(key))
