"""
Line formatters, one per report category.

Each formatter is a pure function turning one record into exactly one
physical line. Missing fields render as placeholders; embedded line breaks
are escaped so the report stays line-oriented, and code points UTF-8 cannot
encode (lone surrogates from undecodable environment bytes) are written as
backslash escapes.

Backslashes already present in a value are left as they are, so a value
holding the two characters ``\\n`` prints the same as one holding a real
newline. The escaping is for readability, not a reversible encoding.
"""

from __future__ import annotations

from typing import Any, Optional

from .records import AgentRecord, HostIdentity, KeyValueItem, PluginRecord, ToolRecord

UNKNOWN = "<unknown>"
EMPTY = "<empty>"
UNSET = "<unset>"

# Every code point str.splitlines() treats as a line boundary.
_LINE_BREAKS = {
    "\n": "\\n",
    "\r": "\\r",
    "\x0b": "\\x0b",
    "\x0c": "\\x0c",
    "\x1c": "\\x1c",
    "\x1d": "\\x1d",
    "\x1e": "\\x1e",
    "\x85": "\\x85",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_ESCAPE_TABLE = str.maketrans(_LINE_BREAKS)


def escape_line(text: str) -> str:
    escaped = text.translate(_ESCAPE_TABLE)
    return escaped.encode("utf-8", "backslashreplace").decode("utf-8")


def _text(value: Any, placeholder: str = UNKNOWN) -> str:
    if value is None:
        return placeholder
    text = str(value)
    if not text:
        return placeholder
    return escape_line(text)


def format_host(host: Optional[HostIdentity]) -> str:
    if host is None:
        return f"{UNKNOWN} (node: {UNKNOWN})"
    name = _text(getattr(host, "name", None))
    version = getattr(host, "version", None)
    node = _text(getattr(host, "node", None))
    if version:
        return f"{name} {_text(version)} (node: {node})"
    return f"{name} (node: {node})"


def format_agent(agent: AgentRecord) -> str:
    name = _text(getattr(agent, "name", None))
    online = getattr(agent, "online", None)
    if online is None:
        status = UNKNOWN
    else:
        status = "online" if online else "offline"
    executors = getattr(agent, "executors", None)
    if executors is None:
        count = f"{UNKNOWN} executors"
    elif executors == 1:
        count = "1 executor"
    else:
        count = f"{executors} executors"
    return f"{name}: {status}, {count}"


def format_tool(tool: ToolRecord) -> str:
    name = _text(getattr(tool, "name", None))
    home = _text(getattr(tool, "home", None))
    return f"{name}: {home}"


def format_plugin(plugin: PluginRecord) -> str:
    short_name = _text(getattr(plugin, "short_name", None))
    display_name = _text(getattr(plugin, "display_name", None))
    version = _text(getattr(plugin, "version", None))
    enabled = getattr(plugin, "enabled", None)
    if enabled is None:
        state = UNKNOWN
    else:
        state = "enabled" if enabled else "disabled"
    return f"{short_name} ({display_name}) {version}, {state}"


def format_key_value(item: KeyValueItem) -> str:
    key = _text(getattr(item, "key", None))
    value = getattr(item, "value", None)
    if value is None:
        rendered = UNSET
    elif getattr(item, "sensitive", False):
        rendered = f"<masked, {len(str(value))} chars>"
    elif value == "":
        rendered = EMPTY
    else:
        rendered = escape_line(str(value))
    return f"{key} = {rendered}"


def format_failure(category_id: str, exc: BaseException) -> str:
    detail = str(exc).strip()
    reason = type(exc).__name__
    if detail:
        reason = f"{reason}: {detail}"
    return escape_line(f"[dumpinfo] {category_id}: unavailable ({reason})")
