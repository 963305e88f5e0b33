"""
Read interface a host exposes to the reporter.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from .records import AgentRecord, HostIdentity, KeyValueItem, PluginRecord, ToolRecord


class ProviderSet(Protocol):
    """
    Live, read-only view of a CI host.

    Each category method re-queries host state and returns a finite sequence
    in the host's natural order. Implementations must not mutate the host.
    """

    def host_identity(self) -> HostIdentity:
        ...

    def agents(self) -> Iterable[AgentRecord]:
        ...

    def tools(self) -> Iterable[ToolRecord]:
        ...

    def plugins(self) -> Iterable[PluginRecord]:
        ...

    def system_properties(self) -> Iterable[KeyValueItem]:
        ...

    def environment_variables(self) -> Iterable[KeyValueItem]:
        ...

    def directory_bindings(self) -> Iterable[KeyValueItem]:
        ...
