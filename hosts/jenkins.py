"""
Provider set backed by a remote Jenkins controller.

Agents, plugins and the controller identity come from the JSON REST API.
JDK installations, system properties, environment variables and JNDI
bindings are only reachable through the script console, so those queries
post a short Groovy script to ``/scriptText`` and expect JSON back.
Anything else (a stack trace, a login page) is reported as a
:class:`~dumpinfo.errors.HostQueryError` for that category alone.
"""

from __future__ import annotations

import json
import os
from typing import Any, Iterable, List, Mapping, Optional, Tuple

import requests

from dumpinfo.errors import ConfigError, HostQueryError
from dumpinfo.records import AgentRecord, HostIdentity, KeyValueItem, PluginRecord, ToolRecord, key_value

DEFAULT_TIMEOUT = 30.0
HEADERS = {
    "Accept": "application/json",
    "User-Agent": "dumpinfo/1.0",
}

JDK_SCRIPT = """
import groovy.json.JsonOutput
println JsonOutput.toJson(jenkins.model.Jenkins.get().getJDKs().collect { [it.name, it.home] })
"""

SYSTEM_PROPERTIES_SCRIPT = """
import groovy.json.JsonOutput
println JsonOutput.toJson(System.getProperties().collect { k, v -> [String.valueOf(k), String.valueOf(v)] })
"""

ENVIRONMENT_SCRIPT = """
import groovy.json.JsonOutput
println JsonOutput.toJson(System.getenv().collect { k, v -> [k, v] })
"""

JNDI_SCRIPT = """
import groovy.json.JsonOutput
import javax.naming.InitialContext
def names = new InitialContext().list("java:comp/env")
def out = []
while (names.hasMore()) {
    def binding = names.next()
    out << [binding.name, binding.className]
}
println JsonOutput.toJson(out)
"""


def jenkins_auth(user: Optional[str], token: Optional[str]) -> Optional[Tuple[str, str]]:
    """Return a basic-auth tuple when an API token is available."""
    if not token:
        return None
    return (user or "admin", token)


class JenkinsHost:
    def __init__(
        self,
        url: str,
        *,
        user: Optional[str] = None,
        token: Optional[str] = None,
        mask: bool = True,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not url:
            raise ConfigError("Jenkins URL is required")
        self.url = url.rstrip("/")
        self.timeout = timeout
        self._auth = jenkins_auth(user, token)
        self._mask = mask
        self._session = session or requests.Session()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "JenkinsHost":
        env = environ if environ is not None else os.environ
        url = overrides.pop("url", None) or env.get("JENKINS_URL") or ""
        user = overrides.pop("user", None) or env.get("JENKINS_USER")
        token = overrides.pop("token", None) or env.get("JENKINS_TOKEN")
        return cls(url, user=user, token=token, **overrides)

    def _get(self, path: str, params: Optional[Mapping[str, str]] = None) -> requests.Response:
        response = self._session.get(
            f"{self.url}{path}",
            headers=HEADERS,
            params=params,
            timeout=self.timeout,
            auth=self._auth,
        )
        response.raise_for_status()
        return response

    def _get_json(self, query: str, path: str, params: Optional[Mapping[str, str]] = None) -> Mapping[str, Any]:
        response = self._get(path, params)
        try:
            payload = response.json()
        except ValueError as exc:
            raise HostQueryError(query, f"non-JSON response from {path}") from exc
        if not isinstance(payload, dict):
            raise HostQueryError(query, f"unexpected payload from {path}")
        return payload

    def _script(self, query: str, script: str) -> Any:
        response = self._session.post(
            f"{self.url}/scriptText",
            headers=HEADERS,
            data={"script": script},
            timeout=self.timeout,
            auth=self._auth,
        )
        response.raise_for_status()
        text = response.text.strip()
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            first_line = (text.splitlines() or ["empty response"])[0]
            raise HostQueryError(query, first_line) from exc

    def _pairs(self, query: str, script: str) -> List[Tuple[str, Optional[str]]]:
        payload = self._script(query, script)
        if not isinstance(payload, list):
            raise HostQueryError(query, "expected a JSON list")
        pairs: List[Tuple[str, Optional[str]]] = []
        for entry in payload:
            if not isinstance(entry, list) or len(entry) != 2:
                raise HostQueryError(query, f"malformed entry {entry!r}")
            key, value = entry
            pairs.append((str(key), None if value is None else str(value)))
        return pairs

    def _item(self, key: str, value: Optional[str]) -> KeyValueItem:
        return key_value(key, value, mask=self._mask)

    def host_identity(self) -> HostIdentity:
        response = self._get("/api/json", {"tree": "nodeName"})
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        node = payload.get("nodeName") if isinstance(payload, dict) else None
        return HostIdentity(
            name="Jenkins",
            version=response.headers.get("X-Jenkins"),
            node=node or "built-in",
        )

    def agents(self) -> Iterable[AgentRecord]:
        payload = self._get_json("agents", "/computer/api/json", {"tree": "computer[displayName,offline,numExecutors]"})
        agents = []
        for entry in payload.get("computer", []):
            offline = entry.get("offline")
            agents.append(
                AgentRecord(
                    name=entry.get("displayName"),
                    online=None if offline is None else not offline,
                    executors=entry.get("numExecutors"),
                )
            )
        return agents

    def tools(self) -> Iterable[ToolRecord]:
        return [ToolRecord(name=name, home=home) for name, home in self._pairs("tools", JDK_SCRIPT)]

    def plugins(self) -> Iterable[PluginRecord]:
        payload = self._get_json(
            "plugins",
            "/pluginManager/api/json",
            {"tree": "plugins[shortName,longName,version,enabled]"},
        )
        return [
            PluginRecord(
                short_name=entry.get("shortName"),
                display_name=entry.get("longName"),
                version=entry.get("version"),
                enabled=entry.get("enabled"),
            )
            for entry in payload.get("plugins", [])
        ]

    def system_properties(self) -> Iterable[KeyValueItem]:
        return [self._item(key, value) for key, value in self._pairs("system_properties", SYSTEM_PROPERTIES_SCRIPT)]

    def environment_variables(self) -> Iterable[KeyValueItem]:
        return [self._item(key, value) for key, value in self._pairs("environment_variables", ENVIRONMENT_SCRIPT)]

    def directory_bindings(self) -> Iterable[KeyValueItem]:
        return [self._item(key, value) for key, value in self._pairs("directory_bindings", JNDI_SCRIPT)]
