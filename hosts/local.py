"""
Provider set backed by the machine the job is running on.
"""

from __future__ import annotations

import locale
import os
import platform
import re
import sys
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from dumpinfo.records import (
    SENSITIVE_PATTERNS,
    AgentRecord,
    HostIdentity,
    KeyValueItem,
    PluginRecord,
    ToolRecord,
    looks_sensitive,
    sensitive_matcher,
)

NSSWITCH_PATH = Path("/etc/nsswitch.conf")
JVM_ROOT = Path("/usr/lib/jvm")
JAVA_HOME_VARS = ("JAVA_HOME", "JDK_HOME")
VERSIONED_JAVA_HOME = re.compile(r"^JAVA_HOME_(\d+)(?:_(\w+))?$")

# (marker variable, product name, version variable, node variable)
CI_SYSTEMS: Tuple[Tuple[str, str, Optional[str], Optional[str]], ...] = (
    ("JENKINS_URL", "Jenkins", None, "NODE_NAME"),
    ("GITLAB_CI", "GitLab CI", "CI_SERVER_VERSION", "CI_RUNNER_DESCRIPTION"),
    ("GITHUB_ACTIONS", "GitHub Actions", "ImageVersion", "RUNNER_NAME"),
    ("BUILDKITE", "Buildkite", "BUILDKITE_AGENT_VERSION", "BUILDKITE_AGENT_NAME"),
    ("TEAMCITY_VERSION", "TeamCity", "TEAMCITY_VERSION", "AGENT_NAME"),
)


class LocalHost:
    def __init__(
        self,
        *,
        environ: Optional[Mapping[str, str]] = None,
        mask: bool = True,
        sensitive_patterns: Iterable[str] = SENSITIVE_PATTERNS,
        nsswitch_path: Path = NSSWITCH_PATH,
        jvm_root: Path = JVM_ROOT,
    ) -> None:
        self._environ = environ if environ is not None else os.environ
        self._mask = mask
        self._matcher = sensitive_matcher(sensitive_patterns)
        self._nsswitch_path = Path(nsswitch_path)
        self._jvm_root = Path(jvm_root)

    def _item(self, key: str, value: Optional[str]) -> KeyValueItem:
        sensitive = self._mask and looks_sensitive(key, self._matcher)
        return KeyValueItem(key=key, value=value, sensitive=sensitive)

    def _node_name(self) -> str:
        return platform.node() or "localhost"

    def host_identity(self) -> HostIdentity:
        for marker, product, version_var, node_var in CI_SYSTEMS:
            if not self._environ.get(marker):
                continue
            version = self._environ.get(version_var) if version_var else None
            node = self._environ.get(node_var) if node_var else None
            return HostIdentity(name=product, version=version or None, node=node or self._node_name())
        return HostIdentity(
            name="local",
            version=f"{platform.system()} {platform.release()}".strip() or None,
            node=self._node_name(),
        )

    def agents(self) -> Iterable[AgentRecord]:
        return [AgentRecord(name=self._node_name(), online=True, executors=os.cpu_count())]

    def tools(self) -> Iterable[ToolRecord]:
        seen: Dict[str, ToolRecord] = {}
        for name, home in self._java_homes_from_env():
            seen.setdefault(os.path.realpath(home), ToolRecord(name=name, home=home))
        for home in self._java_homes_from_root():
            seen.setdefault(os.path.realpath(home), ToolRecord(name=Path(home).name, home=home))
        return list(seen.values())

    def _java_homes_from_env(self) -> Iterator[Tuple[str, str]]:
        for var in JAVA_HOME_VARS:
            value = self._environ.get(var)
            if value:
                yield var, value
        for key, value in self._environ.items():
            match = VERSIONED_JAVA_HOME.match(key)
            if match and value:
                arch = f"-{match.group(2).lower()}" if match.group(2) else ""
                yield f"jdk-{match.group(1)}{arch}", value

    def _java_homes_from_root(self) -> List[str]:
        if not self._jvm_root.is_dir():
            return []
        homes = []
        for child in sorted(self._jvm_root.iterdir()):
            if child.is_dir() and (child / "bin" / "java").exists():
                homes.append(str(child))
        return homes

    def plugins(self) -> Iterable[PluginRecord]:
        for dist in importlib_metadata.distributions():
            meta = dist.metadata
            summary = meta.get("Summary")
            if summary == "UNKNOWN":
                summary = None
            yield PluginRecord(
                short_name=meta.get("Name"),
                display_name=summary,
                version=dist.version,
                enabled=True,
            )

    def system_properties(self) -> Iterable[KeyValueItem]:
        props = [
            ("python.version", platform.python_version()),
            ("python.implementation", platform.python_implementation()),
            ("python.executable", sys.executable),
            ("os.name", platform.system()),
            ("os.version", platform.release()),
            ("os.arch", platform.machine()),
            ("file.encoding", sys.getfilesystemencoding()),
            ("locale.encoding", locale.getpreferredencoding(False)),
            ("user.name", self._environ.get("USER") or self._environ.get("USERNAME")),
            ("user.home", os.path.expanduser("~")),
            ("user.dir", os.getcwd()),
            ("path.separator", os.pathsep),
            ("line.separator", os.linesep),
        ]
        return [self._item(key, value) for key, value in props]

    def environment_variables(self) -> Iterable[KeyValueItem]:
        return [self._item(key, value) for key, value in self._environ.items()]

    def directory_bindings(self) -> Iterable[KeyValueItem]:
        """
        Name-service switch bindings: each database and the directory
        services (files, dns, ldap, sss, ...) it is resolved through.
        """

        text = self._nsswitch_path.read_text(encoding="utf-8")
        bindings = []
        for raw in text.splitlines():
            line = raw.split("#", 1)[0].strip()
            if not line or ":" not in line:
                continue
            database, _, sources = line.partition(":")
            bindings.append(self._item(database.strip(), " ".join(sources.split())))
        return bindings
