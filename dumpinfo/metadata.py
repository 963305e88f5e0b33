"""
Outcome records shared by the reporter and its callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

HOST_OUTCOME = "host"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


@dataclass
class CategoryOutcome:
    category_id: str
    lines: int = 0
    failed: bool = False
    error: Optional[str] = None
    marker_written: bool = False

    @property
    def written(self) -> int:
        return self.lines + (1 if self.marker_written else 0)

    def asdict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "category": self.category_id,
            "lines": self.lines,
            "failed": self.failed,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass
class ReportResult:
    host: CategoryOutcome = field(default_factory=lambda: CategoryOutcome(HOST_OUTCOME))
    categories: Dict[str, CategoryOutcome] = field(default_factory=dict)
    recorded_at: str = field(default_factory=utc_timestamp)

    def outcome(self, category_id: str) -> CategoryOutcome:
        if category_id == HOST_OUTCOME:
            return self.host
        if category_id not in self.categories:
            self.categories[category_id] = CategoryOutcome(category_id)
        return self.categories[category_id]

    @property
    def lines_written(self) -> int:
        return self.host.written + sum(entry.written for entry in self.categories.values())

    @property
    def failed(self) -> List[str]:
        names = [HOST_OUTCOME] if self.host.failed else []
        names.extend(name for name, entry in self.categories.items() if entry.failed)
        return names

    @property
    def partial(self) -> bool:
        return bool(self.failed)

    @property
    def status(self) -> str:
        return "partial" if self.partial else "ok"

    def describe(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "recorded_at": self.recorded_at,
            "lines_written": self.lines_written,
            "failed": self.failed,
            "host": self.host.asdict(),
            "categories": [entry.asdict() for entry in self.categories.values()],
        }
