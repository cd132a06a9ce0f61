"""Timeout and report data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .destinations import Destination
from .entries import RouterLogEntry


@dataclass(frozen=True)
class TimeoutEvent:
    """A router entry confirmed to be a request timeout."""

    entry: RouterLogEntry
    path_template: str
    signal: str  # the platform timeout code, e.g. "H12"

    @property
    def grouping_key(self) -> str:
        return f"{self.entry.method} {self.path_template}"


@dataclass
class ReportEvent:
    """Outbound payload for one timeout occurrence."""

    fingerprint: list[str]
    message: str
    timestamp: datetime
    destination: Destination
    level: str = "error"
    tags: dict[str, str] = field(default_factory=dict)
    contexts: dict[str, dict[str, Any]] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
