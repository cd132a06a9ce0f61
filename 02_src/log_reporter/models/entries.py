"""Log line and router entry data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping


class LogKind(str, Enum):
    """Origin of a syslog line, taken from the app-name field."""

    HEROKU = "heroku"
    APP = "app"


@dataclass(frozen=True)
class LogLine:
    """A syslog line as emitted by the log drain."""

    priority: int
    timestamp: datetime
    hostname: str
    kind: LogKind
    source: str  # procid, e.g. "router" or "web.1"
    text: str


@dataclass(frozen=True)
class RouterLogEntry:
    """Parsed key/value attributes of one router log line."""

    timestamp: datetime
    method: str
    path: str
    service_ms: float
    status: int | None = None
    code: str | None = None
    connect_ms: float | None = None
    host: str | None = None
    dyno: str | None = None
    request_id: str | None = None
    description: str | None = None
    attributes: Mapping[str, str] = field(default_factory=dict)
    raw: str = ""
