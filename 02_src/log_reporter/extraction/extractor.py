"""Entry extractor turning router log frames into typed entries."""

import re
from typing import Protocol

from ..errors import ExtractionError
from ..models import LogFrame, LogKind, LogLine, RouterLogEntry
from .parsers import parse_key_value_pairs, parse_log_line

ROUTER_SOURCE = "router"

_DURATION = re.compile(r"(?P<value>[0-9]+(?:\.[0-9]+)?)(?:ms)?")
_METHOD = re.compile(r"[A-Z]+")
_STATUS = re.compile(r"[0-9]+")
_ERROR_CODE = re.compile(r"[A-Z][0-9]{2}")


class IEntryExtractor(Protocol):
    """Parses router frames into RouterLogEntry values."""

    def extract(self, frame: LogFrame) -> RouterLogEntry | None:
        """Return the entry, None for non-router frames, or raise ExtractionError."""
        ...


def is_router_line(line: LogLine) -> bool:
    return line.kind is LogKind.HEROKU and line.source == ROUTER_SOURCE


def parse_duration_ms(key: str, value: str) -> float:
    match = _DURATION.fullmatch(value)
    if not match:
        raise ExtractionError(f"{key}={value!r} is not a duration in milliseconds")
    return float(match["value"])


class EntryExtractor:
    """Extracts router log entries, skipping every other kind of frame."""

    def extract(self, frame: LogFrame) -> RouterLogEntry | None:
        try:
            text = frame.payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ExtractionError(f"frame is not valid UTF-8: {e}") from e

        line = parse_log_line(text)
        if line is None or not is_router_line(line):
            return None

        return self.extract_entry(line)

    def extract_entry(self, line: LogLine) -> RouterLogEntry:
        """Build a RouterLogEntry from a router line, validating required keys."""
        pairs, _ = parse_key_value_pairs(line.text)

        method = self._require(pairs, "method")
        if not _METHOD.fullmatch(method):
            raise ExtractionError(f"method={method!r} is not an HTTP method")

        path = self._require(pairs, "path")
        service_ms = parse_duration_ms("service", self._require(pairs, "service"))

        connect_ms = None
        if "connect" in pairs:
            connect_ms = parse_duration_ms("connect", pairs["connect"])

        status = pairs.get("status")
        code = pairs.get("code")
        if status is None and code is None:
            raise ExtractionError("router line has neither status nor code")
        if status is not None and not _STATUS.fullmatch(status):
            raise ExtractionError(f"status={status!r} is not an integer")
        if code is not None and not _ERROR_CODE.fullmatch(code):
            raise ExtractionError(f"code={code!r} is not a known error code")

        return RouterLogEntry(
            timestamp=line.timestamp,
            method=method,
            path=path,
            service_ms=service_ms,
            status=int(status) if status is not None else None,
            code=code,
            connect_ms=connect_ms,
            host=pairs.get("host"),
            dyno=pairs.get("dyno"),
            request_id=pairs.get("request_id"),
            description=pairs.get("desc"),
            attributes=pairs,
            raw=line.text,
        )

    @staticmethod
    def _require(pairs: dict[str, str], key: str) -> str:
        value = pairs.get(key)
        if not value:
            raise ExtractionError(f"router line is missing {key}")
        return value
