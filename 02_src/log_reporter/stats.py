"""Counters describing what the pipeline did with incoming batches."""

import threading
from dataclasses import dataclass, field, fields


@dataclass
class PipelineStats:
    """Process-lifetime counters; safe to update from worker threads."""

    batches_received: int = 0
    framing_errors: int = 0
    frames_decoded: int = 0
    frames_skipped: int = 0
    extraction_errors: int = 0
    non_timeout_entries: int = 0
    timeouts_detected: int = 0
    unknown_sources: int = 0
    reports_sent: int = 0
    reports_failed: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def increment(self, counter: str, by: int = 1) -> None:
        if counter.startswith("_") or not hasattr(self, counter):
            raise AttributeError(f"unknown counter {counter!r}")
        with self._lock:
            setattr(self, counter, getattr(self, counter) + by)

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return {
                f.name: getattr(self, f.name)
                for f in fields(self)
                if not f.name.startswith("_")
            }
