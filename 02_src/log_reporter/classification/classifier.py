"""Timeout classifier for router log entries."""

from typing import Iterable, Protocol

from ..models import RouterLogEntry, TimeoutEvent
from ..normalization import IPathNormalizer, PathNormalizer

DEFAULT_TIMEOUT_CODES = frozenset({"H12"})  # Heroku "Request timeout"


class ITimeoutClassifier(Protocol):
    """Decides whether a router entry is a request timeout."""

    def classify(self, entry: RouterLogEntry) -> TimeoutEvent | None:
        """Return a TimeoutEvent for timeouts, None for every other entry."""
        ...


class TimeoutClassifier:
    """
    Classifies entries by the platform's own timeout code.

    Durations are not inspected: the router decides what a timeout is.
    Ordinary error statuses (a plain 503, say) are not timeouts.
    """

    def __init__(
        self,
        normalizer: IPathNormalizer | None = None,
        timeout_codes: Iterable[str] = DEFAULT_TIMEOUT_CODES,
    ):
        self._normalizer = normalizer or PathNormalizer()
        self._timeout_codes = frozenset(timeout_codes)

    @property
    def timeout_codes(self) -> frozenset[str]:
        return self._timeout_codes

    def classify(self, entry: RouterLogEntry) -> TimeoutEvent | None:
        if entry.code not in self._timeout_codes:
            return None

        template = self._normalizer.normalize(entry.path)
        if not template:
            return None

        return TimeoutEvent(entry=entry, path_template=template, signal=entry.code)
