"""Tests for TimeoutClassifier."""

from datetime import datetime, timezone

from log_reporter.classification import TimeoutClassifier
from log_reporter.models import RouterLogEntry
from log_reporter.normalization import PathNormalizer


def _entry(**overrides) -> RouterLogEntry:
    values = {
        "timestamp": datetime(2022, 12, 5, 8, 59, 21, tzinfo=timezone.utc),
        "method": "GET",
        "path": "/orders/482913",
        "service_ms": 30000.0,
        "status": 503,
        "code": "H12",
    }
    values.update(overrides)
    return RouterLogEntry(**values)


class TestTimeoutClassifier:
    """Tests for TimeoutClassifier.classify()."""

    def test_h12_is_timeout(self):
        """Test that the timeout code yields a TimeoutEvent."""
        event = TimeoutClassifier().classify(_entry())

        assert event is not None
        assert event.signal == "H12"
        assert event.path_template == "/orders/:id"
        assert event.grouping_key == "GET /orders/:id"
        assert event.entry.path == "/orders/482913"

    def test_ordinary_error_status_is_not_timeout(self):
        """Test that a plain 503 without the timeout code is discarded."""
        assert TimeoutClassifier().classify(_entry(code=None)) is None

    def test_other_error_code_is_not_timeout(self):
        """Test that other router errors are discarded."""
        assert TimeoutClassifier().classify(_entry(code="H13")) is None

    def test_durations_are_not_inspected(self):
        """Test that a fast request with the timeout code still counts."""
        assert TimeoutClassifier().classify(_entry(service_ms=1.0)) is not None
        assert TimeoutClassifier().classify(_entry(code=None, service_ms=1e9)) is None

    def test_configured_codes(self):
        """Test a custom timeout signal set."""
        classifier = TimeoutClassifier(timeout_codes={"H12", "H28"})

        assert classifier.classify(_entry(code="H28")) is not None
        assert classifier.timeout_codes == frozenset({"H12", "H28"})

    def test_deterministic(self):
        """Test that classifying the same entry twice gives the same result."""
        classifier = TimeoutClassifier()
        entry = _entry()

        assert classifier.classify(entry) == classifier.classify(entry)
        assert classifier.classify(_entry(code="H10")) is None
        assert classifier.classify(_entry(code="H10")) is None

    def test_uses_injected_normalizer(self):
        """Test that the template comes from the given normalizer."""
        classifier = TimeoutClassifier(PathNormalizer.from_names(["offer_number"]))
        event = classifier.classify(_entry(path="/offers/0608656-04"))

        assert event.path_template == "/offers/:id"

    def test_empty_template_is_discarded(self):
        """Test that an entry without a usable path is not reported."""
        classifier = TimeoutClassifier()

        assert classifier.classify(_entry(path="?only=query")) is None
