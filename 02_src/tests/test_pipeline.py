"""Tests for DrainPipeline."""

from unittest.mock import AsyncMock, Mock

import pytest

from log_reporter.classification import TimeoutClassifier
from log_reporter.destinations import DestinationResolver
from log_reporter.dispatch import ReportDispatcher
from log_reporter.drain import encode_frames
from log_reporter.errors import DispatchError
from log_reporter.extraction import EntryExtractor
from log_reporter.pipeline import DrainPipeline


@pytest.fixture
def pipeline(destination, stats, mock_report_client):
    """Create a pipeline over real components and a mock report client."""
    return DrainPipeline(
        resolver=DestinationResolver({destination.token: destination}),
        extractor=EntryExtractor(),
        classifier=TimeoutClassifier(),
        dispatcher=ReportDispatcher(mock_report_client, stats, send_timeout=1.0),
        stats=stats,
    )


class TestAccept:
    """Tests for DrainPipeline.accept()."""

    def test_known_token(self, pipeline, stats, destination, timeout_line, info_line):
        """Test that frames are decoded for a mapped token."""
        batch = pipeline.accept(encode_frames([timeout_line, info_line]), "real_token")

        assert batch.destination is destination
        assert len(batch.frames) == 2
        assert batch.framing_ok
        assert stats.batches_received == 1
        assert stats.frames_decoded == 2

    def test_unknown_token(self, pipeline, stats, timeout_line):
        """Test that unknown tokens are counted, not raised."""
        batch = pipeline.accept(encode_frames([timeout_line]), "nope")

        assert batch.destination is None
        assert stats.unknown_sources == 1

    def test_framing_error_keeps_earlier_frames(self, pipeline, stats, timeout_line):
        """Test that frames before a framing error are kept."""
        body = encode_frames([timeout_line]) + b"999 truncated"

        batch = pipeline.accept(body, "real_token")

        assert not batch.framing_ok
        assert len(batch.frames) == 1
        assert stats.framing_errors == 1

    def test_newline_content_type(self, pipeline, timeout_line, info_line):
        """Test that text bodies are split on newlines."""
        body = f"{timeout_line}\n{info_line}\n".encode()

        batch = pipeline.accept(body, "real_token", content_type="text/plain")

        assert len(batch.frames) == 2

    def test_declared_count_mismatch_is_not_an_error(self, pipeline, timeout_line):
        """Test that a wrong Logplex-Msg-Count only warns."""
        batch = pipeline.accept(
            encode_frames([timeout_line]), "real_token", declared_count=5
        )

        assert batch.framing_ok
        assert len(batch.frames) == 1


class TestClassify:
    """Tests for DrainPipeline.classify()."""

    def test_mixed_frames(
        self, pipeline, stats, timeout_line, info_line, app_line, make_router_line
    ):
        """Test that each frame is classified on its own."""
        frames = pipeline.accept(
            encode_frames(
                [
                    app_line,
                    make_router_line("method=GET service=1ms status=200"),
                    info_line,
                    timeout_line,
                ]
            ),
            "real_token",
        ).frames

        events = pipeline.classify(frames)

        assert [e.grouping_key for e in events] == ["GET /orders/:id"]
        assert stats.frames_skipped == 1
        assert stats.extraction_errors == 1
        assert stats.non_timeout_entries == 1
        assert stats.timeouts_detected == 1

    def test_unexpected_extractor_error_is_contained(self, stats, timeout_line):
        """Test that one crashing frame does not stop the batch."""
        real = EntryExtractor()
        calls = iter([RuntimeError("boom")])

        class FlakyExtractor:
            def extract(self, frame):
                for error in calls:
                    raise error
                return real.extract(frame)

        pipeline = DrainPipeline(
            resolver=DestinationResolver({}),
            extractor=FlakyExtractor(),
            classifier=TimeoutClassifier(),
            dispatcher=Mock(),
            stats=stats,
        )
        frames = pipeline.accept(encode_frames([timeout_line, timeout_line]), "t").frames

        events = pipeline.classify(frames)

        assert len(events) == 1
        assert stats.extraction_errors == 1


class TestProcess:
    """Tests for DrainPipeline.process()."""

    @pytest.mark.asyncio
    async def test_timeout_and_malformed_frame(
        self, pipeline, stats, mock_report_client, timeout_line, make_router_line
    ):
        """Test one timeout next to a malformed router line."""
        body = encode_frames(
            [timeout_line, make_router_line("method=GET path=/x status=200")]
        )

        sent = await pipeline.process(pipeline.accept(body, "real_token"))

        assert sent == 1
        report = mock_report_client.send.await_args.args[0]
        assert report.fingerprint == ["request-timeout", "H12", "GET", "/orders/:id"]
        assert report.destination.environment == "production"
        assert stats.extraction_errors == 1
        assert stats.reports_sent == 1

    @pytest.mark.asyncio
    async def test_unknown_token_sends_nothing(
        self, pipeline, mock_report_client, timeout_line
    ):
        """Test that batches from unmapped drains are never reported."""
        sent = await pipeline.process(
            pipeline.accept(encode_frames([timeout_line]), "nope")
        )

        assert sent == 0
        mock_report_client.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_one_failed_send(
        self, destination, stats, timeout_line, make_router_line
    ):
        """Test that one failing destination send leaves the others delivered."""
        client = Mock()
        client.send = AsyncMock(side_effect=[None, DispatchError("HTTP 500"), None])
        pipeline = DrainPipeline(
            resolver=DestinationResolver({destination.token: destination}),
            extractor=EntryExtractor(),
            classifier=TimeoutClassifier(),
            dispatcher=ReportDispatcher(client, stats),
            stats=stats,
        )
        lines = [
            timeout_line,
            make_router_line("code=H12 method=POST path=/carts/9 service=30000ms"),
            make_router_line("code=H12 method=GET path=/ service=30000ms status=503"),
        ]

        sent = await pipeline.process(pipeline.accept(encode_frames(lines), "real_token"))

        assert sent == 2
        assert stats.reports_sent == 2
        assert stats.reports_failed == 1

    @pytest.mark.asyncio
    async def test_no_timeouts(self, pipeline, mock_report_client, info_line):
        """Test that ordinary traffic produces no reports."""
        sent = await pipeline.process(
            pipeline.accept(encode_frames([info_line]), "real_token")
        )

        assert sent == 0
        mock_report_client.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_one_report_per_occurrence(
        self, pipeline, mock_report_client, timeout_line, make_router_line
    ):
        """Test that two timeouts in one group produce two reports."""
        other = make_router_line(
            "code=H12 method=GET path=/orders/17 service=30000ms status=503"
        )

        sent = await pipeline.process(
            pipeline.accept(encode_frames([timeout_line, other]), "real_token")
        )

        assert sent == 2
        fingerprints = [c.args[0].fingerprint for c in mock_report_client.send.await_args_list]
        assert fingerprints[0] == fingerprints[1]
