"""Drain pipeline: frames in, timeout reports out."""

import asyncio
from dataclasses import dataclass, field
from typing import Protocol

from ..classification import ITimeoutClassifier
from ..destinations import IDestinationResolver
from ..dispatch import IReportDispatcher, build_report
from ..drain import FrameDecoder, framing_mode_for
from ..errors import ExtractionError, FramingError, UnknownSourceError
from ..extraction import IEntryExtractor
from ..logging_config import get_logger
from ..models import Destination, LogFrame, TimeoutEvent
from ..stats import PipelineStats

logger = get_logger(__name__)


@dataclass
class DecodedBatch:
    """Frames read from one drain request, ready for classification."""

    source_token: str
    destination: Destination | None
    frames: list[LogFrame] = field(default_factory=list)
    framing_error: FramingError | None = None

    @property
    def framing_ok(self) -> bool:
        return self.framing_error is None


class IDrainPipeline(Protocol):
    """Ingestion-to-report processing of drain requests."""

    def accept(
        self,
        body: bytes,
        source_token: str,
        content_type: str | None = None,
        declared_count: int | None = None,
    ) -> DecodedBatch:
        """Resolve the source and decode frames. Never raises."""
        ...

    async def process(self, batch: DecodedBatch) -> int:
        """Classify frames and dispatch reports; return reports delivered."""
        ...


class DrainPipeline:
    """
    Runs decoder, extractor, classifier, resolver and dispatcher in order.

    ``accept`` is synchronous and decides the HTTP status; ``process`` runs
    after the response has been sent. Every failure below the framing level
    is contained to its frame or report, logged and counted.
    """

    def __init__(
        self,
        resolver: IDestinationResolver,
        extractor: IEntryExtractor,
        classifier: ITimeoutClassifier,
        dispatcher: IReportDispatcher,
        stats: PipelineStats,
    ):
        self._resolver = resolver
        self._extractor = extractor
        self._classifier = classifier
        self._dispatcher = dispatcher
        self._stats = stats

    def accept(
        self,
        body: bytes,
        source_token: str,
        content_type: str | None = None,
        declared_count: int | None = None,
    ) -> DecodedBatch:
        self._stats.increment("batches_received")

        destination = None
        try:
            destination = self._resolver.resolve(source_token)
        except UnknownSourceError:
            self._stats.increment("unknown_sources")
            logger.warning(
                "Unknown drain token, batch will not be reported",
                extra={"context": {"token_suffix": source_token[-4:]}},
            )

        batch = DecodedBatch(source_token=source_token, destination=destination)
        decoder = FrameDecoder(framing_mode_for(content_type))
        try:
            for frame in decoder.decode(body, source_token):
                batch.frames.append(frame)
        except FramingError as e:
            batch.framing_error = e
            self._stats.increment("framing_errors")
            logger.warning(
                "Framing error after %s frames: %s",
                len(batch.frames),
                e,
                extra={"context": {"offset": e.offset, "mode": decoder.mode.value}},
            )

        self._stats.increment("frames_decoded", len(batch.frames))

        if (
            batch.framing_ok
            and declared_count is not None
            and declared_count != len(batch.frames)
        ):
            logger.warning(
                "Drain declared %s frames but %s were decoded",
                declared_count,
                len(batch.frames),
            )

        return batch

    def classify(self, frames: list[LogFrame]) -> list[TimeoutEvent]:
        """Extract and classify frames independently of each other."""
        events: list[TimeoutEvent] = []
        for frame in frames:
            try:
                entry = self._extractor.extract(frame)
            except ExtractionError as e:
                self._stats.increment("extraction_errors")
                logger.info(
                    "Dropping malformed router line: %s",
                    e,
                    extra={"context": {"offset": frame.offset}},
                )
                continue
            except Exception:
                self._stats.increment("extraction_errors")
                logger.exception(
                    "Unexpected error extracting frame",
                    extra={"context": {"offset": frame.offset}},
                )
                continue

            if entry is None:
                self._stats.increment("frames_skipped")
                continue

            event = self._classifier.classify(entry)
            if event is None:
                self._stats.increment("non_timeout_entries")
                continue

            self._stats.increment("timeouts_detected")
            logger.debug(
                "Timeout detected on %s",
                event.grouping_key,
                extra={"context": {"request_id": entry.request_id}},
            )
            events.append(event)

        return events

    async def process(self, batch: DecodedBatch) -> int:
        if batch.destination is None or not batch.frames:
            return 0

        # parsing is CPU work; keep it off the event loop
        events = await asyncio.to_thread(self.classify, batch.frames)
        if not events:
            return 0

        reports = [build_report(event, batch.destination) for event in events]
        return await self._dispatcher.dispatch_all(reports)
