"""Application bootstrap and lifecycle management."""

from typing import Protocol

import httpx

from .classification import TimeoutClassifier
from .config import Settings
from .destinations import DestinationResolver
from .dispatch import IReportClient, ReportDispatcher, SentryReportClient
from .extraction import EntryExtractor
from .logging_config import get_logger
from .normalization import PathNormalizer
from .pipeline import DrainPipeline, IDrainPipeline
from .stats import PipelineStats

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    @property
    def pipeline(self) -> IDrainPipeline:
        """The drain pipeline handling requests."""
        ...

    @property
    def stats(self) -> PipelineStats:
        """Process-lifetime pipeline counters."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: Settings | None = None,
        report_client: IReportClient | None = None,
    ):
        self._settings = settings or Settings()
        self._report_client = report_client
        self._stats = PipelineStats()

        # Components (will be initialized in start())
        self._http_client: httpx.AsyncClient | None = None
        self._resolver: DestinationResolver | None = None
        self._classifier: TimeoutClassifier | None = None
        self._dispatcher: ReportDispatcher | None = None
        self._pipeline: DrainPipeline | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")
        settings = self._settings

        # 1. Resolver over the immutable token mapping
        self._resolver = DestinationResolver(settings.destinations)
        logger.info("Resolver initialized with %s destinations", len(self._resolver))

        # 2. Classifier with its path normalizer
        normalizer = PathNormalizer.from_names(
            settings.path_id_patterns, settings.path_id_regexes
        )
        self._classifier = TimeoutClassifier(normalizer, settings.timeout_codes)

        # 3. Report client (shared HTTP connection pool) unless one was injected
        if self._report_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(settings.send_timeout)
            )
            self._report_client = SentryReportClient(
                self._http_client, timeout=settings.send_timeout
            )

        # 4. Dispatcher (depends on report client)
        self._dispatcher = ReportDispatcher(
            self._report_client,
            self._stats,
            send_timeout=settings.send_timeout,
            max_concurrency=settings.max_concurrent_sends,
        )

        # 5. Pipeline (depends on everything above)
        self._pipeline = DrainPipeline(
            resolver=self._resolver,
            extractor=EntryExtractor(),
            classifier=self._classifier,
            dispatcher=self._dispatcher,
            stats=self._stats,
        )
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        self._pipeline = None
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
            self._report_client = None
            logger.info("HTTP client closed")
        logger.info("Application stopped", extra={"context": self._stats.snapshot()})

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def stats(self) -> PipelineStats:
        return self._stats

    @property
    def pipeline(self) -> DrainPipeline:
        """Get pipeline instance."""
        if not self._pipeline:
            raise RuntimeError("Application not started")
        return self._pipeline
