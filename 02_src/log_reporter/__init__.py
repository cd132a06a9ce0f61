"""Log reporter: router timeouts from log drains, reported to Sentry."""

from .app import Application, IApplication
from .classification import ITimeoutClassifier, TimeoutClassifier
from .config import Settings, load_settings
from .destinations import DestinationResolver, IDestinationResolver
from .dispatch import (
    IReportClient,
    IReportDispatcher,
    ReportDispatcher,
    SentryReportClient,
    build_report,
)
from .drain import FrameDecoder, IFrameDecoder, encode_frames
from .errors import (
    ConfigError,
    DispatchError,
    ExtractionError,
    FramingError,
    ReporterError,
    UnknownSourceError,
)
from .extraction import EntryExtractor, IEntryExtractor
from .models import (
    Destination,
    FramingMode,
    LogFrame,
    LogKind,
    LogLine,
    ReportEvent,
    RouterLogEntry,
    TimeoutEvent,
)
from .normalization import IPathNormalizer, PathNormalizer
from .pipeline import DecodedBatch, DrainPipeline, IDrainPipeline
from .stats import PipelineStats

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    "load_settings",
    # Models
    "Destination",
    "FramingMode",
    "LogFrame",
    "LogKind",
    "LogLine",
    "RouterLogEntry",
    "TimeoutEvent",
    "ReportEvent",
    # Errors
    "ReporterError",
    "ConfigError",
    "FramingError",
    "ExtractionError",
    "UnknownSourceError",
    "DispatchError",
    # Components
    "IFrameDecoder",
    "FrameDecoder",
    "encode_frames",
    "IEntryExtractor",
    "EntryExtractor",
    "ITimeoutClassifier",
    "TimeoutClassifier",
    "IPathNormalizer",
    "PathNormalizer",
    "IDestinationResolver",
    "DestinationResolver",
    "IReportClient",
    "SentryReportClient",
    "IReportDispatcher",
    "ReportDispatcher",
    "build_report",
    "IDrainPipeline",
    "DrainPipeline",
    "DecodedBatch",
    "PipelineStats",
]
