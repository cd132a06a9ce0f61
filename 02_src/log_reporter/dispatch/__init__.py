"""Report dispatch module."""

from .dispatcher import IReportDispatcher, ReportDispatcher, build_report
from .sentry_client import IReportClient, SentryReportClient, to_sentry_event

__all__ = [
    "IReportClient",
    "IReportDispatcher",
    "ReportDispatcher",
    "SentryReportClient",
    "build_report",
    "to_sentry_event",
]
