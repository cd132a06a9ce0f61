"""Report dispatcher building reports and sending them concurrently."""

import asyncio
from typing import Iterable, Protocol

from ..errors import DispatchError
from ..logging_config import get_logger
from ..models import Destination, ReportEvent, TimeoutEvent
from ..stats import PipelineStats
from .sentry_client import IReportClient

logger = get_logger(__name__)

TIMEOUT_FINGERPRINT_KIND = "request-timeout"


def build_report(event: TimeoutEvent, destination: Destination) -> ReportEvent:
    """Build the report for a timeout, grouped by method, template and code."""
    entry = event.entry
    tags = {
        "transaction": event.path_template,
        "method": entry.method,
        "code": event.signal,
    }
    if entry.host:
        tags["url"] = f"https://{entry.host}{entry.path.split('?', 1)[0]}"
    if entry.dyno:
        tags["dyno"] = entry.dyno
    if entry.status is not None:
        tags["status"] = str(entry.status)

    return ReportEvent(
        fingerprint=[
            TIMEOUT_FINGERPRINT_KIND,
            event.signal,
            entry.method,
            event.path_template,
        ],
        message=f"request timeout on {event.grouping_key}",
        timestamp=entry.timestamp,
        destination=destination,
        tags=tags,
        contexts={
            "router": {
                "path": entry.path,
                "normalized_path": event.path_template,
                "host": entry.host,
                "dyno": entry.dyno,
                "request_id": entry.request_id,
                "connect_ms": entry.connect_ms,
                "service_ms": entry.service_ms,
                "description": entry.description,
            },
        },
        extra={"log_line": entry.raw},
    )


class IReportDispatcher(Protocol):
    """Sends reports, isolating failures per report."""

    async def dispatch_all(self, reports: Iterable[ReportEvent]) -> int:
        """Send reports concurrently; return how many were delivered."""
        ...


class ReportDispatcher:
    """Bounded fan-out of report sends; failures are logged and counted."""

    def __init__(
        self,
        client: IReportClient,
        stats: PipelineStats,
        send_timeout: float = 10.0,
        max_concurrency: int = 16,
    ):
        self._client = client
        self._stats = stats
        self._send_timeout = send_timeout
        self._semaphore = asyncio.Semaphore(max_concurrency)

    async def _send(self, report: ReportEvent) -> None:
        # queueing for a slot counts against the send timeout
        async with self._semaphore:
            await self._client.send(report)

    async def dispatch(self, report: ReportEvent) -> bool:
        """Send one report. Never raises."""
        context = {
            "environment": report.destination.environment,
            "fingerprint": report.fingerprint,
        }
        try:
            await asyncio.wait_for(self._send(report), timeout=self._send_timeout)
        except asyncio.TimeoutError:
            self._stats.increment("reports_failed")
            logger.warning(
                "Report send timed out after %ss",
                self._send_timeout,
                extra={"context": context},
            )
            return False
        except DispatchError as e:
            self._stats.increment("reports_failed")
            logger.warning(
                "Report send failed: %s", e, extra={"context": context}
            )
            return False
        except Exception:
            self._stats.increment("reports_failed")
            logger.exception(
                "Unexpected error sending report", extra={"context": context}
            )
            return False

        self._stats.increment("reports_sent")
        logger.info("Report sent: %s", report.message, extra={"context": context})
        return True

    async def dispatch_all(self, reports: Iterable[ReportEvent]) -> int:
        results = await asyncio.gather(*(self.dispatch(r) for r in reports))
        return sum(results)
