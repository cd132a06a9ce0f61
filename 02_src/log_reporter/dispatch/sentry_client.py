"""Sentry report client sending events as envelopes over httpx."""

import uuid
from datetime import datetime, timezone
from typing import Any, Protocol

import httpx
from sentry_sdk.consts import EndpointType
from sentry_sdk.envelope import Envelope
from sentry_sdk.utils import Dsn

from ..errors import DispatchError
from ..models import ReportEvent

CLIENT_NAME = "log-reporter/0.1.0"


class IReportClient(Protocol):
    """Delivers one report to its destination."""

    async def send(self, report: ReportEvent) -> None:
        """Send the report; raise DispatchError on failure."""
        ...


def to_sentry_event(report: ReportEvent) -> dict[str, Any]:
    """Render a report as a Sentry event payload."""
    return {
        "event_id": uuid.uuid4().hex,
        "timestamp": report.timestamp.isoformat(),
        "platform": "other",
        "level": report.level,
        "logger": "log_reporter",
        "environment": report.destination.environment,
        "message": {"formatted": report.message},
        "fingerprint": list(report.fingerprint),
        "tags": dict(report.tags),
        "contexts": dict(report.contexts),
        "extra": dict(report.extra),
    }


class SentryReportClient:
    """
    Sends reports to the Sentry project named by each destination's DSN.

    One httpx client is shared by all destinations; the DSN decides the
    endpoint and the auth header of every request.
    """

    def __init__(self, http_client: httpx.AsyncClient, timeout: float = 10.0):
        self._http = http_client
        self._timeout = timeout

    async def send(self, report: ReportEvent) -> None:
        event = to_sentry_event(report)
        auth = Dsn(report.destination.dsn).to_auth(CLIENT_NAME)

        envelope = Envelope(
            headers={
                "event_id": event["event_id"],
                "dsn": report.destination.dsn,
                "sent_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        envelope.add_event(event)

        try:
            response = await self._http.post(
                auth.get_api_url(EndpointType.ENVELOPE),
                content=envelope.serialize(),
                headers={
                    "Content-Type": "application/x-sentry-envelope",
                    "X-Sentry-Auth": auth.to_header(),
                },
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise DispatchError(f"sentry request failed: {e!r}") from e

        if response.status_code >= 300:
            raise DispatchError(
                f"sentry rejected event with HTTP {response.status_code}"
            )
