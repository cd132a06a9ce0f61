"""Drain simulator posting synthetic router logs to a running service."""

import asyncio
import random
import uuid
from datetime import datetime, timezone
from typing import Protocol

import httpx

from log_reporter.drain import LOGPLEX_CONTENT_TYPE, encode_frames
from log_reporter.logging_config import get_logger

logger = get_logger(__name__)

_PATHS = ["/orders/{n}", "/users/{uuid}", "/api/invoices/{n}/pdf", "/"]
_METHODS = ["GET", "GET", "GET", "POST"]


class ISim(Protocol):
    """Generate drain traffic for manual testing."""

    async def run(self, rounds: int = 3) -> int:
        """Send batches; return how many were accepted."""
        ...


def router_line(
    path: str,
    method: str = "GET",
    timeout: bool = False,
    when: datetime | None = None,
) -> str:
    """Build one router syslog line, as a timeout (H12) or a normal request."""
    when = when or datetime.now(timezone.utc)
    request_id = uuid.uuid4()
    dyno = f"web.{random.randint(1, 4)}"
    if timeout:
        attributes = (
            f'at=error code=H12 desc="Request timeout" method={method} '
            f"path={path} host=myapp.herokuapp.com request_id={request_id} "
            f'fwd="204.204.204.204" dyno={dyno} connect=0ms service=30000ms '
            "status=503 bytes=0 protocol=https"
        )
    else:
        attributes = (
            f"at=info method={method} path={path} host=myapp.herokuapp.com "
            f'request_id={request_id} fwd="204.204.204.204" dyno={dyno} '
            f"connect=1ms service={random.randint(5, 900)}ms status=200 "
            "bytes=1024 protocol=https"
        )
    return f"<158>1 {when.isoformat()} host heroku router - {attributes}"


class DrainSim:
    """Posts logplex-framed batches mixing ordinary requests and timeouts."""

    def __init__(
        self,
        api_url: str = "http://localhost:3000",
        drain_token: str = "d.00000000-0000-0000-0000-000000000000",
        client: httpx.AsyncClient | None = None,
        delay: float = 1.0,
    ):
        self._api_url = api_url
        self._drain_token = drain_token
        self._client = client
        self._delay = delay

    def build_batch(self, size: int = 5) -> list[str]:
        """Build a batch with one timeout among ordinary requests."""
        lines = []
        timeout_index = random.randrange(size)
        for i in range(size):
            template = random.choice(_PATHS)
            path = template.format(n=random.randint(1, 999999), uuid=uuid.uuid4())
            lines.append(
                router_line(path, random.choice(_METHODS), timeout=i == timeout_index)
            )
        return lines

    async def send_batch(self, client: httpx.AsyncClient, lines: list[str]) -> bool:
        """Send one batch. Return True when the service accepted it."""
        try:
            response = await client.post(
                f"{self._api_url}/",
                content=encode_frames(lines),
                headers={
                    "Content-Type": LOGPLEX_CONTENT_TYPE,
                    "Logplex-Drain-Token": self._drain_token,
                    "Logplex-Msg-Count": str(len(lines)),
                    "Logplex-Frame-Id": uuid.uuid4().hex,
                },
                timeout=10.0,
            )
        except httpx.HTTPError as e:
            logger.error("SIM: Failed to send batch: %s", e)
            return False

        if response.status_code != 200:
            logger.error("SIM: Batch rejected: %s", response.status_code)
            return False

        logger.info("SIM: Sent batch of %s lines", len(lines))
        return True

    async def run(self, rounds: int = 3) -> int:
        client = self._client or httpx.AsyncClient()
        accepted = 0
        try:
            for i in range(rounds):
                if await self.send_batch(client, self.build_batch()):
                    accepted += 1
                if i < rounds - 1:
                    await asyncio.sleep(self._delay)
        finally:
            if self._client is None:
                await client.aclose()
        return accepted
