"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from types import MappingProxyType
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

TIMEOUT_ATTRIBUTES = (
    'at=error code=H12 desc="Request timeout" method=GET '
    "path=/orders/482913 host=myapp.herokuapp.com "
    "request_id=8601b555-6a83-4c12-8269-97c8e32cdb22 "
    'fwd="204.204.204.204" dyno=web.1 connect=0ms service=30000ms '
    "status=503 bytes=0 protocol=https"
)

INFO_ATTRIBUTES = (
    'at=info method=GET path="/api/disposition/service/?hub=33" '
    "host=thermondo-backend.herokuapp.com "
    "request_id=60fbbe6e-0ea5-4013-ab6a-9d6851fe1c95 "
    'fwd="80.187.107.115,167.82.231.29" dyno=web.10 '
    "connect=2ms service=864ms status=200 bytes=15055 protocol=https"
)

APP_LINE = (
    "<190>1 2022-12-05T08:59:21.66229+00:00 host app web.15 - "
    "[r9673 d8512f2b] INFO     [292844f1-49fe-445b-87b3-af87088b7df8] "
    "log_request_id.middleware: "
    "method=GET path=/api/disposition/foundation/ status=200 user=875"
)


def router_line(attributes: str, source: str = "router") -> str:
    """Wrap router attributes in the syslog envelope sent by logplex."""
    return (
        "<158>1 2022-12-05T08:59:21.850424+00:00 host heroku "
        f"{source} - {attributes}"
    )


@pytest.fixture
def timeout_line() -> str:
    """A well-formed H12 router line."""
    return router_line(TIMEOUT_ATTRIBUTES)


@pytest.fixture
def info_line() -> str:
    """A successful request router line."""
    return router_line(INFO_ATTRIBUTES)


@pytest.fixture
def app_line() -> str:
    """An application stdout line."""
    return APP_LINE


@pytest.fixture
def make_router_line():
    """Build router lines from custom attributes."""
    return router_line


@pytest.fixture
def destination():
    """A mapped Sentry destination."""
    from log_reporter.models import Destination

    return Destination(
        token="real_token",
        environment="production",
        dsn="https://public@example.com/1",
    )


@pytest.fixture
def settings(destination):
    """Settings with one drain mapping and short send timeouts."""
    from log_reporter.config import Settings

    return Settings(
        destinations=MappingProxyType({destination.token: destination}),
        send_timeout=1.0,
        max_concurrent_sends=4,
    )


@pytest.fixture
def stats():
    """Fresh pipeline counters."""
    from log_reporter.stats import PipelineStats

    return PipelineStats()


@pytest.fixture
def mock_report_client():
    """Create mock report client that accepts every report."""
    client = Mock()
    client.send = AsyncMock(return_value=None)
    return client


@pytest_asyncio.fixture
async def application(settings, mock_report_client):
    """Create a started Application with a mock report client."""
    from log_reporter.app import Application

    app = Application(settings, report_client=mock_report_client)
    await app.start()
    yield app
    await app.stop()


@pytest.fixture
def client(settings, mock_report_client):
    """Create a FastAPI test client around a mock report client."""
    from fastapi.testclient import TestClient

    from log_reporter.api import create_fastapi_app
    from log_reporter.app import Application

    fastapi_app = create_fastapi_app(
        Application(settings, report_client=mock_report_client)
    )
    with TestClient(fastapi_app) as test_client:
        yield test_client
