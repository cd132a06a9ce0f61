"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..app import Application
from ..config import load_settings
from .routes import create_drain_router, create_health_router, create_observability_router


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    if application is None:
        application = Application(load_settings())

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        """Manage application lifespan."""
        await application.start()
        yield
        await application.stop()

    fastapi_app = FastAPI(
        title="Log Reporter",
        description="Reports router request timeouts from log drains to Sentry",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.application = application

    fastapi_app.include_router(create_health_router())
    fastapi_app.include_router(create_drain_router(application))
    fastapi_app.include_router(create_observability_router(application))

    return fastapi_app
