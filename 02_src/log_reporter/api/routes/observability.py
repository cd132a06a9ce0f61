"""Observability API routes."""

from pydantic import BaseModel
from fastapi import APIRouter

from ...app import IApplication


class StatsResponse(BaseModel):
    """Response model for pipeline counters."""

    batches_received: int
    framing_errors: int
    frames_decoded: int
    frames_skipped: int
    extraction_errors: int
    non_timeout_entries: int
    timeouts_detected: int
    unknown_sources: int
    reports_sent: int
    reports_failed: int


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/stats", response_model=StatsResponse)
    async def get_stats() -> dict:
        """Get pipeline counters since process start."""
        return app.stats.snapshot()

    return router
