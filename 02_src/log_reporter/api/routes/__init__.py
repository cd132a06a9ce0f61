"""API routes."""

from .drain import LOGPLEX_DRAIN_TOKEN, create_drain_router
from .health import create_health_router
from .observability import StatsResponse, create_observability_router

__all__ = [
    "LOGPLEX_DRAIN_TOKEN",
    "StatsResponse",
    "create_drain_router",
    "create_health_router",
    "create_observability_router",
]
