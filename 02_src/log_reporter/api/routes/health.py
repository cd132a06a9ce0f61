"""Liveness check route."""

from fastapi import APIRouter, Response


def create_health_router() -> APIRouter:
    """Create health check router."""
    router = APIRouter(tags=["health"])

    @router.get("/ht")
    async def health_check() -> Response:
        return Response(status_code=200)

    return router
