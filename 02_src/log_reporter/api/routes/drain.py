"""Log drain ingestion route."""

from fastapi import APIRouter, BackgroundTasks, Header, Request, Response
from starlette.requests import ClientDisconnect

from ...app import IApplication
from ...logging_config import get_logger

logger = get_logger(__name__)

LOGPLEX_DRAIN_TOKEN = "Logplex-Drain-Token"
LOGPLEX_MSG_COUNT = "Logplex-Msg-Count"
LOGPLEX_FRAME_ID = "Logplex-Frame-Id"


def _parse_count(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def create_drain_router(app: IApplication) -> APIRouter:
    """Create log drain router."""
    router = APIRouter(tags=["drain"])

    @router.post("/")
    async def receive_logs(
        request: Request,
        background_tasks: BackgroundTasks,
        logplex_drain_token: str | None = Header(None),
        content_type: str | None = Header(None),
        logplex_msg_count: str | None = Header(None),
        logplex_frame_id: str | None = Header(None),
    ) -> Response:
        """Accept a drain batch; reporting happens after the response is sent."""
        if not logplex_drain_token:
            return Response(
                status_code=400, content=f"missing {LOGPLEX_DRAIN_TOKEN} header"
            )

        try:
            body = await request.body()
        except ClientDisconnect:
            logger.warning(
                "Client disconnected before the body was read",
                extra={"context": {"frame_id": logplex_frame_id}},
            )
            return Response(status_code=400)

        batch = app.pipeline.accept(
            body,
            logplex_drain_token,
            content_type=content_type,
            declared_count=_parse_count(logplex_msg_count),
        )
        if batch.destination is not None and batch.frames:
            background_tasks.add_task(app.pipeline.process, batch)

        if not batch.framing_ok:
            return Response(status_code=400, content=str(batch.framing_error))
        return Response(status_code=200)

    return router
