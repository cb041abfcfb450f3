"""Realtime transports — WebSocket at /ws and a Server-Sent Events stream.

Both transports register a session with the notification hub and start
with a ``connected`` event carrying the session id. WebSocket clients
manage project groups over the socket itself; SSE clients use the
join/leave endpoints with the session id they were given.
"""

import asyncio
import contextlib
import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Request,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from fastapi.responses import StreamingResponse
from starlette.websockets import WebSocketState

from alfred.application.schemas import ApiResponse, ProjectSubscription, RealtimeStatus
from alfred.application.services import ClientSession, NotificationHub, format_sse
from alfred.domain.events import project_group
from alfred.infrastructure.dependencies import get_notification_hub

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/realtime", tags=["Realtime"])
ws_router = APIRouter(tags=["Realtime"])


# ── Server-Sent Events ───────────────────────────────────────────────


@router.get("/stream")
async def event_stream(
    request: Request,
    hub: NotificationHub = Depends(get_notification_hub),
) -> StreamingResponse:
    """SSE endpoint for dashboard updates.

    Clients connect via EventSource; the first event is ``connected``.
    """
    session = hub.connect()

    async def frames():
        async for event in hub.subscribe(session):
            if await request.is_disconnected():
                break
            yield format_sse(event)

    return StreamingResponse(
        frames(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post("/sessions/{session_id}/join", response_model=ApiResponse[list[str]])
async def join_project(
    session_id: str,
    data: ProjectSubscription,
    hub: NotificationHub = Depends(get_notification_hub),
) -> ApiResponse[list[str]]:
    if not hub.join(session_id, project_group(data.project_id)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return ApiResponse(data=sorted(hub.groups_of(session_id)), message="Joined project")


@router.post("/sessions/{session_id}/leave", response_model=ApiResponse[list[str]])
async def leave_project(
    session_id: str,
    data: ProjectSubscription,
    hub: NotificationHub = Depends(get_notification_hub),
) -> ApiResponse[list[str]]:
    if not hub.leave(session_id, project_group(data.project_id)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return ApiResponse(data=sorted(hub.groups_of(session_id)), message="Left project")


@router.get("/status", response_model=ApiResponse[RealtimeStatus])
async def realtime_status(
    hub: NotificationHub = Depends(get_notification_hub),
) -> ApiResponse[RealtimeStatus]:
    return ApiResponse(
        data=RealtimeStatus(connected_clients=hub.client_count, session_ids=hub.session_ids)
    )


# ── WebSocket ────────────────────────────────────────────────────────


def _project_id(data: object) -> str | None:
    """Accept either ``{"projectId": ...}`` or a bare id string."""
    if isinstance(data, dict):
        value = data.get("projectId")
    else:
        value = data
    return value if isinstance(value, str) and value else None


async def _handle_client_message(
    hub: NotificationHub, session: ClientSession, message: object
) -> None:
    if not isinstance(message, dict):
        return
    event = message.get("event")
    project_id = _project_id(message.get("data"))

    if event == "join-project" and project_id:
        hub.join(session.id, project_group(project_id))
    elif event == "leave-project" and project_id:
        hub.leave(session.id, project_group(project_id))
    elif event == "ping":
        try:
            session.queue.put_nowait({"event": "pong", "data": {"sessionId": session.id}})
        except asyncio.QueueFull:
            logger.warning("Session %s backlog full, pong dropped", session.id)
    else:
        logger.debug("Ignoring client message %r from %s", event, session.id)


@ws_router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    hub: NotificationHub = Depends(get_notification_hub),
) -> None:
    await websocket.accept()
    session = hub.connect()

    async def pump() -> None:
        try:
            async for event in hub.subscribe(session):
                await websocket.send_json(event)
        except Exception as exc:
            logger.warning("Send to session %s failed: %s", session.id, exc)
            return
        # The hub dropped the session or shut down; the client has to reconnect.
        if websocket.application_state == WebSocketState.CONNECTED:
            await websocket.close(code=status.WS_1013_TRY_AGAIN_LATER)

    sender = asyncio.create_task(pump())
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                logger.debug("Discarding malformed frame from %s", session.id)
                continue
            await _handle_client_message(hub, session, message)
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(session.id)
        sender.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sender
