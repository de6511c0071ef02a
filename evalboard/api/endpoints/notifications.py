"""Live update endpoints."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from evalboard.auth.permissions import supervisor_required
from evalboard.schemas.notification import NotificationEvent, NotificationListResponse
from evalboard.schemas.shared import MessageResponse
from evalboard.services.notification import NotificationHub, Subscription, get_notification_hub
from evalboard.utils.messages import get_message

logger = logging.getLogger(__name__)

router = APIRouter()


def format_sse(event: NotificationEvent) -> str:
    """One server-sent event frame."""
    return f"id: {event.id}\nevent: {event.kind.value}\ndata: {event.model_dump_json()}\n\n"


async def stream_events(request: Request, subscription: Subscription):
    try:
        async for event in subscription:
            if await request.is_disconnected():
                break
            yield format_sse(event)
    finally:
        subscription.close()
        logger.debug("Notification stream closed")


@router.get("", response_model=NotificationListResponse, summary="Notification history")
async def list_notifications(
    current_user: dict = Depends(supervisor_required),
    hub: NotificationHub = Depends(get_notification_hub),
):
    """
    Newest first, at most the configured history size.
    """
    return await hub.get_notifications()


@router.post("/read-all", response_model=MessageResponse, summary="Mark all notifications read")
async def mark_all_read(
    current_user: dict = Depends(supervisor_required),
    hub: NotificationHub = Depends(get_notification_hub),
):
    changed = await hub.mark_all_read()
    return MessageResponse(message=get_message("notification", "marked_read"), data={"updated": changed})


@router.get("/stream", summary="Server-sent notification stream")
async def stream_notifications(
    request: Request,
    current_user: dict = Depends(supervisor_required),
    hub: NotificationHub = Depends(get_notification_hub),
):
    """
    Server-sent events for teacher and evaluation changes published after
    the connection opened. Closing the connection ends the subscription.
    """
    subscription = hub.subscribe()
    return StreamingResponse(
        stream_events(request, subscription),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
