"""SSE endpoints: live broadcast stream and the single-consumer inbox."""

import asyncio
import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sse_starlette import EventSourceResponse, ServerSentEvent

from hub.channels import EventHub, get_hub, settings
from hub.services.sse_broker import InboxBroker, InboxBusyError, SSEBroker

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sse"])


def _to_sse(event: dict) -> ServerSentEvent:
    return ServerSentEvent(
        data=json.dumps(event["data"], ensure_ascii=False),
        event=event["event"],
        id=event["id"],
    )


async def _broadcast_stream(request: Request, broker: SSEBroker):
    """Per-client SSE generator."""
    queue = broker.subscribe()
    try:
        while True:
            if await request.is_disconnected():
                break
            try:
                event = await asyncio.wait_for(queue.get(), timeout=1.0)
                yield _to_sse(event)
            except asyncio.TimeoutError:
                continue
    finally:
        broker.unsubscribe(queue)


async def _inbox_stream(request: Request, inbox_broker: InboxBroker):
    """Single-consumer SSE generator.

    The inbox is claimed only once the response starts iterating. An event
    counts as sent when the response comes back for the next one; anything
    unconfirmed returns to the backlog on exit.
    """
    try:
        queue = inbox_broker.attach()
    except InboxBusyError:
        logger.warning("Inbox claimed by another consumer before stream started")
        return
    unsent: dict | None = None
    try:
        while True:
            if await request.is_disconnected():
                break
            try:
                unsent = await asyncio.wait_for(queue.get(), timeout=1.0)
            except asyncio.TimeoutError:
                continue
            yield _to_sse(unsent)
            unsent = None
    finally:
        inbox_broker.detach(queue, unsent)


@router.get("/events/stream")
async def stream_events(request: Request, hub: EventHub = Depends(get_hub)):
    """SSE stream of events published from now on.

    Connect with EventSource API:
      const es = new EventSource('/events/stream')
      es.addEventListener('bundle_done', (e) => { ... })
    """
    return EventSourceResponse(
        _broadcast_stream(request, hub.broker),
        ping=settings.sse_ping_seconds,
    )


@router.get("/events/inbox")
async def stream_inbox(request: Request, hub: EventHub = Depends(get_hub)):
    """SSE stream of the inbox: backlog first, then live events.

    Only one client may consume the inbox at a time.
    """
    if hub.inbox_broker.attached:
        raise HTTPException(status_code=409, detail="Inbox already has a consumer")
    return EventSourceResponse(
        _inbox_stream(request, hub.inbox_broker),
        ping=settings.sse_ping_seconds,
    )
