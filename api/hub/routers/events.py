import logging

from fastapi import APIRouter, Depends, Security

from hub.channels import EventHub, get_hub, settings
from hub.dependencies import require_publish_key
from hub.schemas.event import HubEvent, PublishRequest, PublishResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


@router.post("/events", response_model=PublishResponse, status_code=202)
async def publish_event(
    data: PublishRequest,
    hub: EventHub = Depends(get_hub),
    _publisher: None = Security(require_publish_key),
):
    """Emit an event on the broadcast channel and the inbox queue.

    Broadcast listeners receive it only if connected right now; the inbox
    keeps it until its consumer attaches.
    """
    event = HubEvent(event=data.event, data=data.data)
    subscribers = hub.channel.subscriber_count
    hub.publish(event.model_dump(mode="json"))

    pending = hub.inbox.pending_count()
    if pending >= settings.inbox_backlog_warning:
        logger.warning("Inbox backlog at %d events with no consumer attached", pending)
    return PublishResponse(id=event.id, subscribers=subscribers, pending=pending)
