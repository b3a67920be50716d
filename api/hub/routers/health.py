from fastapi import APIRouter, Depends

from hub.channels import EventHub, get_hub
from hub.schemas.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(hub: EventHub = Depends(get_hub)):
    return HealthResponse(
        status="healthy",
        subscribers=hub.channel.subscriber_count,
        inbox_attached=hub.inbox.has_subscriber,
        inbox_pending=hub.inbox.pending_count(),
    )
