import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from hub.schemas import HubModel


class PublishRequest(HubModel):
    """POST /events request body."""

    event: str = Field(min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_.:-]+$")
    data: dict[str, Any] = Field(default_factory=dict)


class HubEvent(HubModel):
    """Envelope emitted on the channels (as a JSON-ready dict)."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    event: str
    data: dict[str, Any]
    emitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class PublishResponse(HubModel):
    """POST /events response.

    subscribers is the number of broadcast listeners at publish time;
    pending is the inbox backlog after the publish.
    """

    id: str
    subscribers: int
    pending: int
