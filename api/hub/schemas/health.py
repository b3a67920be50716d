from hub.schemas import HubModel


class HealthResponse(HubModel):
    """GET /health response."""

    status: str
    subscribers: int
    inbox_attached: bool
    inbox_pending: int
