from hub.config import Settings
from hub.events import Broadcaster, SingleConsumerQueue
from hub.services.sse_broker import InboxBroker, SSEBroker

settings = Settings()


class EventHub:
    """The broadcast channel, the inbox queue and their SSE bridges."""

    def __init__(self, client_queue_maxsize: int = settings.client_queue_maxsize):
        self.channel: Broadcaster[dict] = Broadcaster()
        self.inbox: SingleConsumerQueue[dict] = SingleConsumerQueue()
        self.broker = SSEBroker(self.channel, maxsize=client_queue_maxsize)
        self.inbox_broker = InboxBroker(self.inbox)

    def publish(self, event: dict) -> None:
        self.channel.emit(event)
        self.inbox.emit(event)


event_hub = EventHub()


def get_hub() -> EventHub:
    return event_hub
