"""Bridges between the in-process channels and per-client SSE queues."""

import asyncio
import logging

from hub.events import Broadcaster, SingleConsumerQueue

logger = logging.getLogger(__name__)


class InboxBusyError(Exception):
    """Raised when a second consumer tries to attach to the inbox."""


class SSEBroker:
    """Fans a Broadcaster out to one asyncio.Queue per connected client."""

    def __init__(self, channel: Broadcaster[dict], maxsize: int) -> None:
        self._channel = channel
        self._maxsize = maxsize
        self._listeners: dict[asyncio.Queue[dict], object] = {}

    def subscribe(self) -> asyncio.Queue[dict]:
        """Create a client queue and register it on the channel."""
        queue: asyncio.Queue[dict] = asyncio.Queue(maxsize=self._maxsize)

        def deliver(event: dict) -> None:
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.warning(
                    "SSE client queue full, dropping event %s", event.get("id")
                )

        self._listeners[queue] = deliver
        self._channel.subscribe(deliver)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[dict]) -> None:
        """Remove a client queue on disconnect."""
        deliver = self._listeners.pop(queue, None)
        if deliver is not None:
            self._channel.unsubscribe(deliver)

    @property
    def client_count(self) -> int:
        return len(self._listeners)


class InboxBroker:
    """Hands a SingleConsumerQueue to at most one streaming client."""

    def __init__(self, inbox: SingleConsumerQueue[dict]) -> None:
        self._inbox = inbox
        self._queue: asyncio.Queue[dict] | None = None

    def attach(self) -> asyncio.Queue[dict]:
        """Attach a new client queue; the inbox backlog lands in it first."""
        if self._inbox.has_subscriber:
            raise InboxBusyError("Inbox already has a consumer")
        queue: asyncio.Queue[dict] = asyncio.Queue()
        self._inbox.subscribe(queue.put_nowait)
        self._queue = queue
        logger.info(
            "Inbox consumer attached with %d backlog events", queue.qsize()
        )
        return queue

    def detach(
        self, queue: asyncio.Queue[dict], unsent: dict | None = None
    ) -> None:
        """Detach the client and return its unsent events to the backlog.

        unsent is an event already taken off the queue but not confirmed as
        sent; it goes back ahead of whatever is still queued.
        """
        if self._queue is not queue:
            return
        self._inbox.unsubscribe()
        self._queue = None
        returned = 0
        if unsent is not None:
            self._inbox.emit(unsent)
            returned += 1
        while not queue.empty():
            self._inbox.emit(queue.get_nowait())
            returned += 1
        if returned:
            logger.info(
                "Inbox consumer detached, %d events returned to backlog", returned
            )

    @property
    def attached(self) -> bool:
        return self._inbox.has_subscriber
