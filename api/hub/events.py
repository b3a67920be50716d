"""Typed in-process event channels.

Broadcaster passes events through to every listener as they happen; a listener
never sees events emitted before it subscribed.

SingleConsumerQueue delivers to at most one listener and buffers events while
nobody is listening, so nothing emitted before the consumer attaches is lost.

Listener failures propagate to whoever triggered the delivery.
"""

import logging
import threading
from collections import deque
from collections.abc import Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], Any]


def same_listener(registered: Callable, candidate: Callable) -> bool:
    """Reference equality for callbacks.

    Bound methods are recreated on every attribute access, so they match
    when they wrap the same function on the same instance.
    """
    if registered is candidate:
        return True
    owner = getattr(registered, "__self__", None)
    if owner is None or owner is not getattr(candidate, "__self__", None):
        return False
    func = getattr(registered, "__func__", None)
    if func is not None:
        return func is getattr(candidate, "__func__", None)
    # builtin methods (list.append, Queue.put_nowait in C) carry no __func__
    return getattr(registered, "__name__", None) == getattr(
        candidate, "__name__", None
    )


class _Registration:
    __slots__ = ("listener", "active")

    def __init__(self, listener: Callable) -> None:
        self.listener = listener
        self.active = True


class Broadcaster(Generic[T]):
    """Multi-listener channel with synchronous, ordered fan-out."""

    def __init__(self) -> None:
        self._registrations: list[_Registration] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener[T]) -> Listener[T]:
        """Register a listener. The same listener may be registered twice."""
        with self._lock:
            self._registrations.append(_Registration(listener))
        return listener

    def unsubscribe(self, listener: Listener[T]) -> None:
        """Remove the first registration of listener, if any."""
        with self._lock:
            for index, registration in enumerate(self._registrations):
                if same_listener(registration.listener, listener):
                    registration.active = False
                    del self._registrations[index]
                    return

    def emit(self, event: T) -> None:
        """Invoke every listener registered when emit started, in order.

        A listener removed while the fan-out is running is skipped if its
        turn has not come yet. If a listener raises, the remaining listeners
        are not invoked for this event.
        """
        with self._lock:
            registrations = list(self._registrations)
        for registration in registrations:
            if registration.active:
                registration.listener(event)

    @property
    def subscriber_count(self) -> int:
        return len(self._registrations)


class SingleConsumerQueue(Generic[T]):
    """Single-listener channel with an unbounded FIFO backlog."""

    def __init__(self) -> None:
        self._listener: Listener[T] | None = None
        self._attaching: Listener[T] | None = None
        self._pending: deque[T] = deque()
        self._lock = threading.RLock()

    def subscribe(self, listener: Listener[T]) -> None:
        """Attach listener, replacing any current one, and flush the backlog.

        The backlog is delivered before listener becomes the active consumer.
        Events emitted from inside listener during the flush are queued
        behind the backlog. If listener raises, the failing event is consumed,
        the rest stay pending and listener is left detached.
        """
        with self._lock:
            self._listener = None
            self._attaching = listener
            if self._pending:
                logger.debug("Flushing %d pending events", len(self._pending))
            try:
                while self._pending and self._attaching is listener:
                    listener(self._pending.popleft())
            except Exception:
                if self._attaching is listener:
                    self._attaching = None
                raise
            if self._attaching is listener:
                self._attaching = None
                self._listener = listener

    def unsubscribe(self) -> None:
        """Detach the current listener. Later events are buffered again."""
        with self._lock:
            self._listener = None
            self._attaching = None

    def emit(self, event: T) -> None:
        with self._lock:
            if self._listener is None:
                self._pending.append(event)
            else:
                self._listener(event)

    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def has_subscriber(self) -> bool:
        return self._listener is not None
