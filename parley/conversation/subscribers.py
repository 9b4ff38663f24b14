"""Subscriber registry for State snapshots."""

from collections.abc import Callable

from parley.conversation.models import State
from parley.observability.logging import get_logger

logger = get_logger(__name__)

Subscriber = Callable[[State], None]


class SubscriberRegistry:
    """Ordered list of subscribers owned by one conversation.

    Registration order is notification order. The same callable may be
    registered more than once; each registration is notified separately.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def __len__(self) -> int:
        return len(self._subscribers)

    def add(self, subscriber: Subscriber) -> None:
        """Append a registration at the end."""
        self._subscribers.append(subscriber)

    def remove(self, subscriber: Subscriber) -> bool:
        """Remove the first registration of this exact callable."""
        for index, registered in enumerate(self._subscribers):
            if registered is subscriber:
                del self._subscribers[index]
                return True
        return False

    def clear(self) -> None:
        """Drop every registration."""
        self._subscribers.clear()

    def notify(self, state: State) -> None:
        """Call every subscriber with the snapshot, in registration order.

        Iterates over a copy, so a subscriber may unsubscribe during
        notification. A failing subscriber is logged and does not prevent
        the remaining ones from being notified.
        """
        for subscriber in list(self._subscribers):
            self.deliver(subscriber, state)

    def deliver(self, subscriber: Subscriber, state: State) -> None:
        """Call one subscriber, logging instead of raising on failure."""
        try:
            subscriber(state)
        except Exception as e:
            logger.error(
                "subscriber_failed",
                subscriber=getattr(subscriber, "__qualname__", repr(subscriber)),
                error=str(e),
                error_type=type(e).__name__,
            )
