"""Transport abstract interface.

A transport moves one outbound body to the bot service. The unary
transport returns the reply from ``dispatch``; the streaming transport
returns PENDING and delivers replies later through the handler given to
``start``. Either way the reply ends up in the same handler.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from parley.conversation.models import TransportKind

ReplyHandler = Callable[[Any], None]

# Placeholder result of a dispatch whose reply arrives on the inbound stream
PENDING = MappingProxyType({"isPending": True})


class Transport(ABC):
    """Abstract interface for reaching the bot service."""

    kind: TransportKind

    @abstractmethod
    async def start(self, on_reply: ReplyHandler) -> None:
        """Open the transport; inbound replies are passed to on_reply."""
        pass

    @abstractmethod
    async def dispatch(self, body: dict[str, Any]) -> Any:
        """Send one body, returning the raw reply or PENDING.

        Raises:
            TransportError: If the body can not be delivered
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
        pass
