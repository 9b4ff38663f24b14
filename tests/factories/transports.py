"""In-memory transport doubles."""

import asyncio
from typing import Any

from parley.conversation.models import TransportKind
from parley.transports.base import PENDING, ReplyHandler, Transport


class FakeTransport(Transport):
    """Transport that records bodies and replays scripted outcomes.

    Each dispatch consumes the next scripted outcome: a raw reply, an
    exception to raise, or a future to await first. With nothing scripted
    it returns PENDING, like the streaming transport.
    """

    def __init__(
        self,
        outcomes: list[Any] | None = None,
        *,
        kind: TransportKind = TransportKind.UNARY,
    ) -> None:
        self.kind = kind
        self.outcomes = list(outcomes or [])
        self.sent: list[dict[str, Any]] = []
        self.on_reply: ReplyHandler | None = None
        self.started = False
        self.closed = False

    async def start(self, on_reply: ReplyHandler) -> None:
        self.on_reply = on_reply
        self.started = True

    async def dispatch(self, body: dict[str, Any]) -> Any:
        self.sent.append(body)
        if not self.outcomes:
            return PENDING
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, asyncio.Future):
            outcome = await outcome
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def push(self, raw: Any) -> None:
        """Simulate an inbound reply on the stream."""
        assert self.on_reply is not None, "transport not started"
        self.on_reply(raw)

    async def close(self) -> None:
        self.closed = True
