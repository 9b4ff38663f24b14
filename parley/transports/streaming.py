"""Streaming transport: one persistent websocket per conversation.

Outbound bodies are written as text frames and dispatch returns PENDING.
A single reader task decodes inbound text frames and hands them to the
reply handler. Frames that are not valid replies are dropped.

There is no reconnection. When the connection ends the reader logs it,
the transport is marked closed, and later dispatches raise TransportError
so the conversation shows its failure message instead of waiting forever.
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any, Protocol

from websockets.asyncio.client import connect
from websockets.exceptions import ConnectionClosed, WebSocketException

from parley.conversation.codec import decode_frame
from parley.conversation.models import TransportKind
from parley.exceptions import MalformedReplyError, TransportError
from parley.observability.logging import get_logger
from parley.observability.metrics import CONNECTION_CLOSED, INBOUND_DROPPED
from parley.transports.base import PENDING, ReplyHandler, Transport

logger = get_logger(__name__)


class Connection(Protocol):
    """The part of a websocket client connection the transport uses."""

    async def send(self, message: str) -> None: ...

    async def close(self) -> None: ...

    def __aiter__(self) -> Any: ...


Connector = Callable[[str], Awaitable[Connection]]


class StreamingTransport(Transport):
    """Websocket transport for ``wss://`` bot endpoints."""

    kind = TransportKind.STREAMING

    def __init__(
        self,
        url: str,
        *,
        connect_timeout: float = 10.0,
        connector: Connector | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            url: Bot websocket endpoint
            connect_timeout: Timeout for the opening handshake in seconds
            connector: Coroutine factory opening the connection
        """
        self.url = url
        self._connector = connector or partial(connect, open_timeout=connect_timeout)
        self._connection: Connection | None = None
        self._reader: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        """Whether frames can currently be sent."""
        return self._connection is not None and not self._closed

    async def start(self, on_reply: ReplyHandler) -> None:
        """Open the connection and start reading inbound frames.

        Raises:
            TransportError: If the connection can not be opened
        """
        if self._connection is not None:
            return

        try:
            self._connection = await self._connector(self.url)
        except (OSError, TimeoutError, WebSocketException) as e:
            raise TransportError(f"Could not connect to {self.url}: {e}") from e

        logger.info("streaming_connection_opened", url=self.url)
        self._reader = asyncio.create_task(self._read(self._connection, on_reply))

    async def _read(self, connection: Connection, on_reply: ReplyHandler) -> None:
        clean = True
        try:
            async for frame in connection:
                self._receive(frame, on_reply)
        except ConnectionClosed as e:
            clean = False
            logger.warning(
                "streaming_connection_error",
                url=self.url,
                code=e.rcvd.code if e.rcvd else None,
                error=str(e),
            )
        finally:
            self._closed = True
            CONNECTION_CLOSED.labels(clean=str(clean).lower()).inc()

        if clean:
            logger.info("streaming_connection_closed", url=self.url)

    def _receive(self, frame: str | bytes, on_reply: ReplyHandler) -> None:
        try:
            raw = decode_frame(frame)
            if raw is None:
                INBOUND_DROPPED.labels(reason="binary").inc()
                return
            on_reply(raw)
        except MalformedReplyError as e:
            INBOUND_DROPPED.labels(reason="malformed").inc()
            logger.warning("inbound_frame_dropped", url=self.url, error=e.message)
        except Exception as e:
            # The reader must outlive any single frame
            INBOUND_DROPPED.labels(reason="handler_error").inc()
            logger.error(
                "inbound_frame_failed",
                url=self.url,
                error=str(e),
                error_type=type(e).__name__,
            )

    async def dispatch(self, body: dict[str, Any]) -> Any:
        """Write the body as a text frame; the reply arrives on the stream."""
        if self._connection is None or self._closed:
            raise TransportError(f"Streaming connection to {self.url} is not open")

        try:
            await self._connection.send(json.dumps(body))
        except ConnectionClosed as e:
            self._closed = True
            raise TransportError(f"Streaming connection to {self.url} closed") from e
        return PENDING

    async def close(self) -> None:
        """Close the connection and stop the reader."""
        self._closed = True
        if self._connection is not None:
            await self._connection.close()
        if self._reader is not None and not self._reader.done():
            self._reader.cancel()
            await asyncio.gather(self._reader, return_exceptions=True)
