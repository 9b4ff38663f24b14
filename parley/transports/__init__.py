"""Transports carrying requests to the bot service."""

from parley.transports.base import PENDING, ReplyHandler, Transport
from parley.transports.selector import select_transport
from parley.transports.streaming import StreamingTransport
from parley.transports.unary import UnaryTransport

__all__ = [
    "PENDING",
    "ReplyHandler",
    "StreamingTransport",
    "Transport",
    "UnaryTransport",
    "select_transport",
]
