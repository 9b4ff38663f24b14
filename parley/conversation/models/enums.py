"""Enums for conversation domain."""

from enum import StrEnum


class ResponseType(StrEnum):
    """Who produced a timeline entry."""

    BOT = "bot"
    USER = "user"


class TransportKind(StrEnum):
    """Wire transport used to reach the bot service."""

    STREAMING = "streaming"
    UNARY = "unary"
