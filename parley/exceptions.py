"""Exception hierarchy for the conversation client.

None of these escape the public send operations: the conversation manager
absorbs them into a failure response on the timeline.
"""

from typing import Any


class ParleyError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TransportError(ParleyError):
    """Raised when a request can not be delivered to the bot service."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class MalformedReplyError(ParleyError):
    """Raised when a bot reply does not match the expected wire shape."""

    def __init__(self, message: str, raw: Any = None) -> None:
        super().__init__(message)
        self.raw = raw
