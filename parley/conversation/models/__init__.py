"""Conversation domain models.

Contains the pydantic models for:
- Timeline entries (bot replies and user turns) and the published State
- Outbound request bodies
"""

from parley.conversation.models.enums import (
    ResponseType,
    TransportKind,
)
from parley.conversation.models.messages import (
    BotMessage,
    BotResponse,
    BotResponsePayload,
    ChoicePayload,
    Choice,
    Response,
    State,
    TextPayload,
    UserResponse,
    UserResponsePayload,
    utc_now,
)
from parley.conversation.models.requests import (
    BotRequest,
    OutboundBody,
    Slot,
    StructuredRequest,
    UnstructuredRequest,
)

__all__ = [
    # Enums
    "ResponseType",
    "TransportKind",
    # Timeline
    "BotMessage",
    "BotResponse",
    "BotResponsePayload",
    "Choice",
    "ChoicePayload",
    "Response",
    "State",
    "TextPayload",
    "UserResponse",
    "UserResponsePayload",
    "utc_now",
    # Outbound
    "BotRequest",
    "OutboundBody",
    "Slot",
    "StructuredRequest",
    "UnstructuredRequest",
]
