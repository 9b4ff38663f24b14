"""Parley: conversation state client for chat bot services.

Usage:
    from parley import ConversationConfig, create_conversation

    config = ConversationConfig(bot_url="https://bots.example.com/v1/chat")
    async with await create_conversation(config) as conversation:
        conversation.subscribe(print)
        await conversation.send_text("Hello!")
"""

from parley.config.models.conversation import ConversationConfig
from parley.conversation.manager import ConversationManager, create_conversation
from parley.conversation.models import (
    BotMessage,
    BotResponse,
    BotResponsePayload,
    Choice,
    Response,
    State,
    StructuredRequest,
    UserResponse,
)
from parley.exceptions import MalformedReplyError, ParleyError, TransportError

__all__ = [
    "BotMessage",
    "BotResponse",
    "BotResponsePayload",
    "Choice",
    "ConversationConfig",
    "ConversationManager",
    "MalformedReplyError",
    "ParleyError",
    "Response",
    "State",
    "StructuredRequest",
    "TransportError",
    "UserResponse",
    "create_conversation",
]
