"""Mapping between wire JSON and conversation models.

Outbound bodies are assembled from the conversation record and config;
inbound replies are validated into BotResponsePayload. A reply marked
``isPending`` is the streaming transport's placeholder and never
produces a timeline entry.
"""

import json
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from parley.config.models.conversation import ConversationConfig
from parley.conversation.models import (
    BotMessage,
    BotRequest,
    BotResponsePayload,
    OutboundBody,
    Slot,
    StructuredRequest,
    UnstructuredRequest,
)
from parley.conversation.state import ConversationRecord
from parley.exceptions import MalformedReplyError

PENDING_KEY = "isPending"


def text_request(text: str) -> BotRequest:
    """Request carrying free-form user text."""
    return BotRequest(unstructured=UnstructuredRequest(text=text))


def as_slots(slots: Iterable[Slot | Mapping[str, Any]]) -> tuple[Slot, ...]:
    """Normalize slot values given as models or ``{slotId, value}`` mappings."""
    return tuple(
        slot if isinstance(slot, Slot) else Slot.model_validate(slot)
        for slot in slots
    )


def structured_request(
    request: StructuredRequest | Mapping[str, Any] | None = None,
    *,
    choice_id: str | None = None,
    intent_id: str | None = None,
    slots: Iterable[Slot | Mapping[str, Any]] | None = None,
) -> BotRequest:
    """Request carrying an intent, a choice or slots.

    Accepts a prepared StructuredRequest, a ``{choiceId|intentId|slots}``
    mapping, or keyword arguments.
    """
    if request is None:
        request = StructuredRequest(
            choice_id=choice_id,
            intent_id=intent_id,
            slots=as_slots(slots) if slots is not None else None,
        )
    elif not isinstance(request, StructuredRequest):
        request = StructuredRequest.model_validate(request)
    return BotRequest(structured=request)


def build_body(
    record: ConversationRecord,
    config: ConversationConfig,
    request: BotRequest,
) -> tuple[dict[str, Any], bool]:
    """Assemble the outbound JSON body.

    Returns:
        The body, and whether the configured context was included. The
        context goes out only while the record has not sent it yet.
    """
    include_context = config.context is not None and not record.context_sent
    body = OutboundBody(
        user_id=record.user_id,
        conversation_id=record.conversation_id,
        context=config.context if include_context else None,
        language_code=config.language_code,
        channel_type=config.experimental.channel_type,
        request=request,
    )
    return body.to_wire(), include_context


def is_pending(raw: Any) -> bool:
    """Whether a raw reply is the streaming placeholder."""
    return isinstance(raw, Mapping) and bool(raw.get(PENDING_KEY))


def parse_reply(raw: Any) -> BotResponsePayload | None:
    """Validate a decoded JSON reply.

    Returns:
        The payload, or None for an empty reply or the pending placeholder

    Raises:
        MalformedReplyError: If the reply is not a valid bot response
    """
    if raw is None or is_pending(raw):
        return None
    if not isinstance(raw, Mapping):
        raise MalformedReplyError("Reply is not a JSON object", raw=raw)

    messages = raw.get("messages")
    if not isinstance(messages, list):
        raise MalformedReplyError("Reply has no message list", raw=raw)

    try:
        return BotResponsePayload(
            conversation_id=raw.get("conversationId"),
            # Only id, text and choices are taken from the wire
            messages=tuple(
                BotMessage(
                    message_id=message.get("messageId"),
                    text=message.get("text"),
                    choices=message.get("choices"),
                )
                for message in messages
            ),
            metadata=raw.get("metadata"),
            payload=raw.get("payload"),
            context=raw.get("context"),
        )
    except (ValidationError, AttributeError, RecursionError) as e:
        raise MalformedReplyError(f"Invalid reply: {e}", raw=raw) from e


def decode_frame(frame: str | bytes) -> Any:
    """Decode one streaming text frame into raw JSON.

    Binary frames carry no replies and decode to None. The result goes
    through the same reply handler as a unary response body.

    Raises:
        MalformedReplyError: If a text frame is not JSON
    """
    if not isinstance(frame, str):
        return None
    try:
        return json.loads(frame)
    except (ValueError, RecursionError) as e:
        raise MalformedReplyError(f"Frame is not JSON: {e}", raw=frame) from e
