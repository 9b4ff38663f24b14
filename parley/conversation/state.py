"""Conversation record and its state transitions.

The record is never mutated in place. Every transition is a pure function
that takes the current record and returns its replacement, which the
manager then publishes to subscribers.
"""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from parley.conversation.models import (
    BotMessage,
    BotResponse,
    BotResponsePayload,
    ChoicePayload,
    ResponseType,
    State,
    TextPayload,
    UserResponse,
)


class ConversationRecord(BaseModel):
    """Internal conversation state owned by one manager."""

    model_config = ConfigDict(frozen=True)

    responses: State = Field(default=(), description="Timeline, oldest first")
    conversation_id: str | None = Field(
        default=None, description="Conversation assigned by the bot service"
    )
    user_id: str | None = Field(default=None, description="End-user identifier")
    context_sent: bool = Field(
        default=False, description="Whether the one-shot context went out"
    )


def snapshot(record: ConversationRecord) -> State:
    """The externally visible State of a record."""
    return record.responses


def _synthesized_reply(texts: Sequence[str]) -> BotResponse:
    return BotResponse(
        payload=BotResponsePayload(
            messages=tuple(BotMessage(text=text) for text in texts),
        )
    )


def seed_record(
    user_id: str | None = None,
    greeting_messages: Sequence[str] = (),
) -> ConversationRecord:
    """Create the initial record, with greetings as one bot turn if any."""
    responses: State = ()
    if greeting_messages:
        responses = (_synthesized_reply(greeting_messages),)
    return ConversationRecord(responses=responses, user_id=user_id)


def _append(
    record: ConversationRecord, entry: BotResponse | UserResponse
) -> ConversationRecord:
    return record.model_copy(update={"responses": (*record.responses, entry)})


def append_user_text(record: ConversationRecord, text: str) -> ConversationRecord:
    """Append a user text turn."""
    return _append(record, UserResponse(payload=TextPayload(text=text)))


def stamp_choice(record: ConversationRecord, choice_id: str) -> State:
    """Mark choice_id as selected on every bot message that offers it.

    Messages that do not offer the choice keep their previous selection.
    """
    stamped: list[BotResponse | UserResponse] = []
    for response in record.responses:
        if response.type == ResponseType.BOT:
            messages = tuple(
                message.with_selection(choice_id)
                for message in response.payload.messages
            )
            if messages != response.payload.messages:
                payload = response.payload.model_copy(update={"messages": messages})
                response = response.model_copy(update={"payload": payload})
        stamped.append(response)
    return tuple(stamped)


def select_choice(record: ConversationRecord, choice_id: str) -> ConversationRecord:
    """Stamp the selection, then append a user choice turn."""
    responses = (
        *stamp_choice(record, choice_id),
        UserResponse(payload=ChoicePayload(choice_id=choice_id)),
    )
    return record.model_copy(update={"responses": responses})


def apply_reply(
    record: ConversationRecord, payload: BotResponsePayload
) -> ConversationRecord:
    """Append a bot reply and adopt its conversation id."""
    return record.model_copy(
        update={
            "conversation_id": payload.conversation_id,
            "responses": (*record.responses, BotResponse(payload=payload)),
        }
    )


def append_failure(
    record: ConversationRecord, failure_messages: Sequence[str]
) -> ConversationRecord:
    """Append a synthesized bot turn carrying the failure messages."""
    return _append(record, _synthesized_reply(failure_messages))


def mark_context_sent(record: ConversationRecord) -> ConversationRecord:
    """Flip the one-shot context flag."""
    if record.context_sent:
        return record
    return record.model_copy(update={"context_sent": True})


def clear_conversation_id(record: ConversationRecord) -> ConversationRecord:
    """Forget the server conversation; the timeline is kept."""
    return record.model_copy(update={"conversation_id": None})
