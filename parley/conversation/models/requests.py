"""Outbound request models (client to bot service)."""

from typing import Any

from pydantic import Field, model_validator

from parley.conversation.models.messages import WireModel


class Slot(WireModel):
    """A slot value supplied by the client."""

    slot_id: str
    value: Any = None


class StructuredRequest(WireModel):
    """Structured request: an intent, a choice or a list of slots."""

    choice_id: str | None = None
    intent_id: str | None = None
    slots: tuple[Slot, ...] | None = None


class UnstructuredRequest(WireModel):
    """Free-form text request."""

    text: str


class BotRequest(WireModel):
    """The `request` member of an outbound body."""

    unstructured: UnstructuredRequest | None = None
    structured: StructuredRequest | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "BotRequest":
        if (self.unstructured is None) == (self.structured is None):
            raise ValueError("request must be either unstructured or structured")
        return self

    @property
    def kind(self) -> str:
        """Short label used for metrics and logs."""
        if self.unstructured is not None:
            return "text"
        assert self.structured is not None
        if self.structured.choice_id is not None:
            return "choice"
        if self.structured.intent_id is not None:
            return "intent"
        if self.structured.slots is not None:
            return "slots"
        return "structured"


class OutboundBody(WireModel):
    """Full JSON body sent for every request."""

    user_id: str | None = None
    conversation_id: str | None = None
    context: dict[str, Any] | None = None
    language_code: str | None = None
    channel_type: str | None = None
    request: BotRequest = Field(...)
