"""Timeline models: bot replies, user turns and the published State.

All models are frozen, sequences are tuples and opaque maps are read-only
copies, so a snapshot handed to a subscriber can not be changed behind the
conversation's back. Wire names are camelCase; Python attributes are
snake_case.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class WireModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump with wire aliases, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Choice(WireModel):
    """A selectable option attached to a bot message."""

    choice_id: str = Field(..., description="Choice identifier")
    choice_text: str = Field(..., description="Label shown to the user")


class BotMessage(WireModel):
    """One message inside a bot reply."""

    message_id: str | None = Field(default=None, description="Message identifier")
    text: str = Field(..., description="Message body")
    choices: tuple[Choice, ...] = Field(default=(), description="Offered choices")
    selected_choice_id: str | None = Field(
        default=None, description="Choice the user picked from this message"
    )

    @field_validator("choices", mode="before")
    @classmethod
    def _no_choices_when_none(cls, value: Any) -> Any:
        return () if value is None else value

    def offers(self, choice_id: str) -> bool:
        """Whether this message offers the given choice."""
        return any(choice.choice_id == choice_id for choice in self.choices)

    def with_selection(self, choice_id: str) -> "BotMessage":
        """Return a copy stamped with choice_id, or self if not offered."""
        if not self.offers(choice_id):
            return self
        return self.model_copy(update={"selected_choice_id": choice_id})


def freeze(value: Any) -> Any:
    """Copy decoded JSON into read-only containers.

    Objects become mappingproxies and arrays become tuples, at every depth.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, list | tuple):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze, for serialization."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


# Passed through untouched by the client; never rejects a reply
Opaque = Annotated[Any, AfterValidator(freeze), PlainSerializer(thaw)]


class BotResponsePayload(WireModel):
    """Content of one bot reply."""

    conversation_id: str | None = Field(
        default=None, description="Conversation assigned by the bot service"
    )
    messages: tuple[BotMessage, ...] = Field(..., description="Reply messages")
    metadata: Opaque = Field(
        default=None, description="Intent and escalation flags, as sent by the bot"
    )
    payload: Opaque = Field(default=None, description="Opaque passthrough")
    context: Opaque = Field(default=None, description="Opaque context")


class TextPayload(WireModel):
    """Free-form text typed by the user."""

    type: Literal["text"] = "text"
    text: str


class ChoicePayload(WireModel):
    """A choice picked by the user."""

    type: Literal["choice"] = "choice"
    choice_id: str


UserResponsePayload = Annotated[
    TextPayload | ChoicePayload, Field(discriminator="type")
]


class BotResponse(WireModel):
    """Timeline entry produced by the bot (or synthesized on failure)."""

    type: Literal["bot"] = "bot"
    received_at: datetime = Field(default_factory=utc_now)
    payload: BotResponsePayload


class UserResponse(WireModel):
    """Timeline entry produced by the user."""

    type: Literal["user"] = "user"
    received_at: datetime = Field(default_factory=utc_now)
    payload: UserResponsePayload


Response = Annotated[BotResponse | UserResponse, Field(discriminator="type")]

State = tuple[BotResponse | UserResponse, ...]
