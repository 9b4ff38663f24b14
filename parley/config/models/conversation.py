"""Per-conversation configuration.

Field names follow Python conventions; the camelCase keys a chat widget
is configured with (``botUrl``, ``greetingMessages``...) are accepted too.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_FAILURE_MESSAGES: tuple[str, ...] = (
    "We encountered an issue while contacting the server. "
    "Please try again in a few moments.",
)

WELCOME_INTENT_ID = "NLX.Welcome"


class ExperimentalConfig(BaseModel):
    """Experimental settings passed through to the bot service."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    channel_type: str | None = Field(
        default=None, description="Channel type reported to the bot"
    )


class ConversationConfig(BaseModel):
    """Options recognised when a conversation is created."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    bot_url: str = Field(..., min_length=1, description="Bot endpoint")
    user_id: str | None = Field(default=None, description="End-user identifier")
    failure_messages: tuple[str, ...] = Field(
        default=DEFAULT_FAILURE_MESSAGES,
        description="Messages shown when a request can not be delivered",
    )
    greeting_messages: tuple[str, ...] = Field(
        default=(), description="Messages seeded as an initial bot turn"
    )
    context: dict[str, Any] | None = Field(
        default=None, description="Context sent once with the first request"
    )
    trigger_welcome_intent: bool = Field(
        default=False, description="Fire the welcome intent on start"
    )
    headers: dict[str, str] = Field(
        default_factory=dict, description="Extra HTTP headers for POST requests"
    )
    language_code: str | None = Field(
        default=None, description="Language code passed to the bot"
    )
    experimental: ExperimentalConfig = Field(
        default_factory=ExperimentalConfig,
        description="Experimental settings",
    )

    @field_validator("failure_messages", mode="before")
    @classmethod
    def _default_when_none(cls, value: Any) -> Any:
        # An explicit None behaves like an omitted option
        return DEFAULT_FAILURE_MESSAGES if value is None else value

    @field_validator("greeting_messages", mode="before")
    @classmethod
    def _no_greetings_when_none(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("headers", "experimental", mode="before")
    @classmethod
    def _empty_when_none(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def uses_streaming(self) -> bool:
        """True when the bot URL selects the streaming transport."""
        return self.bot_url.startswith("wss://")
