"""Test factories for conversation wire payloads and configs."""

from typing import Any

from parley.config.models.conversation import ConversationConfig
from parley.conversation.models import State


class ReplyFactory:
    """Factory for raw bot replies as they arrive on the wire."""

    @staticmethod
    def message(
        text: str = "Hello from the bot",
        *,
        message_id: str | None = None,
        choices: list[tuple[str, str]] | None = None,
    ) -> dict[str, Any]:
        """Create one wire message; choices are (choiceId, choiceText) pairs."""
        message: dict[str, Any] = {"text": text}
        if message_id is not None:
            message["messageId"] = message_id
        if choices is not None:
            message["choices"] = [
                {"choiceId": choice_id, "choiceText": choice_text}
                for choice_id, choice_text in choices
            ]
        return message

    @staticmethod
    def create(
        *messages: dict[str, Any],
        conversation_id: str | None = "conv-1",
        metadata: dict[str, Any] | None = None,
        payload: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Create a reply; defaults to a single plain message."""
        reply: dict[str, Any] = {
            "conversationId": conversation_id,
            "messages": list(messages) or [ReplyFactory.message()],
        }
        if metadata is not None:
            reply["metadata"] = metadata
        if payload is not None:
            reply["payload"] = payload
        if context is not None:
            reply["context"] = context
        return reply

    @staticmethod
    def pick_one(conversation_id: str = "conv-1") -> dict[str, Any]:
        """Reply with one message offering choices a and b."""
        return ReplyFactory.create(
            ReplyFactory.message(
                "Pick one",
                message_id="m1",
                choices=[("a", "A"), ("b", "B")],
            ),
            conversation_id=conversation_id,
        )


class ConfigFactory:
    """Factory for ConversationConfig instances."""

    @staticmethod
    def create(
        *,
        bot_url: str = "https://bots.example.com/v1/chat",
        **overrides: Any,
    ) -> ConversationConfig:
        """Create a config with sensible defaults."""
        return ConversationConfig(bot_url=bot_url, **overrides)


class StateRecorder:
    """Subscriber that keeps every snapshot it receives."""

    def __init__(self) -> None:
        self.snapshots: list[State] = []

    def __call__(self, state: State) -> None:
        self.snapshots.append(state)

    @property
    def last(self) -> State:
        return self.snapshots[-1]
