"""Tests for conversation record transitions."""

from parley.conversation.models import (
    BotMessage,
    BotResponse,
    BotResponsePayload,
    Choice,
    UserResponse,
)
from parley.conversation.state import (
    ConversationRecord,
    append_failure,
    append_user_text,
    apply_reply,
    clear_conversation_id,
    mark_context_sent,
    seed_record,
    select_choice,
    snapshot,
)


def reply(conversation_id: str | None = "conv-1", *messages: BotMessage) -> BotResponsePayload:
    return BotResponsePayload(
        conversation_id=conversation_id,
        messages=messages or (BotMessage(text="hello"),),
    )


def choice_message(message_id: str, *choice_ids: str) -> BotMessage:
    return BotMessage(
        message_id=message_id,
        text=f"Message {message_id}",
        choices=tuple(Choice(choice_id=c, choice_text=c.upper()) for c in choice_ids),
    )


class TestSeedRecord:
    """Tests for seed_record."""

    def test_empty_without_greetings(self) -> None:
        record = seed_record(user_id="u-1")
        assert record.responses == ()
        assert record.user_id == "u-1"
        assert record.conversation_id is None
        assert record.context_sent is False

    def test_greetings_form_one_bot_turn(self) -> None:
        record = seed_record(greeting_messages=("Hi", "How can I help?"))
        assert len(record.responses) == 1
        greeting = record.responses[0]
        assert isinstance(greeting, BotResponse)
        assert greeting.payload.conversation_id is None
        assert [m.text for m in greeting.payload.messages] == ["Hi", "How can I help?"]
        assert all(m.message_id is None and m.choices == () for m in greeting.payload.messages)


class TestTransitions:
    """Tests for the pure transition functions."""

    def test_transitions_return_new_records(self) -> None:
        record = seed_record()
        updated = append_user_text(record, "hello")
        assert record.responses == ()
        assert len(updated.responses) == 1
        assert isinstance(updated.responses[0], UserResponse)
        assert updated.responses[0].payload.text == "hello"  # type: ignore[union-attr]

    def test_apply_reply_adopts_conversation_id(self) -> None:
        record = apply_reply(seed_record(), reply("conv-9"))
        assert record.conversation_id == "conv-9"
        assert record.responses[-1].payload.conversation_id == "conv-9"  # type: ignore[union-attr]

    def test_append_failure(self) -> None:
        record = ConversationRecord(conversation_id="conv-1")
        failed = append_failure(record, ("Sorry", "Try later"))
        entry = failed.responses[-1]
        assert isinstance(entry, BotResponse)
        assert entry.payload.conversation_id is None
        assert [m.text for m in entry.payload.messages] == ["Sorry", "Try later"]
        assert failed.conversation_id == "conv-1"

    def test_mark_context_sent_once(self) -> None:
        record = mark_context_sent(seed_record())
        assert record.context_sent is True
        assert mark_context_sent(record) is record

    def test_clear_conversation_id_keeps_timeline(self) -> None:
        record = mark_context_sent(apply_reply(seed_record(greeting_messages=("Hi",)), reply()))
        cleared = clear_conversation_id(record)
        assert cleared.conversation_id is None
        assert cleared.responses == record.responses
        assert cleared.context_sent is True

    def test_snapshot_is_responses(self) -> None:
        record = append_user_text(seed_record(), "hi")
        assert snapshot(record) is record.responses


class TestSelectChoice:
    """Tests for choice selection."""

    def test_stamps_offering_message_and_appends_turn(self) -> None:
        record = apply_reply(seed_record(), reply("conv-1", choice_message("m1", "a", "b")))
        selected = select_choice(record, "a")

        assert len(selected.responses) == 2
        message = selected.responses[0].payload.messages[0]  # type: ignore[union-attr]
        assert message.selected_choice_id == "a"
        turn = selected.responses[1]
        assert isinstance(turn, UserResponse)
        assert turn.payload.type == "choice"
        assert turn.payload.choice_id == "a"  # type: ignore[union-attr]

    def test_other_messages_untouched(self) -> None:
        record = apply_reply(
            seed_record(),
            reply("conv-1", choice_message("m1", "a"), choice_message("m2", "x")),
        )
        selected = select_choice(record, "a")
        m1, m2 = selected.responses[0].payload.messages  # type: ignore[union-attr]
        assert m1.selected_choice_id == "a"
        assert m2 == record.responses[0].payload.messages[1]  # type: ignore[union-attr]

    def test_stamps_every_message_offering_choice(self) -> None:
        record = apply_reply(seed_record(), reply("conv-1", choice_message("m1", "a")))
        record = apply_reply(record, reply("conv-1", choice_message("m2", "a", "b")))
        selected = select_choice(record, "a")
        stamped = [
            message.selected_choice_id
            for response in selected.responses
            if isinstance(response, BotResponse)
            for message in response.payload.messages
        ]
        assert stamped == ["a", "a"]

    def test_unknown_choice_keeps_previous_selection(self) -> None:
        record = apply_reply(seed_record(), reply("conv-1", choice_message("m1", "a", "b")))
        record = select_choice(record, "a")
        record = select_choice(record, "z")
        assert record.responses[0].payload.messages[0].selected_choice_id == "a"  # type: ignore[union-attr]
        assert len(record.responses) == 3

    def test_reselection_is_idempotent(self) -> None:
        record = apply_reply(seed_record(), reply("conv-1", choice_message("m1", "a", "b")))
        once = select_choice(record, "a")
        twice = select_choice(once, "a")
        assert twice.responses[0] == once.responses[0]
        assert len(twice.responses) == len(once.responses) + 1

    def test_previous_record_unchanged(self) -> None:
        record = apply_reply(seed_record(), reply("conv-1", choice_message("m1", "a")))
        select_choice(record, "a")
        assert record.responses[0].payload.messages[0].selected_choice_id is None  # type: ignore[union-attr]
