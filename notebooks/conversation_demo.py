# %% [markdown]
# # Parley Conversation Demo
#
# This notebook shows how to:
# 1. Open a conversation with a bot endpoint
# 2. Watch the timeline through a subscriber
# 3. Send text and pick a choice

# %% [markdown]
# ## Setup
#
# Point `BOT_URL` at a bot endpoint. An `https://` URL posts each request;
# a `wss://` URL keeps one websocket open for the whole conversation.

# %%
import asyncio
import os

from parley import ConversationConfig, ConversationManager, State
from parley.config import get_settings
from parley.observability import setup_logging

settings = get_settings()
setup_logging(
    level=settings.observability.logging.level,
    format=settings.observability.logging.format,
    redact_pii=settings.observability.logging.redact_pii,
)

BOT_URL = os.environ.get("BOT_URL", "https://bots.example.com/v1/chat")

config = ConversationConfig(
    bot_url=BOT_URL,
    user_id="demo-user",
    greeting_messages=["Hi! Ask me anything."],
    context={"source": "notebook"},
)

# %% [markdown]
# ## A subscriber that prints the latest entry

# %%
def show_latest(state: State) -> None:
    if not state:
        print("(empty conversation)")
        return
    entry = state[-1]
    if entry.type == "bot":
        for message in entry.payload.messages:
            choices = ", ".join(c.choice_text for c in message.choices)
            print(f"BOT: {message.text}" + (f"  [{choices}]" if choices else ""))
    else:
        print(f"YOU: {entry.payload.model_dump()}")

# %% [markdown]
# ## Talk to the bot

# %%
async def demo() -> ConversationManager:
    async with ConversationManager(config, transport_config=settings.transport) as conversation:
        conversation.subscribe(show_latest)
        await conversation.send_text("What can you do?")
        await conversation.wait_idle()

        # Pick the first offered choice, if any
        for entry in reversed(conversation.state):
            if entry.type == "bot" and entry.payload.messages[-1].choices:
                await conversation.send_choice(entry.payload.messages[-1].choices[0].choice_id)
                break
        await conversation.wait_idle()
    return conversation

conversation = asyncio.run(demo())
print(f"Conversation id: {conversation.current_conversation_id()}")
print(f"Timeline length: {len(conversation.state)}")
