"""Conversation manager.

Owns one conversation: the record, the subscribers and the transport.
User actions update the timeline synchronously, then dispatch the request
as an independent asyncio task whose outcome (reply or failure) is
applied when it completes. Replies are applied in arrival order.

Usage:
    config = ConversationConfig(
        bot_url="https://bots.example.com/v1/chat",
        greeting_messages=["Hi! How can I help?"],
    )
    async with ConversationManager(config) as conversation:
        conversation.subscribe(render)
        await conversation.send_text("What are your opening hours?")
"""

import asyncio
import time
from collections.abc import Callable, Coroutine, Iterable, Mapping
from functools import partial
from typing import Any

from pydantic import ValidationError

from parley.config.models.conversation import WELCOME_INTENT_ID, ConversationConfig
from parley.config.models.transport import TransportConfig
from parley.conversation.codec import (
    build_body,
    parse_reply,
    structured_request,
    text_request,
)
from parley.conversation.models import BotRequest, Slot, State, StructuredRequest
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
from parley.conversation.subscribers import Subscriber, SubscriberRegistry
from parley.observability.logging import get_logger
from parley.observability.metrics import (
    DELIVERY_FAILURES,
    DISPATCH_LATENCY,
    REPLIES,
    REQUESTS,
)
from parley.transports import Transport, select_transport

logger = get_logger(__name__)


class ConversationManager:
    """Client-side state of one conversation with a bot.

    Send operations must be called from a running event loop and raise
    RuntimeError, before touching any state, when there is none. Otherwise
    they never raise: invalid input and delivery problems become a failure
    message on the timeline. Each returns the task delivering the request,
    which callers may await.
    """

    def __init__(
        self,
        config: ConversationConfig | Mapping[str, Any],
        *,
        transport: Transport | None = None,
        transport_config: TransportConfig | None = None,
    ) -> None:
        """Initialize the conversation.

        Args:
            config: Conversation options (model or widget-style mapping)
            transport: Transport to use instead of the one the URL selects
            transport_config: Timeouts for the selected transport

        Raises:
            pydantic.ValidationError: If the config is invalid
        """
        if not isinstance(config, ConversationConfig):
            config = ConversationConfig.model_validate(config)
        self._config = config
        self._record = seed_record(config.user_id, config.greeting_messages)
        self._subscribers = SubscriberRegistry()
        self._transport = transport or select_transport(config, transport_config)
        self._in_flight: set[asyncio.Task[None]] = set()
        self._started = False
        self._logger = logger.bind(
            user_id=config.user_id,
            transport=str(self._transport.kind),
        )

    async def __aenter__(self) -> "ConversationManager":
        return await self.start()

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    @property
    def config(self) -> ConversationConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def state(self) -> State:
        """Current timeline snapshot."""
        return snapshot(self._record)

    @property
    def context_sent(self) -> bool:
        return self._record.context_sent

    async def start(self) -> "ConversationManager":
        """Open the transport and fire the welcome intent if configured.

        Raises:
            TransportError: If the streaming connection can not be opened
        """
        if self._started:
            return self
        await self._transport.start(self._handle_reply)
        self._started = True
        self._logger.info("conversation_started", greetings=len(self._record.responses))
        if self._config.trigger_welcome_intent:
            self.send_intent(WELCOME_INTENT_ID)
        return self

    async def wait_idle(self) -> None:
        """Wait until every in-flight request has been applied."""
        while self._in_flight:
            await asyncio.gather(*self._in_flight)

    async def close(self) -> None:
        """Let in-flight requests finish, then close the transport."""
        await self.wait_idle()
        await self._transport.close()
        self._logger.info("conversation_closed", responses=len(self._record.responses))

    # State transitions

    def _set_record(self, record: ConversationRecord) -> None:
        self._record = record
        self._subscribers.notify(snapshot(record))

    def _handle_reply(self, raw: Any) -> None:
        """Apply one raw reply from either transport.

        Raises:
            MalformedReplyError: If the reply is not a valid bot response
        """
        payload = parse_reply(raw)
        if payload is None:
            return
        REPLIES.labels(transport=self._transport.kind).inc()
        self._logger.debug(
            "reply_applied",
            conversation_id=payload.conversation_id,
            message_count=len(payload.messages),
        )
        self._set_record(apply_reply(self._record, payload))

    def _handle_failure(self, error: Exception) -> None:
        DELIVERY_FAILURES.labels(
            transport=self._transport.kind,
            error_type=type(error).__name__,
        ).inc()
        self._logger.warning(
            "conversation_dispatch_failed",
            conversation_id=self._record.conversation_id,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._set_record(append_failure(self._record, self._config.failure_messages))

    def _dispatch(self, request: BotRequest) -> asyncio.Task[None]:
        body, with_context = build_body(self._record, self._config, request)
        # context_sent is not part of the published State
        self._record = mark_context_sent(self._record)
        REQUESTS.labels(transport=self._transport.kind, request_type=request.kind).inc()
        self._logger.debug(
            "conversation_dispatch",
            request_type=request.kind,
            conversation_id=body.get("conversationId"),
            with_context=with_context,
        )
        return self._track(self._deliver(body))

    def _reject(self, error: ValidationError) -> asyncio.Task[None]:
        """Report invalid caller input as a failure, like a failed delivery."""
        return self._track(self._fail(error))

    def _track(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.create_task(coro)
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def _fail(self, error: Exception) -> None:
        self._handle_failure(error)

    async def _deliver(self, body: dict[str, Any]) -> None:
        started = time.perf_counter()
        try:
            raw = await self._transport.dispatch(body)
            self._handle_reply(raw)
        except Exception as e:
            self._handle_failure(e)
        finally:
            DISPATCH_LATENCY.labels(transport=self._transport.kind).observe(
                time.perf_counter() - started
            )

    def _send_structured(self, build: Callable[[], BotRequest]) -> asyncio.Task[None]:
        asyncio.get_running_loop()
        try:
            request = build()
        except ValidationError as e:
            return self._reject(e)
        return self._dispatch(request)

    # Public operations

    def send_text(self, text: str) -> asyncio.Task[None]:
        """Show the user's text on the timeline and send it."""
        asyncio.get_running_loop()
        try:
            request = text_request(text)
            record = append_user_text(self._record, text)
        except ValidationError as e:
            return self._reject(e)
        self._set_record(record)
        return self._dispatch(request)

    def send_choice(self, choice_id: str) -> asyncio.Task[None]:
        """Mark the choice as selected, show it on the timeline and send it."""
        asyncio.get_running_loop()
        try:
            request = structured_request(choice_id=choice_id)
            record = select_choice(self._record, choice_id)
        except ValidationError as e:
            return self._reject(e)
        self._set_record(record)
        return self._dispatch(request)

    def send_slots(
        self, slots: Iterable[Slot | Mapping[str, Any]]
    ) -> asyncio.Task[None]:
        """Send slot values. Adds nothing to the timeline."""
        return self._send_structured(partial(structured_request, slots=slots))

    def send_intent(self, intent_id: str) -> asyncio.Task[None]:
        """Trigger an intent. Adds nothing to the timeline."""
        return self._send_structured(partial(structured_request, intent_id=intent_id))

    def send_structured(
        self, request: StructuredRequest | Mapping[str, Any]
    ) -> asyncio.Task[None]:
        """Send a structured request as given. Adds nothing to the timeline."""
        return self._send_structured(partial(structured_request, request))

    def subscribe(self, subscriber: Subscriber) -> None:
        """Register a subscriber and immediately send it the current State."""
        self._subscribers.add(subscriber)
        self._subscribers.deliver(subscriber, self.state)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        """Remove the first registration of this subscriber."""
        self._subscribers.remove(subscriber)

    def unsubscribe_all(self) -> None:
        self._subscribers.clear()

    def current_conversation_id(self) -> str | None:
        return self._record.conversation_id

    def reset(self) -> None:
        """Start a new server-side conversation on the next send.

        The timeline and the one-shot context flag are kept.
        """
        self._set_record(clear_conversation_id(self._record))


async def create_conversation(
    config: ConversationConfig | Mapping[str, Any],
    **kwargs: Any,
) -> ConversationManager:
    """Create a conversation and open its transport.

    Keyword arguments are passed to ConversationManager.
    """
    return await ConversationManager(config, **kwargs).start()
