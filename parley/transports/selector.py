"""Transport selection by bot URL scheme."""

from parley.config.models.conversation import ConversationConfig
from parley.config.models.transport import TransportConfig
from parley.transports.base import Transport
from parley.transports.streaming import StreamingTransport
from parley.transports.unary import UnaryTransport


def select_transport(
    config: ConversationConfig,
    transport_config: TransportConfig | None = None,
) -> Transport:
    """Build the transport for a conversation.

    A ``wss://`` bot URL selects the streaming transport; anything else
    is posted to over HTTP. The choice is made once per conversation.
    """
    transport_config = transport_config or TransportConfig()
    if config.uses_streaming:
        return StreamingTransport(
            config.bot_url,
            connect_timeout=transport_config.connect_timeout,
        )
    return UnaryTransport(
        config.bot_url,
        headers=config.headers,
        timeout=transport_config.request_timeout,
    )
