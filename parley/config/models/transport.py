"""Transport configuration models."""

from pydantic import BaseModel, Field


class TransportConfig(BaseModel):
    """Timeouts shared by the unary and streaming transports."""

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for a single HTTP POST to the bot (seconds)",
    )
    connect_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for opening the streaming connection (seconds)",
    )
