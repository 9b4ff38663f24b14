"""Configuration models."""

from parley.config.models.conversation import (
    DEFAULT_FAILURE_MESSAGES,
    ConversationConfig,
    ExperimentalConfig,
)
from parley.config.models.observability import LoggingConfig, ObservabilityConfig
from parley.config.models.transport import TransportConfig

__all__ = [
    "DEFAULT_FAILURE_MESSAGES",
    "ConversationConfig",
    "ExperimentalConfig",
    "LoggingConfig",
    "ObservabilityConfig",
    "TransportConfig",
]
