"""Test factories for creating test data."""

from tests.factories.conversation import ConfigFactory, ReplyFactory, StateRecorder
from tests.factories.transports import FakeTransport

__all__ = [
    "ConfigFactory",
    "FakeTransport",
    "ReplyFactory",
    "StateRecorder",
]
