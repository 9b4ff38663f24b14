"""Shared test fixtures for the parley test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from tests.factories import FakeTransport, StateRecorder


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache and loaded TOML before and after each test."""
    from parley.config import get_settings
    from parley.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Transport double with no scripted outcomes."""
    return FakeTransport()


@pytest.fixture
def recorder() -> StateRecorder:
    """Subscriber recording published snapshots."""
    return StateRecorder()


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Drop structlog configuration bound to a test's captured streams."""
    import structlog

    yield
    structlog.reset_defaults()
