"""Tests for structured logging."""

import pytest
import structlog

from parley.observability.logging import PIIRedactor, get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    @pytest.mark.parametrize("format", ["json", "console"])
    def test_setup_formats(self, format: str) -> None:
        """Both renderers can be configured and used."""
        setup_logging(level="DEBUG", format=format, redact_pii=False)
        get_logger("test").debug("test_message", request_type="text")

    def test_json_output_is_redacted(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Sensitive keys never reach the rendered output."""
        structlog.reset_defaults()
        setup_logging(level="INFO", format="json", redact_pii=True)
        get_logger("test").info("conversation_dispatch", text="my secret question")

        output = capsys.readouterr().err
        assert "conversation_dispatch" in output
        assert "my secret question" not in output
        assert "[REDACTED]" in output

    def test_level_filters_lower_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        structlog.reset_defaults()
        setup_logging(level="WARNING", format="json", redact_pii=False)
        logger = get_logger("test")
        logger.info("quiet_event")
        logger.warning("loud_event")

        output = capsys.readouterr().err
        assert "quiet_event" not in output
        assert "loud_event" in output


class TestPIIRedactor:
    """Tests for PII redaction."""

    @pytest.fixture
    def redactor(self) -> PIIRedactor:
        return PIIRedactor()

    def test_redacts_sensitive_keys(self, redactor: PIIRedactor) -> None:
        event_dict = {"authorization": "Bearer abc", "context": {"plan": "gold"}, "ok": 1}
        result = redactor(None, None, event_dict)  # type: ignore[arg-type]
        assert result["authorization"] == "[REDACTED]"
        assert result["context"] == "[REDACTED]"
        assert result["ok"] == 1

    def test_key_match_is_case_insensitive(self, redactor: PIIRedactor) -> None:
        result = redactor(None, None, {"Authorization": "Bearer abc"})  # type: ignore[arg-type]
        assert result["Authorization"] == "[REDACTED]"

    def test_redacts_email_in_values(self, redactor: PIIRedactor) -> None:
        result = redactor(None, None, {"error": "bad user a.b@example.com"})  # type: ignore[arg-type]
        assert result["error"] == "bad user [EMAIL]"

    def test_redacts_phone_in_values(self, redactor: PIIRedactor) -> None:
        result = redactor(None, None, {"note": "call +1 555 123 4567"})  # type: ignore[arg-type]
        assert "[PHONE]" in result["note"]

    def test_redacts_nested_structures(self, redactor: PIIRedactor) -> None:
        event_dict = {
            "details": {"password": "hunter2", "items": ["x@example.com", {"token": "t"}]},
            "ids": ("a@example.com",),
        }
        result = redactor(None, None, event_dict)  # type: ignore[arg-type]
        assert result["details"]["password"] == "[REDACTED]"
        assert result["details"]["items"][0] == "[EMAIL]"
        assert result["details"]["items"][1]["token"] == "[REDACTED]"
        assert result["ids"] == ["[EMAIL]"]
