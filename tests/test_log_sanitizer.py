"""Tests for the log sanitization filter."""

import logging

from training_journal.utils.log_sanitizer import (
    LogSanitizationFilter,
    install_log_sanitizer,
    sanitize_string,
)


class TestSanitizeString:
    """Tests for the redaction patterns."""

    def test_json_notes(self):
        text = 'payload {"notes": "argued with coach", "mood": 2}'
        assert sanitize_string(text) == 'payload {"notes": "[REDACTED_NOTES]", "mood": 2}'

    def test_quoted_notes(self):
        assert sanitize_string("saving notes='knee hurts'") == "saving notes='[REDACTED_NOTES]'"

    def test_bare_notes_stop_at_comma(self):
        assert sanitize_string("notes=legs heavy, mood=3") == "notes=[REDACTED_NOTES], mood=3"

    def test_email_and_token(self):
        text = "user ana@example.com sent Authorization: Bearer abc.def-123"
        sanitized = sanitize_string(text)
        assert "ana@example.com" not in sanitized
        assert "[REDACTED_EMAIL]" in sanitized
        assert "Bearer [REDACTED_TOKEN]" in sanitized

    def test_plain_text_untouched(self):
        text = "Risk for user 42 on 2024-03-01: overtrain=0.80"
        assert sanitize_string(text) == text


class TestLogSanitizationFilter:
    """Tests for the logging.Filter integration."""

    def make_record(self, msg, args=()):
        return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)

    def test_filter_redacts_args(self):
        record = self.make_record("login by %s", ("ana@example.com",))

        assert LogSanitizationFilter().filter(record) is True
        assert record.getMessage() == "login by [REDACTED_EMAIL]"

    def test_non_string_args_kept(self):
        record = self.make_record("mood %d", (4,))

        LogSanitizationFilter().filter(record)

        assert record.args == (4,)
        assert record.getMessage() == "mood 4"

    def test_install_on_named_logger(self):
        logger = logging.getLogger("training_journal.tests.sanitizer")
        install_log_sanitizer(logger.name)
        try:
            assert any(isinstance(f, LogSanitizationFilter) for f in logger.filters)
        finally:
            for f in list(logger.filters):
                logger.removeFilter(f)

    def test_install_is_idempotent(self):
        logger = logging.getLogger("training_journal.tests.sanitizer_twice")
        install_log_sanitizer(logger.name)
        install_log_sanitizer(logger.name)
        try:
            assert sum(isinstance(f, LogSanitizationFilter) for f in logger.filters) == 1
        finally:
            for f in list(logger.filters):
                logger.removeFilter(f)
