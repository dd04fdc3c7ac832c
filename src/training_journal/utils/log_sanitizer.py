"""Log sanitization filter to keep journal contents out of logs.

Daily notes are personal free text, so the filter redacts:
- notes payloads written as ``notes=...`` or ``"notes": "..."``
- email addresses
- bearer tokens

Usage:
    from training_journal.utils.log_sanitizer import install_log_sanitizer

    # Apply to all loggers at application startup
    install_log_sanitizer()
"""

import logging
import re
from typing import Any


class LogSanitizationFilter(logging.Filter):
    """Logging filter that redacts notes and PII from log messages."""

    # Order matters - more specific patterns should come before general ones
    PATTERNS: list[tuple[re.Pattern, str]] = [
        # JSON-style notes field
        (re.compile(r'("notes"\s*:\s*")(?:[^"\\]|\\.)*(")', re.IGNORECASE), r'\1[REDACTED_NOTES]\2'),

        # Quoted notes=... (repr-style)
        (re.compile(r"(notes\s*=\s*)(['\"]).*?\2", re.IGNORECASE), r"\1'[REDACTED_NOTES]'"),

        # Bare notes=... up to the next comma or end of line
        (re.compile(r"(notes\s*=\s*)(?!['\"\[])[^,\n]+", re.IGNORECASE), r"\1[REDACTED_NOTES]"),

        # Bearer tokens in Authorization headers
        (re.compile(r'Bearer\s+[a-zA-Z0-9_\-\.]+', re.IGNORECASE), 'Bearer [REDACTED_TOKEN]'),

        # Email addresses
        (re.compile(r'\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b'), '[REDACTED_EMAIL]'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize the record in place and always let it through."""
        if record.msg:
            record.msg = self._sanitize(str(record.msg))

        if record.args:
            record.args = self._sanitize_args(record.args)

        return True

    def _sanitize(self, text: str) -> str:
        for pattern, replacement in self.PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def _sanitize_args(self, args: Any) -> Any:
        if isinstance(args, str):
            return self._sanitize(args)
        elif isinstance(args, tuple):
            return tuple(self._sanitize_args(arg) for arg in args)
        elif isinstance(args, list):
            return [self._sanitize_args(arg) for arg in args]
        elif isinstance(args, dict):
            return {k: self._sanitize_args(v) for k, v in args.items()}
        else:
            str_val = str(args)
            sanitized = self._sanitize(str_val)
            # Keep the original object unless something was redacted
            return sanitized if sanitized != str_val else args


def install_log_sanitizer(logger_name: str | None = None) -> None:
    """Install the sanitization filter.

    Args:
        logger_name: If provided, install only on the named logger.
                    If None, install on the root logger and its handlers.

    Safe to call repeatedly: targets that already carry the filter are skipped.
    """
    sanitizer = LogSanitizationFilter()

    if logger_name:
        targets = [logging.getLogger(logger_name)]
    else:
        root_logger = logging.getLogger()
        targets = [root_logger, *root_logger.handlers]

    for target in targets:
        if not any(isinstance(f, LogSanitizationFilter) for f in target.filters):
            target.addFilter(sanitizer)


def sanitize_string(text: str) -> str:
    """Sanitize a string without going through the logging system."""
    return LogSanitizationFilter()._sanitize(text)
