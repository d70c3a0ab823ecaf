"""Log sanitization filter to keep credentials and PII out of logs.

Redacts, before a record is emitted:
- JWT access tokens and Bearer authorization headers
- bcrypt password hashes
- password, secret and token fields in key=value or JSON form
- email addresses

Usage:
    from catalyst_journal.utils.log_sanitizer import install_log_sanitizer

    install_log_sanitizer()
"""

import logging
import re
from typing import Any


class LogSanitizationFilter(logging.Filter):
    """Logging filter that redacts sensitive information from log records."""

    # More specific patterns come first.
    PATTERNS: list[tuple[re.Pattern, str]] = [
        # JWT tokens (three base64url segments), before Bearer
        (re.compile(r'\beyJ[a-zA-Z0-9_-]+\.eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+'), '[REDACTED_JWT]'),

        # Bearer tokens in Authorization headers
        (re.compile(r'Bearer\s+[a-zA-Z0-9_\-\.]+', re.IGNORECASE), 'Bearer [REDACTED_TOKEN]'),

        # Authorization header values (generic)
        (re.compile(r'(Authorization["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),

        # bcrypt hashes ($2a$, $2b$, $2y$)
        (re.compile(r'\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}'), '[REDACTED_HASH]'),

        # Password, secret and token fields
        (re.compile(r'(password(?:_hash)?["\']?\s*[:=]\s*["\']?)[^"\'&\s,}]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(secret(?:_key)?["\']?\s*[:=]\s*["\']?)[^"\'&\s,}]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(token["\']?\s*[:=]\s*["\']?)[^"\'&\s,}]+', re.IGNORECASE), r'\1[REDACTED]'),

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
        """Recursively sanitize log arguments (tuple, list, dict or scalar)."""
        if isinstance(args, str):
            return self._sanitize(args)
        elif isinstance(args, tuple):
            return tuple(self._sanitize_args(arg) for arg in args)
        elif isinstance(args, list):
            return [self._sanitize_args(arg) for arg in args]
        elif isinstance(args, dict):
            return {k: self._sanitize_args(v) for k, v in args.items()}
        else:
            # Keep non-string values (e.g. ints for %d) unless redaction changed them
            str_val = str(args)
            sanitized = self._sanitize(str_val)
            return sanitized if sanitized != str_val else args


def install_log_sanitizer(logger_name: str | None = None) -> LogSanitizationFilter:
    """Install the sanitization filter.

    Args:
        logger_name: If provided, install only on the named logger.
                    If None, install on the root logger and its handlers.

    Returns:
        The installed filter, so callers can remove it again.
    """
    sanitizer = LogSanitizationFilter()

    if logger_name:
        logging.getLogger(logger_name).addFilter(sanitizer)
    else:
        root_logger = logging.getLogger()
        root_logger.addFilter(sanitizer)
        # Filters on a logger do not apply to records propagated from children
        for handler in root_logger.handlers:
            handler.addFilter(sanitizer)

    return sanitizer


def sanitize_string(text: str) -> str:
    """Sanitize a string outside the logging system."""
    return LogSanitizationFilter()._sanitize(text)
