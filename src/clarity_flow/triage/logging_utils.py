"""Logging utilities with custom trace level and API key redaction."""

import logging
import re
from typing import Any

from .config import (
    GEMINI_KEY_LENGTH,
    GEMINI_KEY_PREFIX,
    OPENROUTER_KEY_MIN_LENGTH,
    OPENROUTER_KEY_PREFIX,
)

# Define custom TRACE level (lower than DEBUG)
TRACE_LEVEL = 5

# Key-shaped tokens for every known provider
_SECRET_PATTERN = re.compile(
    rf"{re.escape(GEMINI_KEY_PREFIX)}[\w-]{{{GEMINI_KEY_LENGTH - len(GEMINI_KEY_PREFIX)}}}"
    rf"|{re.escape(OPENROUTER_KEY_PREFIX)}[\w-]"
    rf"{{{OPENROUTER_KEY_MIN_LENGTH - len(OPENROUTER_KEY_PREFIX)},}}"
)


def mask_secret(value: str | None, visible: int = 6) -> str:
    """
    Mask a credential for log output.

    Args:
        value: Secret to mask
        visible: Number of leading characters to keep

    Returns:
        Masked representation that never exposes the full secret
    """
    if not value:
        return "<empty>"
    if len(value) <= visible:
        return "*" * len(value)
    return f"{value[:visible]}...({len(value)} chars)"


def redact_secrets(text: str) -> str:
    """Replace every provider key found in text with its masked form."""
    return _SECRET_PATTERN.sub(lambda match: mask_secret(match.group(0)), text)


class SecretRedactingFilter(logging.Filter):
    """Masks provider API keys in records before any handler sees them."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def add_trace_level() -> None:
    """Add a custom TRACE logging level."""
    # Add the trace level to the logging module
    logging.addLevelName(TRACE_LEVEL, "TRACE")

    # Add trace method to Logger class
    def trace(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a message with severity 'TRACE'."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, message, args, **kwargs)

    # Monkey patch the Logger class
    logging.Logger.trace = trace  # type: ignore[attr-defined]


def get_logger(name: str) -> logging.Logger:
    """Get a logger with trace support and API key redaction."""
    # Ensure trace level is added
    if not hasattr(logging.Logger, "trace"):
        add_trace_level()

    logger = logging.getLogger(name)
    if not any(isinstance(f, SecretRedactingFilter) for f in logger.filters):
        logger.addFilter(SecretRedactingFilter())
    return logger
