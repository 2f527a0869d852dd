# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Logging configuration with credential redaction.

Diagnostics go to stderr so that stdout carries nothing but the signed
URL, curl command or header dump.  Secret access keys and session tokens
are registered with ``SecretFilter`` as soon as they are resolved and
never appear in log output.

Usage:
    # In the entry point
    from aws4cli.logging import configure_logging
    configure_logging(verbosity=args.verbose)

    # In library modules
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Signing %s", url)
"""

import logging
import re
import sys
from typing import ClassVar, TextIO


_REDACTED = "[REDACTED]"


class SecretFilter(logging.Filter):
    """Logging filter that redacts registered secrets from log output.

    Secrets are registered at runtime with register_secret().  Any
    registered secret appearing in a message or its arguments is replaced
    with '[REDACTED]'.

    Example:
        SecretFilter.register_secret("wJalrXUtnFEMI/K7MDENG")
        logger.info("secret is %s", "wJalrXUtnFEMI/K7MDENG")
        # Output: "secret is [REDACTED]"
    """

    _secrets: ClassVar[set[str]] = set()
    _pattern: ClassVar[re.Pattern[str] | None] = None

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact registered secrets from the record in place.

        Args:
            record: The log record to filter.

        Returns:
            Always True (records are modified, never suppressed).
        """
        if self._pattern is not None:
            record.msg = self._pattern.sub(_REDACTED, str(record.msg))
            if record.args:
                record.args = tuple(
                    self._pattern.sub(_REDACTED, arg)
                    if isinstance(arg, str)
                    else arg
                    for arg in record.args
                )
        return True

    @classmethod
    def register_secret(cls, secret: str | None) -> None:
        """Register a secret to be redacted from all log output.

        Args:
            secret: The secret string.  Empty or None values are ignored.
        """
        if secret:
            cls._secrets.add(secret)
            cls._rebuild_pattern()

    @classmethod
    def clear_secrets(cls) -> None:
        """Forget all registered secrets. Primarily for testing."""
        cls._secrets.clear()
        cls._pattern = None

    @classmethod
    def _rebuild_pattern(cls) -> None:
        # Longest first so a secret containing another is fully replaced
        escaped = [
            re.escape(s) for s in sorted(cls._secrets, key=len, reverse=True)
        ]
        cls._pattern = re.compile("|".join(escaped)) if escaped else None


def verbosity_to_level(verbosity: int) -> int:
    """Map the number of ``-v`` flags to a logging level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(
    verbosity: int = 0,
    format_string: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure the root logger for the command-line tool.

    Args:
        verbosity: Number of ``-v`` flags given on the command line.
        format_string: Custom format string.  Defaults to a bare message,
            which reads naturally next to the tool's own output.
        stream: Destination stream.  Defaults to ``sys.stderr``.
    """
    if format_string is None:
        format_string = "%(message)s"

    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setFormatter(logging.Formatter(format_string))
    handler.addFilter(SecretFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(verbosity_to_level(verbosity))

    # Remove existing handlers to avoid duplicates
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    root_logger.addHandler(handler)
