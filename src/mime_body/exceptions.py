"""
Exceptions raised by the MIME body parser.

Only structural problems at the top level of a message are raised to the
caller. Decoding problems inside parts are recovered where they occur.
"""

from typing import Any, Dict, Optional


class MimeBodyError(Exception):
    """Base exception for all mime_body errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class MIMEStructureError(MimeBodyError):
    """
    Raised when the message structure cannot be parsed.

    Covers an unparseable top-level Content-Type, a multipart message without
    a boundary parameter, and messages nested deeper (or with more parts)
    than the configured limits.
    """
