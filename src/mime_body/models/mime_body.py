"""
Parse result for a message body.

This module defines MIMEBody, the aggregate returned by parse_mime_body():
selected text and HTML bodies, the part tree and the attachment/inline lists.
"""

import hashlib
from email.message import Message
from typing import List, Optional

from pydantic import BaseModel, Field

from ..config import settings
from ..decoding.headers import decode_header
from .mime_part import MIMEPart


class MIMEBody(BaseModel):
    """
    Structured representation of a parsed message body.

    Built once per parse call and immutable afterwards. Parts listed in
    attachments and inlines are the same objects found in the root tree.
    """

    text: str = Field("", description="Plain text body")
    html: str = Field("", description="HTML body")
    root: Optional[MIMEPart] = Field(
        None, description="Top-level part, only set for multipart messages"
    )
    attachments: List[MIMEPart] = Field(
        default_factory=list, description="Parts with Content-Disposition: attachment"
    )
    inlines: List[MIMEPart] = Field(
        default_factory=list, description="Parts with Content-Disposition: inline"
    )
    header: Message = Field(default_factory=Message, description="Original message header")

    model_config = {
        "arbitrary_types_allowed": True,
        "frozen": True,
    }

    def get_header(self, name: str) -> str:
        """
        Get a message header with RFC 2047 encoded words decoded.

        Args:
            name: Header field name (case-insensitive)

        Returns:
            Decoded value, empty string if the header is missing
        """
        return decode_header(self.header.get(name, ""))

    def message_id(self) -> str:
        """
        Get the Message-Id, synthesizing a deterministic one if missing.

        The synthetic id hashes the decoded From, To, Cc and Date headers
        (concatenated in that order) with SHA-256.

        Returns:
            Message-Id header value or "<sha256hex-auto-generated@domain>"
        """
        message_id = self.get_header("Message-Id")
        if message_id:
            return message_id
        return self._generate_message_id()

    def _generate_message_id(self) -> str:
        key = "".join(self.get_header(name) for name in ("From", "To", "Cc", "Date"))
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return f"<{digest}-auto-generated@{settings.message_id_domain}>"
