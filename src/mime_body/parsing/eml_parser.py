"""
Reading of raw .eml messages (RFC 5322 framing).

Splits raw message bytes into a header map and a body stream, the input
expected by parse_mime_body(). Headers are parsed with the standard library
email parser; the body is left untouched.
"""

import io
from email.message import Message
from typing import BinaryIO, NamedTuple

from ..models.mime_body import MIMEBody
from .body import parse_mime_body
from .mime_utils import parse_header_block, split_header_block


class RawMessage(NamedTuple):
    """Message header map and a stream positioned at the start of the body."""

    header: Message
    body: BinaryIO


def read_message(eml_bytes: bytes) -> RawMessage:
    """
    Split .eml bytes into headers and body.

    Args:
        eml_bytes: Raw .eml file bytes

    Returns:
        RawMessage with parsed header map and body stream
    """
    header_block, body = split_header_block(eml_bytes)
    return RawMessage(header=parse_header_block(header_block), body=io.BytesIO(body))


def parse_eml_bytes(eml_bytes: bytes) -> MIMEBody:
    """
    Parse .eml bytes into a MIMEBody.

    Args:
        eml_bytes: Raw .eml file bytes

    Returns:
        Parsed MIMEBody

    Raises:
        MIMEStructureError: If the message structure is unparseable
    """
    message = read_message(eml_bytes)
    return parse_mime_body(message.header, message.body)


def parse_eml_file(eml_path: str) -> MIMEBody:
    """
    Parse .eml file into a MIMEBody.

    Args:
        eml_path: Path to .eml file

    Returns:
        Parsed MIMEBody

    Raises:
        FileNotFoundError: If file doesn't exist
        MIMEStructureError: If the message structure is unparseable
    """
    with open(eml_path, "rb") as f:
        eml_bytes = f.read()
    return parse_eml_bytes(eml_bytes)
