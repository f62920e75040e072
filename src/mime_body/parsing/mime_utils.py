"""
MIME utility functions shared by the monopart and multipart paths.

This module provides helpers for header blocks, media types, dispositions and
section decoding.
"""

import re
from email.message import Message
from email.parser import HeaderParser
from typing import Optional, Tuple

from ..decoding.charset import decode_charset
from ..decoding.headers import decode_header, unfold_header
from ..decoding.transfer import decode_transfer
from ..exceptions import MIMEStructureError
from ..models.mime_part import DISPOSITION_ATTACHMENT, DISPOSITION_INLINE

DEFAULT_CONTENT_TYPE = "text/plain"

_TOKEN = r"[A-Za-z0-9!#$%&'*+.^_`|~-]+"
_MEDIA_TYPE = re.compile(rf"^\s*({_TOKEN})\s*/\s*({_TOKEN})\s*(?:;.*)?$", re.DOTALL)
_BLANK_LINE = re.compile(rb"\r?\n\r?\n")
_FIELD_LINE = re.compile(rb"[\x21-\x39\x3b-\x7e]+[ \t]*:")


def split_header_block(data: bytes) -> Tuple[bytes, bytes]:
    """
    Split raw bytes at the first blank line into header block and body.

    Args:
        data: Raw message or part bytes

    Returns:
        Tuple of (header_block, body). Data without a blank line is all header.
    """
    if data.startswith(b"\r\n"):
        return b"", data[2:]
    if data.startswith(b"\n"):
        return b"", data[1:]

    match = _BLANK_LINE.search(data)
    if match is None:
        return data, b""
    return data[:match.start()], data[match.end():]


def is_header_block(block: bytes) -> bool:
    """
    Check that every line of a block is a header field or its continuation.

    Args:
        block: Raw lines preceding the first blank line of a section

    Returns:
        False when a line is not "name: value" (or the block opens with a
        continuation line); True for an empty block
    """
    lines = block.splitlines()
    if lines and lines[0][:1] in (b" ", b"\t"):
        return False
    return all(_FIELD_LINE.match(line) or line[:1] in (b" ", b"\t") for line in lines)


def parse_header_block(block: bytes) -> Message:
    """
    Parse a header block into a Message holding only headers.

    Header bytes are read as UTF-8, falling back to Latin-1 for 8-bit data.

    Args:
        block: Raw header lines

    Returns:
        email.message.Message with case-insensitive header access
    """
    return HeaderParser().parsestr(decode_charset(None, block))


def parse_media_type(value: str) -> str:
    """
    Extract the media type from a Content-Type header value.

    Args:
        value: Raw Content-Type value, parameters allowed

    Returns:
        Lowercased "type/subtype"

    Raises:
        MIMEStructureError: If the value is not "type/subtype[;params]"
    """
    match = _MEDIA_TYPE.match(unfold_header(value))
    if match is None:
        raise MIMEStructureError(
            "Unable to parse media type", details={"content_type": value.strip()}
        )
    return f"{match.group(1)}/{match.group(2)}".lower()


def get_media_type(header: Message) -> str:
    """
    Get the media type declared by a header map.

    Args:
        header: Message or part headers

    Returns:
        Lowercased media type, "text/plain" when Content-Type is absent or blank

    Raises:
        MIMEStructureError: If Content-Type is present but unparseable
    """
    value = header.get("Content-Type")
    if value is None or not str(value).strip():
        return DEFAULT_CONTENT_TYPE
    return parse_media_type(str(value))


def get_disposition(header: Message) -> Optional[str]:
    """Return "inline", "attachment" or None."""
    disposition = header.get_content_disposition()
    if disposition in (DISPOSITION_INLINE, DISPOSITION_ATTACHMENT):
        return disposition
    return None


def get_file_name(header: Message) -> Optional[str]:
    """
    Get the file name of a part.

    Uses the Content-Disposition filename parameter, falling back to the
    Content-Type name parameter. RFC 2231 and RFC 2047 encodings are decoded.
    """
    file_name = header.get_filename()
    if file_name is None:
        return None
    return decode_header(file_name)


def is_textual(media_type: str) -> bool:
    return media_type.startswith("text/")


def decode_section(header: Message, media_type: str, raw: bytes) -> bytes:
    """
    Decode a leaf body: transfer decoding, then charset normalization for text.

    Args:
        header: Headers of the section (transfer encoding and charset)
        media_type: Media type of the section
        raw: Body bytes as found in the message

    Returns:
        Decoded bytes, UTF-8 encoded for text/* types
    """
    decoded = decode_transfer(header.get("Content-Transfer-Encoding"), raw)
    if not is_textual(media_type):
        return decoded
    return decode_charset(header.get_content_charset(), decoded).encode("utf-8")
