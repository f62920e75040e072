"""
RFC 2047 decoding of header values.

Encoded words are split out by email.header.decode_header(); their bytes go
through decode_charset() so unknown or wrong charsets degrade instead of
failing.
"""

import re
from email.errors import HeaderParseError
from email.header import decode_header as split_encoded_words
from typing import List, Optional

from ..logging_config import get_logger
from .charset import decode_charset

logger = get_logger(__name__)

_FOLD = re.compile(r"\r?\n[ \t]+")


def unfold_header(value: str) -> str:
    """Collapse folded header lines (line break plus indentation) into a single space."""
    return _FOLD.sub(" ", value).rstrip("\r\n")


def decode_header(raw_value: Optional[str]) -> str:
    """
    Decode RFC 2047 encoded words in a header value.

    Adjacent encoded words are concatenated without the whitespace separating
    them; whitespace between an encoded word and plain text is preserved.

    Args:
        raw_value: Header value as found in the message

    Returns:
        Decoded header value ("" for a missing header). A value whose encoded
        words cannot be decoded is returned unfolded but otherwise as is.
    """
    if not raw_value:
        return ""

    value = unfold_header(str(raw_value))
    try:
        words = split_encoded_words(value)
    except HeaderParseError as e:
        logger.warning("header_decode_fallback", reason=str(e), value=value)
        return value

    pieces: List[str] = []
    for word, charset in words:
        if isinstance(word, str):
            pieces.append(word)
        elif charset is None:
            # Plain text between encoded words, returned as raw-unicode-escape bytes
            pieces.append(word.decode("raw-unicode-escape"))
        else:
            pieces.append(decode_charset(charset, word))
    return "".join(pieces)
