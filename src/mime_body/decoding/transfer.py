"""
Content-Transfer-Encoding decoding.

Real-world mail often declares a transfer encoding that does not match its
bytes, so decoding is lenient: a part that cannot be fully decoded yields a
best-effort result (or its raw bytes) instead of failing the whole message.
"""

import base64
import binascii
import quopri
import re
from typing import Callable, Dict, Optional

from ..logging_config import get_logger

logger = get_logger(__name__)

_NON_BASE64 = re.compile(rb"[^A-Za-z0-9+/=]")
_PADDING = re.compile(rb"=+")


def _identity(raw: bytes) -> bytes:
    return raw


def _decode_base64_run(run: bytes) -> bytes:
    if len(run) % 4 == 1:
        logger.warning(
            "transfer_decode_fallback",
            encoding="base64",
            reason="truncated input",
            dropped_chars=1,
        )
        run = run[:-1]
    return base64.b64decode(run + b"=" * (-len(run) % 4))


def _decode_base64(raw: bytes) -> bytes:
    """
    Decode base64, ignoring line breaks and other stray bytes.

    Padding may appear inside the data (encoders that pad every line), so
    each run between padding is decoded on its own and the results joined.
    Missing padding is repaired; a dangling character at the end of a run is
    dropped.
    """
    data = _NON_BASE64.sub(b"", raw)
    return b"".join(_decode_base64_run(run) for run in _PADDING.split(data) if run)


def _decode_quoted_printable(raw: bytes) -> bytes:
    # Invalid escapes are kept verbatim by binascii
    return quopri.decodestring(raw)


TransferDecoder = Callable[[bytes], bytes]

TRANSFER_DECODERS: Dict[str, TransferDecoder] = {
    "base64": _decode_base64,
    "quoted-printable": _decode_quoted_printable,
    "7bit": _identity,
    "8bit": _identity,
    "binary": _identity,
}


def normalize_encoding_name(encoding: Optional[str]) -> str:
    """
    Normalize a Content-Transfer-Encoding header value.

    Args:
        encoding: Raw header value (may be None)

    Returns:
        Lowercased name without surrounding whitespace or quotes
    """
    if not encoding:
        return ""
    return str(encoding).strip().strip("\"'").strip().lower()


def decode_transfer(encoding: Optional[str], raw: bytes) -> bytes:
    """
    Undo a Content-Transfer-Encoding.

    Args:
        encoding: Declared transfer encoding (None/empty means identity)
        raw: Encoded bytes

    Returns:
        Decoded bytes; the raw bytes when nothing better can be obtained
    """
    name = normalize_encoding_name(encoding)
    decoder = TRANSFER_DECODERS.get(name)
    if decoder is None:
        if name:
            logger.debug("unknown_transfer_encoding", encoding=name)
        return raw

    try:
        return decoder(raw)
    except (binascii.Error, ValueError) as e:
        logger.warning(
            "transfer_decode_fallback",
            encoding=name,
            reason=str(e),
            size_bytes=len(raw),
        )
        return raw
