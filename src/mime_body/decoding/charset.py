"""
Charset normalization of decoded text parts to Unicode.

Charset declarations in mail are frequently wrong or malformed, so this never
raises: unknown labels get a byte-preserving Latin-1 decode, and bytes that do
not fit a known label are handed to charset-normalizer for detection.
"""

from typing import Dict, Optional

import charset_normalizer

from ..config import settings
from ..logging_config import get_logger

logger = get_logger(__name__)

FALLBACK_CODEC = "latin-1"

# Charset label (as normalized by normalize_charset_name) -> Python codec
CHARSET_CODECS: Dict[str, str] = {
    "us-ascii": "ascii",
    "ascii": "ascii",
    "ansi-x3.4-1968": "ascii",
    "utf-8": "utf-8",
    "utf8": "utf-8",
    "utf-16": "utf-16",
    "utf-16le": "utf-16-le",
    "utf-16be": "utf-16-be",
    "utf-7": "utf-7",
    "iso-8859-1": "latin-1",
    "iso8859-1": "latin-1",
    "latin1": "latin-1",
    "latin-1": "latin-1",
    "l1": "latin-1",
    "iso-8859-2": "iso8859-2",
    "iso-8859-3": "iso8859-3",
    "iso-8859-4": "iso8859-4",
    "iso-8859-5": "iso8859-5",
    "iso-8859-6": "iso8859-6",
    "iso-8859-7": "iso8859-7",
    "iso-8859-8": "iso8859-8",
    "iso-8859-8-i": "iso8859-8",
    "iso-8859-9": "iso8859-9",
    "iso-8859-10": "iso8859-10",
    "iso-8859-13": "iso8859-13",
    "iso-8859-14": "iso8859-14",
    "iso-8859-15": "iso8859-15",
    "iso-8859-16": "iso8859-16",
    "windows-1250": "cp1250",
    "windows-1251": "cp1251",
    "windows-1252": "cp1252",
    "windows-1253": "cp1253",
    "windows-1254": "cp1254",
    "windows-1255": "cp1255",
    "windows-1256": "cp1256",
    "windows-1257": "cp1257",
    "windows-1258": "cp1258",
    "cp1250": "cp1250",
    "cp1251": "cp1251",
    "cp1252": "cp1252",
    "cp850": "cp850",
    "cp866": "cp866",
    "koi8-r": "koi8-r",
    "koi8-u": "koi8-u",
    "macintosh": "mac-roman",
    "mac": "mac-roman",
    "gb2312": "gb18030",
    "gbk": "gb18030",
    "gb18030": "gb18030",
    "big5": "big5",
    "big5-hkscs": "big5hkscs",
    "shift-jis": "shift_jis",
    "sjis": "shift_jis",
    "windows-31j": "cp932",
    "euc-jp": "euc_jp",
    "iso-2022-jp": "iso2022_jp",
    "euc-kr": "euc_kr",
    "ks-c-5601-1987": "euc_kr",
    "tis-620": "tis_620",
    "windows-874": "cp874",
}


def normalize_charset_name(charset: Optional[str]) -> str:
    """
    Normalize a charset label for table lookup.

    Lowercases, trims whitespace and quotes, drops an RFC 2231 language
    suffix ("utf-8*en") and treats underscores as dashes.

    Args:
        charset: Declared charset label (may be None)

    Returns:
        Normalized label, empty string when absent
    """
    if not charset:
        return ""
    label = str(charset).strip().strip("\"'").strip().lower()
    label = label.split("*", 1)[0]
    return label.replace("_", "-")


def lookup_codec(charset: Optional[str]) -> Optional[str]:
    """Return the Python codec for a charset label, or None if unknown."""
    return CHARSET_CODECS.get(normalize_charset_name(charset))


def _detect(raw: bytes) -> Optional[str]:
    match = charset_normalizer.from_bytes(raw).best()
    if match is None:
        return None
    logger.debug("charset_detected", encoding=match.encoding)
    return str(match)


def decode_charset(charset: Optional[str], raw: bytes) -> str:
    """
    Decode bytes in a declared charset into a Unicode string.

    Args:
        charset: Declared charset label; None/empty means UTF-8 (US-ASCII)
        raw: Bytes to decode

    Returns:
        Decoded text. Never raises.
    """
    label = normalize_charset_name(charset)

    if not label:
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return raw.decode(FALLBACK_CODEC)

    codec = CHARSET_CODECS.get(label)
    if codec is None:
        logger.warning("charset_fallback", charset=label, reason="unknown charset")
        return raw.decode(FALLBACK_CODEC)

    try:
        return raw.decode(codec)
    except UnicodeDecodeError as e:
        logger.warning(
            "charset_fallback",
            charset=label,
            reason=f"bytes do not match charset at offset {e.start}",
        )

    if settings.detect_charset:
        detected = _detect(raw)
        if detected is not None:
            return detected

    return raw.decode(codec, errors="replace")
