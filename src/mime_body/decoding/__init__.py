# Transfer, charset and header decoding

from .charset import decode_charset, lookup_codec, normalize_charset_name
from .headers import decode_header, unfold_header
from .transfer import decode_transfer, normalize_encoding_name

__all__ = [
    "decode_transfer",
    "normalize_encoding_name",
    "decode_charset",
    "normalize_charset_name",
    "lookup_codec",
    "decode_header",
    "unfold_header",
]
