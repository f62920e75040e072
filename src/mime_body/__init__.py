"""
mime_body - parse email message bodies into a MIME part tree.

Produces the plain text body, HTML body, attachments and inline parts of a
message, tolerating the malformed MIME found in real-world mail.
"""

from .decoding import decode_charset, decode_header, decode_transfer
from .exceptions import MimeBodyError, MIMEStructureError
from .models import MIMEBody, MIMEPart
from .parsing import (
    breadth_match_all,
    breadth_match_first,
    depth_match_all,
    is_multipart,
    is_multipart_message,
    match_parts,
    parse_eml_bytes,
    parse_eml_file,
    parse_mime_body,
    read_message,
)
from .version import __version__

__all__ = [
    "parse_mime_body",
    "parse_eml_bytes",
    "parse_eml_file",
    "read_message",
    "is_multipart",
    "is_multipart_message",
    "MIMEBody",
    "MIMEPart",
    "MimeBodyError",
    "MIMEStructureError",
    "decode_header",
    "decode_transfer",
    "decode_charset",
    "match_parts",
    "breadth_match_first",
    "breadth_match_all",
    "depth_match_all",
    "__version__",
]
