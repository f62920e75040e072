# MIME body parsing module

from .body import MULTIPART_TYPES, is_multipart, is_multipart_message, parse_mime_body
from .eml_parser import RawMessage, parse_eml_bytes, parse_eml_file, read_message
from .matchers import (
    PartMatcher,
    TraversalOrder,
    breadth_match_all,
    breadth_match_first,
    depth_match_all,
    match_parts,
)
from .mime_utils import (
    decode_section,
    get_disposition,
    get_file_name,
    get_media_type,
    is_header_block,
    parse_header_block,
    parse_media_type,
    split_header_block,
)
from .multipart import MultipartSplitter, split_segments

__all__ = [
    "parse_mime_body",
    "is_multipart",
    "is_multipart_message",
    "MULTIPART_TYPES",
    "read_message",
    "parse_eml_bytes",
    "parse_eml_file",
    "RawMessage",
    "match_parts",
    "breadth_match_first",
    "breadth_match_all",
    "depth_match_all",
    "TraversalOrder",
    "PartMatcher",
    "MultipartSplitter",
    "split_segments",
    "split_header_block",
    "is_header_block",
    "parse_header_block",
    "parse_media_type",
    "get_media_type",
    "get_disposition",
    "get_file_name",
    "decode_section",
]
