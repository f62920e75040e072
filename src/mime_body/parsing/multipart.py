"""
Multipart body splitting.

Splits a multipart body on its boundary delimiter lines and builds the part
tree, recursing into nested multiparts. Malformed nested parts degrade to
opaque leaves; only the configured structural limits abort the parse.
"""

from email.message import Message
from typing import List, Optional

from ..config import settings
from ..exceptions import MIMEStructureError
from ..logging_config import get_logger
from ..models.mime_part import UNPARSEABLE_CONTENT_TYPE, MIMEPart
from .mime_utils import (
    decode_section,
    get_disposition,
    get_file_name,
    get_media_type,
    is_header_block,
    parse_header_block,
    split_header_block,
)

logger = get_logger(__name__)


def _strip_line_ending(segment: bytes) -> bytes:
    # The line break before a delimiter belongs to the delimiter
    if segment.endswith(b"\r\n"):
        return segment[:-2]
    if segment.endswith(b"\n") or segment.endswith(b"\r"):
        return segment[:-1]
    return segment


def split_segments(body: bytes, boundary: str) -> List[bytes]:
    """
    Split a multipart body into raw part segments.

    Text before the first delimiter (preamble) and after the close delimiter
    (epilogue) is discarded. A body missing its close delimiter ends the last
    segment at end of input.

    Args:
        body: Raw multipart body
        boundary: Boundary parameter of the enclosing Content-Type

    Returns:
        Raw segments (headers and body of each part) in stream order
    """
    delimiter = b"--" + boundary.encode("utf-8")
    segments: List[bytes] = []
    current: Optional[List[bytes]] = None

    for line in body.splitlines(keepends=True):
        stripped = line.rstrip(b"\r\n")
        if stripped.startswith(delimiter):
            rest = stripped[len(delimiter):]
            if rest.startswith(b"--") and not rest[2:].strip():
                if current is not None:
                    segments.append(_strip_line_ending(b"".join(current)))
                return segments
            if not rest.strip():
                if current is not None:
                    segments.append(_strip_line_ending(b"".join(current)))
                current = []
                continue
        if current is not None:
            current.append(line)

    if current is not None:
        segments.append(b"".join(current))
    return segments


class MultipartSplitter:
    """
    Builds the part tree of a multipart body.

    One instance is used per parse call: it counts parts across the whole
    tree to enforce the max_parts limit.
    """

    def __init__(
        self,
        max_depth: Optional[int] = None,
        max_parts: Optional[int] = None,
    ):
        self.max_depth = settings.max_nesting_depth if max_depth is None else max_depth
        self.max_parts = settings.max_parts if max_parts is None else max_parts
        self.parts_seen = 0

    def split(self, body: bytes, boundary: str, depth: int = 1) -> List[MIMEPart]:
        """
        Split a multipart body into child parts, recursively.

        Args:
            body: Raw multipart body
            boundary: Boundary of the enclosing multipart
            depth: Nesting level of the enclosing multipart (root is 1)

        Returns:
            Child parts in stream order

        Raises:
            MIMEStructureError: If nesting or part count exceed the limits
        """
        if depth > self.max_depth:
            raise MIMEStructureError(
                "Multipart nesting too deep", details={"max_depth": self.max_depth}
            )

        segments = split_segments(body, boundary)
        if not segments:
            logger.warning(
                "multipart_without_delimiters",
                boundary=boundary,
                size_bytes=len(body),
            )

        return [self._build_part(segment, depth) for segment in segments]

    def _build_part(self, segment: bytes, depth: int) -> MIMEPart:
        self.parts_seen += 1
        if self.parts_seen > self.max_parts:
            raise MIMEStructureError(
                "Too many MIME parts", details={"max_parts": self.max_parts}
            )

        header_block, body = split_header_block(segment)
        if not is_header_block(header_block):
            logger.warning(
                "malformed_nested_part", reason="unparseable header block", depth=depth
            )
            return self._opaque_part(Message(), UNPARSEABLE_CONTENT_TYPE, segment)

        header = parse_header_block(header_block)

        try:
            media_type = get_media_type(header)
        except MIMEStructureError as e:
            logger.warning("malformed_nested_part", reason=str(e), depth=depth)
            return self._opaque_part(header, UNPARSEABLE_CONTENT_TYPE, body)

        if media_type.startswith("multipart/"):
            boundary = header.get_boundary()
            if not boundary:
                logger.warning(
                    "malformed_nested_part",
                    reason="multipart without boundary",
                    content_type=media_type,
                    depth=depth,
                )
                return self._opaque_part(header, media_type, body)

            return MIMEPart(
                content_type=media_type,
                disposition=get_disposition(header),
                file_name=get_file_name(header),
                header=header,
                children=self.split(body, boundary, depth + 1),
            )

        return MIMEPart(
            content_type=media_type,
            disposition=get_disposition(header),
            file_name=get_file_name(header),
            header=header,
            content=decode_section(header, media_type, body),
        )

    @staticmethod
    def _opaque_part(header: Message, content_type: str, raw: bytes) -> MIMEPart:
        return MIMEPart(
            content_type=content_type,
            disposition=get_disposition(header),
            file_name=get_file_name(header),
            header=header,
            content=raw,
        )
