"""
Message body assembly.

Decides between the monopart and multipart paths, builds the part tree for
multipart messages and selects the text body, HTML body, attachments and
inlines from it.
"""

from email.message import Message
from typing import BinaryIO, List, Optional, Union

from ..config import settings
from ..decoding.charset import decode_charset
from ..decoding.transfer import decode_transfer
from ..exceptions import MIMEStructureError
from ..logging_config import get_logger
from ..models.mime_body import MIMEBody
from ..models.mime_part import DISPOSITION_ATTACHMENT, DISPOSITION_INLINE, MIMEPart
from .matchers import PartMatcher, breadth_match_all, breadth_match_first, depth_match_all
from .mime_utils import get_disposition, get_file_name, get_media_type
from .multipart import MultipartSplitter

logger = get_logger(__name__)

MULTIPART_TYPES = frozenset(
    {
        "multipart/alternative",
        "multipart/mixed",
        "multipart/related",
        "multipart/signed",
    }
)

TEXT_SEPARATOR = "\n--\n"


def is_multipart(media_type: str) -> bool:
    """
    Check whether a media type is parsed as a multipart tree.

    Args:
        media_type: Lowercased "type/subtype"

    Returns:
        True for multipart/alternative, mixed, related and signed
    """
    return media_type in MULTIPART_TYPES


def is_multipart_message(header: Message) -> bool:
    """
    Check whether a message header declares a recognized multipart type.

    You don't need to check this before calling parse_mime_body(), which
    handles non-multipart messages as well.
    """
    try:
        return is_multipart(get_media_type(header))
    except MIMEStructureError:
        return False


def _is_body_part(media_type: str) -> PartMatcher:
    def matcher(part: MIMEPart) -> bool:
        return part.content_type == media_type and part.disposition != DISPOSITION_ATTACHMENT

    return matcher


def _select_text(root: MIMEPart) -> str:
    if root.content_type == "multipart/alternative":
        # Alternatives are renditions of the same content, keep the first
        match = breadth_match_first(root, _is_body_part("text/plain"))
        return match.text() if match is not None else ""

    matches = depth_match_all(root, _is_body_part("text/plain"))
    return TEXT_SEPARATOR.join(part.text() for part in matches)


def _select_html(root: MIMEPart) -> str:
    match = breadth_match_first(root, _is_body_part("text/html"))
    return match.text() if match is not None else ""


def _classify(root: MIMEPart, disposition: str, text: str, html: str) -> List[MIMEPart]:
    # Parts already surfaced as the text or HTML body are not listed again
    excluded = {text.encode("utf-8"), html.encode("utf-8")}
    return breadth_match_all(
        root,
        lambda part: part.disposition == disposition and part.content not in excluded,
    )


def _read_body(body: Union[bytes, BinaryIO, None]) -> bytes:
    if body is None:
        return b""
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    return body.read()


def parse_mime_body(
    header: Message,
    body: Union[bytes, BinaryIO, None],
    splitter: Optional[MultipartSplitter] = None,
) -> MIMEBody:
    """
    Parse a message body into a MIMEBody.

    Non-multipart messages are decoded directly into text (or html for
    text/html). Multipart messages are split into a tree of MIMEPart objects,
    each aware of its content type, filename and headers, with
    quoted-printable and base64 content decoded.

    Args:
        header: Message header map
        body: Body bytes or a binary stream positioned at the body
        splitter: Splitter to use (defaults to one built from settings)

    Returns:
        MIMEBody with text, html, root, attachments and inlines

    Raises:
        MIMEStructureError: If the top-level Content-Type is unparseable, a
            multipart message lacks its boundary, or structural limits are hit
    """
    raw = _read_body(body)
    media_type = get_media_type(header)

    if not is_multipart(media_type):
        decoded = decode_transfer(header.get("Content-Transfer-Encoding"), raw)
        content = decode_charset(header.get_content_charset(), decoded)
        logger.debug("mime_body_parsed", content_type=media_type, multipart=False)
        if media_type == "text/html":
            return MIMEBody(html=content, header=header)
        return MIMEBody(text=content, header=header)

    boundary = header.get_boundary()
    if not boundary:
        raise MIMEStructureError(
            "Unable to locate boundary param in Content-Type header",
            details={"content_type": media_type},
        )

    if splitter is None:
        splitter = MultipartSplitter(settings.max_nesting_depth, settings.max_parts)

    root = MIMEPart(
        content_type=media_type,
        disposition=get_disposition(header),
        file_name=get_file_name(header),
        header=header,
        children=splitter.split(raw, boundary),
    )

    text = _select_text(root)
    html = _select_html(root)
    attachments = _classify(root, DISPOSITION_ATTACHMENT, text, html)
    inlines = _classify(root, DISPOSITION_INLINE, text, html)

    logger.debug(
        "mime_body_parsed",
        content_type=media_type,
        multipart=True,
        parts=splitter.parts_seen,
        attachments_count=len(attachments),
        inlines_count=len(inlines),
    )

    return MIMEBody(
        text=text,
        html=html,
        root=root,
        attachments=attachments,
        inlines=inlines,
        header=header,
    )
