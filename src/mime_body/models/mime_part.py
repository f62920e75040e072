"""
MIME part tree node.

A MIMEPart exclusively owns its children; the tree is built bottom-up by the
multipart splitter and is not modified afterwards.
"""

from email.message import Message
from typing import List, Optional

from pydantic import BaseModel, Field

# Content type reported for a nested part whose Content-Type header is unparseable
UNPARSEABLE_CONTENT_TYPE = "application/x-unparseable"

DISPOSITION_INLINE = "inline"
DISPOSITION_ATTACHMENT = "attachment"


class MIMEPart(BaseModel):
    """One node of a parsed MIME tree."""

    content_type: str = Field(description="Media type without parameters, e.g. 'text/plain'")
    disposition: Optional[str] = Field(
        None, description="'inline', 'attachment' or None when absent"
    )
    file_name: Optional[str] = Field(
        None, description="Content-Disposition filename, falling back to Content-Type name"
    )
    header: Message = Field(default_factory=Message, description="The part's own headers")
    content: bytes = Field(
        b"", description="Transfer-decoded body, UTF-8 for text/* parts, empty for containers"
    )
    children: List["MIMEPart"] = Field(
        default_factory=list, description="Child parts in stream order"
    )

    model_config = {
        "arbitrary_types_allowed": True,
        "frozen": True,
    }

    @property
    def is_container(self) -> bool:
        return bool(self.children) or (
            self.content_type.startswith("multipart/") and not self.content
        )

    @property
    def content_id(self) -> Optional[str]:
        return self.header.get("Content-Id")

    def text(self) -> str:
        """Content decoded as UTF-8 (replacement characters for binary data)."""
        return self.content.decode("utf-8", errors="replace")

    def walk(self):
        """Yield this part and all descendants in depth-first pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def __repr__(self) -> str:
        details = [self.content_type]
        if self.disposition:
            details.append(self.disposition)
        if self.file_name:
            details.append(repr(self.file_name))
        if self.children:
            details.append(f"children={len(self.children)}")
        else:
            details.append(f"size={len(self.content)}")
        return f"MIMEPart<{' '.join(details)}>"


MIMEPart.model_rebuild()
