# Data models for parsed message bodies

from .mime_part import (
    DISPOSITION_ATTACHMENT,
    DISPOSITION_INLINE,
    UNPARSEABLE_CONTENT_TYPE,
    MIMEPart,
)
from .mime_body import MIMEBody

__all__ = [
    "MIMEPart",
    "MIMEBody",
    "UNPARSEABLE_CONTENT_TYPE",
    "DISPOSITION_INLINE",
    "DISPOSITION_ATTACHMENT",
]
