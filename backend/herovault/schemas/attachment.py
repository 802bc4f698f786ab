"""
HeroVault Backend - Attachment Value Type
==========================================

What:  The binary payload that may ride along with a record, plus the
       data URI codec used when a record is rendered as JSON.
Who:   Built by UploadService from an upload; read back from the ORM
       models; encoded by the response schemas.

Data URI format:
    data:<contentType>;base64,<payload>
    e.g. data:image/png;base64,iVBORw0KGgo...
"""

import base64
import binascii
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class Attachment(BaseModel):
    """Raw bytes and their MIME type. Always carried together."""

    data: bytes = Field(description="Raw attachment bytes")
    content_type: str = Field(
        min_length=1,
        description="Declared MIME type of the attachment (e.g. image/png)",
    )

    model_config = {"frozen": True}

    @property
    def size(self) -> int:
        return len(self.data)

    def to_data_uri(self) -> str:
        """Encode as `data:<contentType>;base64,<payload>`."""
        payload = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type};base64,{payload}"

    @classmethod
    def from_data_uri(cls, uri: str) -> "Attachment":
        """
        Decode a base64 data URI back into an Attachment.

        Raises:
            ValueError: The string is not a base64 data URI.
        """
        if not uri.startswith("data:"):
            raise ValueError("Not a data URI")
        header, sep, payload = uri[len("data:"):].partition(",")
        if not sep or not header.endswith(";base64"):
            raise ValueError("Only base64 data URIs are supported")
        content_type = header[: -len(";base64")] or DEFAULT_CONTENT_TYPE
        try:
            data = base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 payload: {e}") from e
        return cls(data=data, content_type=content_type)


def to_data_uri(attachment: Optional[Attachment]) -> Optional[str]:
    """Data URI for an optional attachment; None stays None."""
    if attachment is None:
        return None
    return attachment.to_data_uri()
