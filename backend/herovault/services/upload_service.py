"""
HeroVault Backend - Upload Service
===================================

What:  Turns a multipart file field into an in-memory Attachment.
How:   Checks the reported size before reading, reads the whole file,
       checks the actual size, and pairs the bytes with the declared MIME
       type.
Who:   Called by route handlers before a create or update.
When:  Only when the request actually carries a file field.

Size Limit:
    MAX_UPLOAD_SIZE (default 5MB). Both checks raise UploadTooLargeError:
    - reported size: rejects before the body is read into memory
    - actual size: catches clients that send no or a wrong size

Content Type:
    The client-declared MIME type is stored as-is. A part without one is
    stored as application/octet-stream so the attachment always has both
    halves.
"""

import logging
from typing import Optional, Union

from fastapi import UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from herovault.exceptions import UploadTooLargeError
from herovault.schemas.attachment import DEFAULT_CONTENT_TYPE, Attachment

logger = logging.getLogger(__name__)

# A file input submitted without a filename reaches the handler as a plain
# text part; it is accepted here and treated as "no file sent".
FileField = Optional[Union[UploadFile, str]]


class UploadService:
    """Reads uploads into Attachments under a size cap."""

    def __init__(self, max_upload_size: int):
        self.max_upload_size = max_upload_size

    def validate_size(self, reported_size: Optional[int], actual_size: Optional[int] = None) -> None:
        """
        Raises:
            UploadTooLargeError: Either size is above the configured maximum.
        """
        if reported_size is not None and reported_size > self.max_upload_size:
            raise UploadTooLargeError(size=reported_size, limit=self.max_upload_size)
        if actual_size is not None and actual_size > self.max_upload_size:
            raise UploadTooLargeError(size=actual_size, limit=self.max_upload_size)

    @staticmethod
    def is_empty_field(upload: FileField) -> bool:
        # Browsers submit an unnamed, zero-length part for an untouched file input
        if not isinstance(upload, StarletteUploadFile):
            return True
        return not upload.filename and upload.size == 0

    async def read_attachment(self, *uploads: FileField) -> Optional[Attachment]:
        """
        Read the first non-empty uploaded file into an Attachment.

        Several candidates may be passed when a form accepts the file under
        more than one field name; the first one actually sent wins.

        Returns:
            The Attachment, or None when no file was sent (text parts
            in a file field count as not sent).

        Raises:
            UploadTooLargeError: The file exceeds MAX_UPLOAD_SIZE.
        """
        upload = next((u for u in uploads if not self.is_empty_field(u)), None)
        if upload is None:
            return None

        try:
            self.validate_size(upload.size)
            content = await upload.read()
            self.validate_size(None, len(content))
        finally:
            for candidate in uploads:
                if isinstance(candidate, StarletteUploadFile):
                    await candidate.close()

        content_type = upload.content_type or DEFAULT_CONTENT_TYPE
        logger.info(
            "Received upload: filename=%s, content_type=%s, size=%d bytes",
            upload.filename or "unknown",
            content_type,
            len(content),
        )
        return Attachment(data=content, content_type=content_type)
