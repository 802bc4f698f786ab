"""
HeroVault Backend - Image Gallery Service
==========================================

What:  Stores uploaded images under their original filename and lists
       them back (POST /upload, GET /get-image). Gallery entries are
       never edited; only create and list are exposed.
"""

from typing import Optional

from herovault.exceptions import ValidationError
from herovault.schemas.attachment import Attachment
from herovault.schemas.image import ImageCreate, ImageResponse
from herovault.services.record_service import RecordService

# Used when the multipart part carries no filename
DEFAULT_IMAGE_NAME = "upload"


class ImageService(RecordService[ImageResponse]):
    resource = "Image"
    create_schema = ImageCreate
    response_schema = ImageResponse
    attachment_field = "image"
    attachment_required = True

    async def upload(self, filename: Optional[str], attachment: Optional[Attachment]) -> ImageResponse:
        """
        Raises:
            ValidationError: No file was sent in the `image` field.
        """
        if attachment is None:
            raise ValidationError("No image uploaded", fields=[self.attachment_field])
        return await self.create({"name": filename or DEFAULT_IMAGE_NAME}, attachment)
