"""
HeroVault Backend - Image Gallery Schemas
==========================================

What:  Contracts for POST /upload and GET /get-image.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from herovault.schemas.attachment import to_data_uri
from herovault.schemas.common import CamelModel, NonEmptyStr, RecordResponse


class ImageCreate(CamelModel):
    name: NonEmptyStr = Field(description="Original filename of the upload")


class ImageResponse(RecordResponse):
    name: str
    image: Optional[str] = Field(default=None, description="Image as a base64 data URI")

    @classmethod
    def from_record(cls, record) -> "ImageResponse":
        return cls(
            id=str(record.id),
            name=record.name,
            image=to_data_uri(record.attachment),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class ImageUploadResponse(CamelModel):
    message: str = "Image uploaded successfully"
    image: ImageResponse


class GalleryResponse(BaseModel):
    status: str = "200 OK"
    data: List[ImageResponse]
