"""
HeroVault Backend - Character Schemas
======================================

What:  Request and response contracts for /api/ben.
How:   CharacterCreate/CharacterUpdate validate the form fields at the
       boundary; CharacterResponse renders a stored record, turning the
       inline image into a data URI.

Example response (GET /api/ben/{id}):
    {
        "id": "0b6f2c1e-...",
        "characterName": "Ben Tennyson",
        "characterDescription": "Hero",
        "imageUrl": "data:image/png;base64,iVBORw0KGgo...",
        "createdAt": "2024-01-15T12:00:00Z",
        "updatedAt": "2024-01-15T12:00:00Z"
    }
"""

from typing import List, Optional

from pydantic import Field

from herovault.schemas.attachment import to_data_uri
from herovault.schemas.common import CamelModel, NonEmptyStr, PatchStr, RecordResponse


class CharacterCreate(CamelModel):
    character_name: NonEmptyStr = Field(description="Display name of the character")
    character_description: NonEmptyStr = Field(description="Free-text description")


class CharacterUpdate(CamelModel):
    """Partial update: omitted fields keep their stored values."""

    character_name: PatchStr = None
    character_description: PatchStr = None


class CharacterResponse(RecordResponse):
    character_name: str
    character_description: str
    image_url: Optional[str] = Field(
        default=None,
        description="Image as data:<contentType>;base64,<payload> (null when absent)",
    )

    @classmethod
    def from_record(cls, record) -> "CharacterResponse":
        return cls(
            id=str(record.id),
            character_name=record.character_name,
            character_description=record.character_description,
            image_url=to_data_uri(record.attachment),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class CharacterEnvelope(CamelModel):
    """Body of create, update and delete responses."""

    message: str
    character: CharacterResponse


class CharacterListResponse(CamelModel):
    message: str = "Characters retrieved successfully"
    characters: List[CharacterResponse]
