"""
HeroVault Backend - Character Service
======================================

What:  Record facade for image-bearing characters (/api/ben).
       Every character is created with an image; updates may replace it.
"""

from herovault.schemas.character import CharacterCreate, CharacterResponse, CharacterUpdate
from herovault.services.record_service import RecordService


class CharacterService(RecordService[CharacterResponse]):
    resource = "Character"
    create_schema = CharacterCreate
    update_schema = CharacterUpdate
    response_schema = CharacterResponse
    attachment_field = "image"
    attachment_required = True
