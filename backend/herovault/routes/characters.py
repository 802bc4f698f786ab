"""
HeroVault Backend - Character Route Handlers
=============================================

What:  CRUD endpoints for image-bearing characters under /api/ben.
How:   Multipart form bodies. Text fields arrive as form values; the image
       arrives in the `image` file field (`imageUrl` is accepted too).
       Handlers collect what was sent and delegate to CharacterService.

Route Inventory:
    POST   /api/ben             → 201 {message, character}
    GET    /api/ben             → 200 {message, characters}
    GET    /api/ben/{id}        → 200 character (imageUrl as data URI)
    GET    /api/ben/{id}/image  → 200 raw image bytes
    PUT    /api/ben/{id}        → 200 {message, character}
    DELETE /api/ben/{id}        → 200 {message, character}
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, File, Form, Request, Response
from starlette.datastructures import FormData

from herovault.dependencies import get_character_service, get_upload_service
from herovault.schemas.character import (
    CharacterEnvelope,
    CharacterListResponse,
    CharacterResponse,
)
from herovault.schemas.common import ErrorResponse
from herovault.services.character_service import CharacterService
from herovault.services.upload_service import FileField, UploadService

router = APIRouter(prefix="/api/ben", tags=["Characters"])

NOT_FOUND = {404: {"description": "Character not found", "model": ErrorResponse}}
SERVER_ERROR = {500: {"description": "Store error", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Missing or empty fields", "model": ErrorResponse}}


def _form_data(form: FormData, **values: Optional[str]) -> Dict[str, Any]:
    """
    Only the fields the client actually sent.

    FastAPI hands an empty form value to the handler as the `None`
    default, so a sent-but-empty field is recovered from the raw form and
    passed on as "" for the schema to reject.
    """
    data: Dict[str, Any] = {}
    for key, value in values.items():
        if value is not None:
            data[key] = value
        elif isinstance(form.get(key), str):
            data[key] = form[key]
    return data


@router.post(
    "",
    status_code=201,
    response_model=CharacterEnvelope,
    responses={**BAD_REQUEST, **SERVER_ERROR},
    summary="Create a character with an image",
)
async def create_character(
    request: Request,
    character_name: Optional[str] = Form(None, alias="characterName"),
    character_description: Optional[str] = Form(None, alias="characterDescription"),
    image: FileField = File(None, description="Character image"),
    image_url: FileField = File(None, alias="imageUrl", description="Alias of `image`"),
    service: CharacterService = Depends(get_character_service),
    uploads: UploadService = Depends(get_upload_service),
) -> CharacterEnvelope:
    attachment = await uploads.read_attachment(image, image_url)
    character = await service.create(
        _form_data(
            await request.form(),
            characterName=character_name,
            characterDescription=character_description,
        ),
        attachment,
    )
    request.state.record_id = character.id
    return CharacterEnvelope(message="Character uploaded successfully", character=character)


@router.get(
    "",
    response_model=CharacterListResponse,
    responses=SERVER_ERROR,
    summary="List all characters",
    description="Every character in insertion order. An empty store returns an empty list.",
)
async def list_characters(
    service: CharacterService = Depends(get_character_service),
) -> CharacterListResponse:
    characters = await service.list_all()
    return CharacterListResponse(characters=characters)


@router.get(
    "/{character_id}",
    response_model=CharacterResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Get a character by id",
)
async def get_character(
    character_id: str,
    service: CharacterService = Depends(get_character_service),
) -> CharacterResponse:
    return await service.get(character_id)


@router.get(
    "/{character_id}/image",
    response_class=Response,
    responses={
        200: {"description": "Raw image bytes", "content": {"image/*": {}}},
        **NOT_FOUND,
        **SERVER_ERROR,
    },
    summary="Download a character's image",
)
async def get_character_image(
    character_id: str,
    service: CharacterService = Depends(get_character_service),
) -> Response:
    attachment = await service.get_attachment(character_id)
    return Response(content=attachment.data, media_type=attachment.content_type)


@router.put(
    "/{character_id}",
    response_model=CharacterEnvelope,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
    summary="Update a character",
    description=(
        "Overwrites only the fields that are sent. Sending an image replaces "
        "the stored one; omitting it keeps the current image."
    ),
)
async def update_character(
    character_id: str,
    request: Request,
    character_name: Optional[str] = Form(None, alias="characterName"),
    character_description: Optional[str] = Form(None, alias="characterDescription"),
    image: FileField = File(None, description="Replacement image"),
    image_url: FileField = File(None, alias="imageUrl", description="Alias of `image`"),
    service: CharacterService = Depends(get_character_service),
    uploads: UploadService = Depends(get_upload_service),
) -> CharacterEnvelope:
    attachment = await uploads.read_attachment(image, image_url)
    character = await service.update(
        character_id,
        _form_data(
            await request.form(),
            characterName=character_name,
            characterDescription=character_description,
        ),
        attachment,
    )
    return CharacterEnvelope(message="Character updated successfully", character=character)


@router.delete(
    "/{character_id}",
    response_model=CharacterEnvelope,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Delete a character",
)
async def delete_character(
    character_id: str,
    service: CharacterService = Depends(get_character_service),
) -> CharacterEnvelope:
    character = await service.delete(character_id)
    return CharacterEnvelope(
        message=f"Character with id {character_id} deleted",
        character=character,
    )
