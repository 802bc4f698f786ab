"""
HeroVault Backend - Superhero Route Handlers
=============================================

What:  CRUD endpoints for superhero entries under /api/superheroes.
How:   JSON bodies validated by SuperheroCreate / SuperheroUpdate. Schema
       failures surface as 400 through the RequestValidationError handler.
"""

from fastapi import APIRouter, Body, Depends, Request

from herovault.dependencies import get_superhero_service
from herovault.schemas.common import ErrorResponse
from herovault.schemas.superhero import (
    SuperheroCreate,
    SuperheroEnvelope,
    SuperheroListResponse,
    SuperheroResponse,
    SuperheroUpdate,
)
from herovault.services.superhero_service import SuperheroService

router = APIRouter(prefix="/api/superheroes", tags=["Superheroes"])

NOT_FOUND = {404: {"description": "Superhero not found", "model": ErrorResponse}}
SERVER_ERROR = {500: {"description": "Store error", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Missing or empty fields", "model": ErrorResponse}}


@router.get(
    "",
    response_model=SuperheroListResponse,
    responses=SERVER_ERROR,
    summary="List all superheroes",
)
async def list_superheroes(
    service: SuperheroService = Depends(get_superhero_service),
) -> SuperheroListResponse:
    return SuperheroListResponse(superheroes=await service.list_all())


@router.post(
    "",
    status_code=201,
    response_model=SuperheroEnvelope,
    responses={**BAD_REQUEST, **SERVER_ERROR},
    summary="Create a superhero",
)
async def create_superhero(
    request: Request,
    payload: SuperheroCreate = Body(...),
    service: SuperheroService = Depends(get_superhero_service),
) -> SuperheroEnvelope:
    superhero = await service.create(payload.model_dump(by_alias=True))
    request.state.record_id = superhero.id
    return SuperheroEnvelope(message="Superhero saved successfully", superhero=superhero)


@router.get(
    "/{superhero_id}",
    response_model=SuperheroResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Get a superhero by id",
)
async def get_superhero(
    superhero_id: str,
    service: SuperheroService = Depends(get_superhero_service),
) -> SuperheroResponse:
    return await service.get(superhero_id)


@router.put(
    "/{superhero_id}",
    response_model=SuperheroEnvelope,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
    summary="Update a superhero",
    description="Overwrites only the fields present in the body.",
)
async def update_superhero(
    superhero_id: str,
    payload: SuperheroUpdate = Body(...),
    service: SuperheroService = Depends(get_superhero_service),
) -> SuperheroEnvelope:
    superhero = await service.update(
        superhero_id,
        payload.model_dump(by_alias=True, exclude_unset=True),
    )
    return SuperheroEnvelope(message="Superhero updated successfully", superhero=superhero)


@router.delete(
    "/{superhero_id}",
    response_model=SuperheroEnvelope,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Delete a superhero",
)
async def delete_superhero(
    superhero_id: str,
    service: SuperheroService = Depends(get_superhero_service),
) -> SuperheroEnvelope:
    superhero = await service.delete(superhero_id)
    return SuperheroEnvelope(
        message=f"Superhero with id {superhero_id} deleted",
        superhero=superhero,
    )
