"""
HeroVault Backend - FastAPI Dependencies
=========================================

What:  Hands route handlers the services built by create_app().
How:   The app factory stores each service on `app.state`; these functions
       read them back through `request.app`, so a test app built with a
       different engine gets its own services.

Example usage in a route:
    @router.get("/api/ben")
    async def list_characters(service: CharacterService = Depends(get_character_service)):
        return await service.list_all()
"""

from fastapi import Request

from herovault.services.character_service import CharacterService
from herovault.services.image_service import ImageService
from herovault.services.superhero_service import SuperheroService
from herovault.services.upload_service import UploadService


def get_character_service(request: Request) -> CharacterService:
    return request.app.state.character_service


def get_superhero_service(request: Request) -> SuperheroService:
    return request.app.state.superhero_service


def get_image_service(request: Request) -> ImageService:
    return request.app.state.image_service


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service
