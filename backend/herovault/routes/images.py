"""
HeroVault Backend - Image Gallery Route Handlers
=================================================

What:  The upload gallery: store an image under its filename, list them.

Route Inventory:
    POST /upload     → 201 {message, image}
    GET  /get-image  → 200 {status: "200 OK", data: [...]}
"""

from fastapi import APIRouter, Depends, File, Request

from herovault.dependencies import get_image_service, get_upload_service
from herovault.schemas.common import ErrorResponse
from herovault.schemas.image import GalleryResponse, ImageUploadResponse
from herovault.services.image_service import ImageService
from herovault.services.upload_service import FileField, UploadService

router = APIRouter(tags=["Images"])


@router.post(
    "/upload",
    status_code=201,
    response_model=ImageUploadResponse,
    responses={
        400: {"description": "No image uploaded", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Upload an image to the gallery",
)
async def upload_image(
    request: Request,
    image: FileField = File(None, description="Image file"),
    service: ImageService = Depends(get_image_service),
    uploads: UploadService = Depends(get_upload_service),
) -> ImageUploadResponse:
    filename = getattr(image, "filename", None)
    attachment = await uploads.read_attachment(image)
    stored = await service.upload(filename, attachment)
    request.state.record_id = stored.id
    return ImageUploadResponse(image=stored)


@router.get(
    "/get-image",
    response_model=GalleryResponse,
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List every uploaded image",
)
async def list_images(
    service: ImageService = Depends(get_image_service),
) -> GalleryResponse:
    return GalleryResponse(data=await service.list_all())
