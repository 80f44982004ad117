"""
Storefront Backend — Image Asset Route Handlers
=================================================

What:  POST /api/uploads-blog, POST /api/images, GET /api/images,
       DELETE /api/images/{id}.
Who:   Blog editor and admin UI image pickers.

Both upload endpoints take a single multipart field named `image`.
Uploaded files are served back by the static mount at /uploads/<filename>.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from storefront.models.image import Image
from storefront.repositories.base import RecordRepository
from storefront.routes.deps import get_image_repository
from storefront.schemas.common import ErrorResponse
from storefront.schemas.image import (
    BlogUploadResponse,
    ImageDeleteResponse,
    ImageResponse,
    ImageUploadResponse,
)
from storefront.services.asset_service import asset_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Images"])


@router.post(
    "/uploads-blog",
    response_model=BlogUploadResponse,
    responses={400: {"description": "No file uploaded or file too large", "model": ErrorResponse}},
    summary="Upload an image for the blog",
)
async def upload_blog_image(
    image: Optional[UploadFile] = File(default=None, description="JPEG or PNG image"),
) -> BlogUploadResponse:
    try:
        return await asset_service.upload_blog_image(image)
    finally:
        if image is not None:
            await image.close()


@router.post(
    "/images",
    response_model=ImageUploadResponse,
    responses={
        400: {"description": "No file uploaded, invalid file type, or file too large", "model": ErrorResponse},
    },
    summary="Upload a single image",
)
async def upload_image(
    image: Optional[UploadFile] = File(default=None, description="JPEG or PNG image"),
    repo: RecordRepository[Image] = Depends(get_image_repository),
) -> ImageUploadResponse:
    try:
        return await asset_service.upload_image(repo, image)
    finally:
        if image is not None:
            await image.close()


@router.get(
    "/images",
    response_model=List[ImageResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="Get all images",
)
async def list_images(
    repo: RecordRepository[Image] = Depends(get_image_repository),
) -> List[ImageResponse]:
    return await asset_service.list_images(repo)


@router.delete(
    "/images/{image_id}",
    response_model=ImageDeleteResponse,
    responses={
        404: {"description": "Image not found", "model": ErrorResponse},
        500: {"description": "Failed to delete file (record already removed)", "model": ErrorResponse},
    },
    summary="Delete an image by ID",
)
async def delete_image(
    image_id: str,
    repo: RecordRepository[Image] = Depends(get_image_repository),
) -> ImageDeleteResponse:
    return await asset_service.delete_image(repo, image_id)
