"""
Storefront Backend — Asset Service
====================================

What:  Standalone image uploads tracked in the `images` table, plus the
       untracked blog upload.
Who:   Called by the /api/images and /api/uploads-blog route handlers.

Delete Semantics:
    1. Remove the metadata row and commit immediately
    2. Remove the file from the upload directory
    If step 2 fails the caller gets a 500 while the row stays deleted.
    Nothing is rolled back; "metadata gone, blob state unknown".
"""

import logging
from typing import List, Optional

from fastapi import UploadFile

from storefront.exceptions import NotFoundError
from storefront.models.image import Image
from storefront.repositories.base import RecordRepository
from storefront.schemas.image import (
    BlogUploadResponse,
    ImageDeleteResponse,
    ImageResponse,
    ImageUploadResponse,
    public_url,
)
from storefront.services.upload_service import upload_service

logger = logging.getLogger(__name__)


class AssetService:

    async def upload_blog_image(self, upload: Optional[UploadFile]) -> BlogUploadResponse:
        """Store a file without creating a metadata record."""
        stored = await upload_service.store_single(upload, field="image")
        return BlogUploadResponse(
            message="Image uploaded successfully",
            filename=stored.filename,
            url=public_url(stored.filename),
        )

    async def upload_image(
        self,
        repo: RecordRepository[Image],
        upload: Optional[UploadFile],
    ) -> ImageUploadResponse:
        """Store a file, then record its filename and path."""
        stored = await upload_service.store_single(upload, field="image")
        image = await repo.put(Image(filename=stored.filename, path=stored.path))
        logger.info("Image recorded: %s (%s)", image.id, image.filename)
        return ImageUploadResponse(message="Image uploaded", image=ImageResponse.model_validate(image))

    async def list_images(self, repo: RecordRepository[Image]) -> List[ImageResponse]:
        images = await repo.scan()
        return [ImageResponse.model_validate(image) for image in images]

    async def delete_image(self, repo: RecordRepository[Image], image_id: str) -> ImageDeleteResponse:
        """
        Raises:
            NotFoundError: no image with this id
            FileStorageError: row deleted but the file could not be removed
        """
        image = await repo.delete(image_id)
        if image is None:
            raise NotFoundError(resource="image", resource_id=image_id)

        # Must be durable before the disk step; a FileStorageError below
        # would otherwise roll the delete back with the request session.
        await repo.commit()
        deleted = ImageResponse.model_validate(image)
        logger.info("Image record deleted: %s", image_id)

        await upload_service.delete_file(image.path)
        return ImageDeleteResponse(message="Image deleted", image=deleted)


asset_service = AssetService()
