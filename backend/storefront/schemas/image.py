"""
Storefront Backend — Image Asset Schemas
==========================================

What:  Response models for the asset endpoints (/images, /uploads-blog).
Note:  `url` is derived from the filename on every response; it is never
       stored.
"""

from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from storefront.schemas.common import CamelModel

PUBLIC_UPLOAD_PREFIX = "/uploads"


def public_url(filename: str) -> str:
    return f"{PUBLIC_UPLOAD_PREFIX}/{filename}"


class ImageResponse(CamelModel):
    """An image record with its public URL."""
    id: str
    filename: str = Field(description="Generated filename on disk")
    path: str = Field(description="Server-side storage path")
    created_at: datetime

    @computed_field
    @property
    def url(self) -> str:
        return public_url(self.filename)


class ImageUploadResponse(BaseModel):
    """Returned by POST /api/images."""
    message: str = "Image uploaded"
    image: ImageResponse


class ImageDeleteResponse(BaseModel):
    """Returned by DELETE /api/images/{id}."""
    message: str = "Image deleted"
    image: ImageResponse


class BlogUploadResponse(BaseModel):
    """Returned by POST /api/uploads-blog (no metadata record is kept)."""
    message: str = "Image uploaded successfully"
    filename: str
    url: str
