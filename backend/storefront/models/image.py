"""
Storefront Backend — Image SQLAlchemy Model
=============================================

What:  ORM model for the `images` table: metadata of standalone uploads.
Why:   The asset store tracks uploaded files independently of products.

    path is the storage path as written by UploadService
    (e.g. uploads/1722500000000-aviator.png). Deleting a row does not
    guarantee the file is gone; see AssetService.delete_image.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.database import Base
from storefront.models.product import _new_id, _utcnow


class Image(Base):
    """An uploaded image file tracked by the asset store."""

    __tablename__ = "images"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    path: Mapped[str] = mapped_column(String(1024), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<Image(id={self.id}, filename='{self.filename}')>"
