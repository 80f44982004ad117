"""
Storefront Backend — Product SQLAlchemy Model
===============================================

What:  ORM model representing the `products` table (the catalog).
Who:   Used through the repository layer by CatalogService and the seed task;
       read by Alembic for migrations.

Table Design:
    - id: UUID text, assigned on insert (portable across PostgreSQL and SQLite)
    - price / original_price: integers in minor currency units
    - colors / images: JSON arrays, order preserved as given
    - images holds bare filenames; nothing links them to `images` rows

    The 2..10 image-count rule is enforced by CatalogService at creation time
    only. Updates may leave `images` at any length.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """A sellable catalog item."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    variant: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    original_price: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)

    colors: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_new: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    badge: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index("idx_products_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', variant='{self.variant}')>"
