"""
FastAPI dependencies wiring route handlers to the persistence port.

Each request gets repositories bound to its own database session, so all
writes of one request commit or roll back together (see get_db_session).
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.models.image import Image
from storefront.models.product import Product
from storefront.repositories.base import RecordRepository
from storefront.repositories.sql import SQLAlchemyRepository


async def get_product_repository(
    db: AsyncSession = Depends(get_db_session),
) -> RecordRepository[Product]:
    return SQLAlchemyRepository(db, Product)


async def get_image_repository(
    db: AsyncSession = Depends(get_db_session),
) -> RecordRepository[Image]:
    return SQLAlchemyRepository(db, Image)
