"""
Storefront Backend — Catalog Seed
===================================

What:  Inserts a fixed sample catalog on startup when `products` is empty.
When:  From the application lifespan, if settings.seed_on_startup is set.

    Idempotent by emptiness only: any existing product, sample or not,
    suppresses the seed. Image filenames are placeholders; the files are
    not expected to exist in the upload directory.
"""

import logging
from datetime import datetime, timedelta, timezone

from storefront.models.product import Product
from storefront.repositories.base import RecordRepository

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {
        "name": "Aviator Classic",
        "variant": "Gold / Green",
        "price": 1299000,
        "original_price": 1599000,
        "category": "sunglasses",
        "colors": ["#C9A14A", "#2F4F2F"],
        "rating": 4.8,
        "reviews": 124,
        "is_new": False,
        "badge": "Популярные",
        "images": ["aviator-classic-1.jpg", "aviator-classic-2.jpg"],
    },
    {
        "name": "Wayfarer Bold",
        "variant": "Black / Grey",
        "price": 999000,
        "original_price": None,
        "category": "sunglasses",
        "colors": ["#000000", "#555555"],
        "rating": 4.6,
        "reviews": 89,
        "is_new": True,
        "badge": "Новинка",
        "images": ["wayfarer-bold-1.jpg", "wayfarer-bold-2.jpg", "wayfarer-bold-3.jpg"],
    },
    {
        "name": "Round Vintage",
        "variant": "Tortoise / Brown",
        "price": 849000,
        "original_price": 1049000,
        "category": "sunglasses",
        "colors": ["#8B5A2B", "#5C4033"],
        "rating": 4.4,
        "reviews": 56,
        "is_new": False,
        "badge": None,
        "images": ["round-vintage-1.jpg", "round-vintage-2.jpg"],
    },
    {
        "name": "Cat Eye Luxe",
        "variant": "Pink / Rose",
        "price": 1149000,
        "original_price": None,
        "category": "sunglasses",
        "colors": ["#F4A7B9", "#B76E79"],
        "rating": 4.9,
        "reviews": 210,
        "is_new": True,
        "badge": "Новинка",
        "images": ["cat-eye-luxe-1.jpg", "cat-eye-luxe-2.jpg"],
    },
    {
        "name": "Clubmaster Office",
        "variant": "Black / Clear",
        "price": 759000,
        "original_price": 899000,
        "category": "optical",
        "colors": ["#000000", "#FFFFFF"],
        "rating": 4.3,
        "reviews": 41,
        "is_new": False,
        "badge": "Популярные",
        "images": ["clubmaster-office-1.jpg", "clubmaster-office-2.jpg"],
    },
    {
        "name": "Titanium Slim",
        "variant": "Silver / Clear",
        "price": 1399000,
        "original_price": None,
        "category": "optical",
        "colors": ["#C0C0C0"],
        "rating": 0,
        "reviews": 0,
        "is_new": True,
        "badge": None,
        "images": ["titanium-slim-1.jpg", "titanium-slim-2.jpg"],
    },
]


async def seed_catalog(repo: RecordRepository[Product]) -> int:
    """
    Insert SAMPLE_PRODUCTS if the catalog is empty.

    Returns:
        Number of products inserted (0 when the catalog already had rows).
    """
    existing = await repo.count()
    if existing:
        logger.info("Catalog already has %d products; skipping seed", existing)
        return 0

    # One millisecond apart so listings keep the order of SAMPLE_PRODUCTS
    start = datetime.now(timezone.utc)
    for offset, sample in enumerate(SAMPLE_PRODUCTS):
        created_at = start + timedelta(milliseconds=offset)
        await repo.put(Product(**sample, created_at=created_at))
    await repo.commit()

    logger.info("Seeded catalog with %d sample products", len(SAMPLE_PRODUCTS))
    return len(SAMPLE_PRODUCTS)
