"""
Storefront Backend — Product Route Handlers
=============================================

What:  /api/products list, create, fetch, update, delete.
How:   Extracts form fields / JSON bodies / path ids, delegates to
       CatalogService, returns JSON. Errors are raised as application
       exceptions and formatted by the global handlers in main.py.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile

from storefront.models.product import Product
from storefront.repositories.base import RecordRepository
from storefront.routes.deps import get_product_repository
from storefront.schemas.common import ErrorResponse
from storefront.schemas.product import ProductResponse, ProductUpdate
from storefront.services.catalog_service import catalog_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])


@router.get(
    "/products",
    response_model=List[ProductResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="Retrieve all products",
)
async def list_products(
    repo: RecordRepository[Product] = Depends(get_product_repository),
) -> List[ProductResponse]:
    return await catalog_service.list_products(repo)


@router.post(
    "/products",
    status_code=201,
    response_model=ProductResponse,
    responses={
        201: {"description": "Product created successfully", "model": ProductResponse},
        400: {"description": "Invalid input, image count, or file too large", "model": ErrorResponse},
    },
    summary="Create a new product with images",
    description=(
        "Multipart form with product fields and 2 to 10 JPEG/PNG files in the "
        "`images` field. `colors` is a JSON-encoded array of strings."
    ),
)
async def create_product(
    name: Optional[str] = Form(default=None),
    variant: Optional[str] = Form(default=None),
    price: Optional[str] = Form(default=None),
    original_price: Optional[str] = Form(default=None, alias="originalPrice"),
    category: Optional[str] = Form(default=None),
    colors: Optional[str] = Form(default=None, description="JSON array, e.g. [\"#000000\"]"),
    rating: Optional[str] = Form(default=None),
    reviews: Optional[str] = Form(default=None),
    is_new: Optional[str] = Form(default=None, alias="isNew"),
    badge: Optional[str] = Form(default=None),
    images: Optional[List[UploadFile]] = File(default=None, description="2 to 10 image files"),
    repo: RecordRepository[Product] = Depends(get_product_repository),
) -> ProductResponse:
    # Form fields arrive as raw text; CatalogService owns the coercion rules
    form = {
        "name": name,
        "variant": variant,
        "price": price,
        "original_price": original_price,
        "category": category,
        "colors": colors,
        "rating": rating,
        "reviews": reviews,
        "is_new": is_new,
        "badge": badge,
    }
    files = images or []
    logger.info("Received product create: name=%s, %d files", name, len(files))
    try:
        return await catalog_service.create_product(repo, form, files)
    finally:
        for upload in files:
            await upload.close()


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Retrieve a product by ID",
)
async def get_product(
    product_id: str,
    repo: RecordRepository[Product] = Depends(get_product_repository),
) -> ProductResponse:
    return await catalog_service.get_product(repo, product_id)


@router.put(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"description": "Invalid field types", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
    },
    summary="Update a product by ID",
    description="Replaces only the fields present in the body. Image count is not re-checked.",
)
async def update_product(
    product_id: str,
    update: ProductUpdate,
    repo: RecordRepository[Product] = Depends(get_product_repository),
) -> ProductResponse:
    return await catalog_service.update_product(repo, product_id, update)


@router.delete(
    "/products/{product_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Delete a product by ID",
)
async def delete_product(
    product_id: str,
    repo: RecordRepository[Product] = Depends(get_product_repository),
) -> Response:
    await catalog_service.delete_product(repo, product_id)
    return Response(status_code=204)
