"""
Storefront Backend — Catalog Service
======================================

What:  Business logic for Product records: list, fetch, create-with-images,
       update, delete.
Who:   Called by the /api/products route handlers.
How:   Stateless; each call receives the request's product repository.

Create Flow (POST /api/products):
    ┌──────────┐    ┌──────────────┐    ┌─────────────┐    ┌────────────┐
    │  Upload  │───▶│ Validate and │───▶│ Image count │───▶│ Parse form │──▶ put
    │  (Route) │    │ store files  │    │   2..10     │    │  fields    │
    └──────────┘    └──────────────┘    └─────────────┘    └────────────┘

    Files are on disk before the count and form checks run. A request that
    fails those checks gets a 400 and no product, and its files stay in the
    upload directory.
"""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import UploadFile
from pydantic import ValidationError as PydanticValidationError

from storefront.config import settings
from storefront.exceptions import NotFoundError, ValidationError
from storefront.models.product import Product
from storefront.repositories.base import RecordRepository
from storefront.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from storefront.services.upload_service import upload_service

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_TRUE_STRINGS = {"true", "1", "yes", "on"}


def parse_int(value: Optional[str]) -> Optional[int]:
    """Leading integer of a form value ("129.9" → 129), None if there is none."""
    if value is None:
        return None
    match = _INT_PREFIX.match(value)
    return int(match.group()) if match else None


def parse_float(value: Optional[str]) -> Optional[float]:
    """Leading decimal number of a form value, None if there is none."""
    if value is None:
        return None
    match = _FLOAT_PREFIX.match(value)
    return float(match.group()) if match else None


def parse_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUE_STRINGS


def parse_colors(value: Optional[str]) -> List[str]:
    """Decode the JSON-encoded `colors` form field into a list of strings."""
    if value is None or not value.strip():
        raise ValidationError(message="colors is required", field="colors")
    try:
        colors = json.loads(value)
    except json.JSONDecodeError as e:
        raise ValidationError(
            message="colors must be a JSON array of strings",
            field="colors",
            context={"error": str(e)},
        )
    if not isinstance(colors, list) or not all(isinstance(c, str) for c in colors):
        raise ValidationError(
            message="colors must be a JSON array of strings",
            field="colors",
        )
    return colors


def _first_error_message(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg')}" if location else error.get("msg", "Invalid input")


class CatalogService:
    """
    Responsibilities:
        - list_products():  full table read, no paging or filtering
        - get_product():    404 when the id is unknown
        - create_product(): upload validation, image count, form parsing
        - update_product(): field replacement without invariant checks
        - delete_product(): row removal only, image files untouched
    """

    def build_product_data(self, form: Dict[str, Optional[str]], images: List[str]) -> ProductCreate:
        """
        Turn raw multipart form values into a validated ProductCreate.

        Coercion rules:
            price / originalPrice: leading integer within the 32-bit
                column range; an unparseable value is a ValidationError
                (an empty originalPrice means "no original price")
            rating / reviews: fall back to 0 when unparseable
            isNew: true for "true", "1", "yes", "on"
            colors: JSON array of strings
        """
        original_price = None
        if form.get("original_price"):
            original_price = parse_int(form["original_price"])
            if original_price is None:
                raise ValidationError(
                    message="originalPrice must be a number",
                    field="originalPrice",
                    context={"received": form["original_price"]},
                )
        try:
            return ProductCreate(
                name=form.get("name"),
                variant=form.get("variant"),
                price=parse_int(form.get("price")),
                original_price=original_price,
                category=form.get("category"),
                colors=parse_colors(form.get("colors")),
                rating=parse_float(form.get("rating")) or 0.0,
                reviews=parse_int(form.get("reviews")) or 0,
                is_new=parse_bool(form.get("is_new")),
                badge=form.get("badge") or None,
                images=images,
            )
        except PydanticValidationError as e:
            raise ValidationError(
                message=_first_error_message(e),
                context={"errors": e.errors(include_url=False, include_context=False)},
            )

    async def list_products(self, repo: RecordRepository[Product]) -> List[ProductResponse]:
        products = await repo.scan()
        return [ProductResponse.model_validate(p) for p in products]

    async def get_product(self, repo: RecordRepository[Product], product_id: str) -> ProductResponse:
        product = await repo.get(product_id)
        if product is None:
            raise NotFoundError(resource="product", resource_id=product_id)
        return ProductResponse.model_validate(product)

    async def create_product(
        self,
        repo: RecordRepository[Product],
        form: Dict[str, Optional[str]],
        files: List[UploadFile],
    ) -> ProductResponse:
        """
        Create a product from form fields and 2..10 image files.

        Raises:
            ValidationError: bad file type, too many / too few images, bad fields
            FileTooLargeError: an image above the size limit
        """
        stored = await upload_service.store_files(
            files,
            field="images",
            max_count=settings.max_product_images,
        )
        images = [item.filename for item in stored]

        low, high = settings.min_product_images, settings.max_product_images
        if not low <= len(images) <= high:
            logger.warning(
                "Rejected product create with %d images; %d files left on disk",
                len(images),
                len(stored),
            )
            raise ValidationError(
                message=f"Number of images must be between {low} and {high}",
                field="images",
                context={"received": len(images)},
            )

        data = self.build_product_data(form, images)
        product = Product(**data.model_dump(), created_at=datetime.now(timezone.utc))
        await repo.put(product)

        logger.info("Product created: %s (%s, %d images)", product.id, product.name, len(images))
        return ProductResponse.model_validate(product)

    async def update_product(
        self,
        repo: RecordRepository[Product],
        product_id: str,
        update: ProductUpdate,
    ) -> ProductResponse:
        product = await repo.get(product_id)
        if product is None:
            raise NotFoundError(resource="product", resource_id=product_id)

        changes: Dict[str, Any] = update.changes()
        for field, value in changes.items():
            setattr(product, field, value)
        await repo.put(product)

        logger.info("Product %s updated: %s", product_id, sorted(changes))
        return ProductResponse.model_validate(product)

    async def delete_product(self, repo: RecordRepository[Product], product_id: str) -> None:
        product = await repo.delete(product_id)
        if product is None:
            raise NotFoundError(resource="product", resource_id=product_id)
        logger.info("Product deleted: %s", product_id)


catalog_service = CatalogService()
