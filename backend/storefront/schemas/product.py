"""
Storefront Backend — Product Request/Response Schemas
=======================================================

What:  Pydantic models defining the catalog API contract.
How:   ProductCreate is the typed result of parsing the multipart form;
       ProductUpdate is the typed PUT body; ProductResponse is what
       every catalog endpoint returns.

Design Decision:
    Schemas are separate from SQLAlchemy models so the wire format
    (camelCase, derived fields) can evolve independently of the table.
"""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import ConfigDict, Field, field_validator

from storefront.schemas.common import CamelModel

# price, original_price and reviews are 32-bit INTEGER columns
INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1
Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]

# inf / nan cannot be stored portably or rendered as JSON
Rating = Annotated[float, Field(allow_inf_nan=False)]


class ProductResponse(CamelModel):
    """Full representation of a catalog product."""
    id: str = Field(description="Server-assigned product identifier")
    name: str
    variant: str = Field(description="Variant label, e.g. a frame/lens color combination")
    price: int = Field(description="Current price in minor currency units")
    original_price: Optional[int] = Field(default=None, description="Pre-discount price")
    category: str = Field(description="Product category, e.g. sunglasses, optical")
    colors: List[str] = Field(description="Available color tokens (hex strings)")
    rating: float = 0.0
    reviews: int = 0
    is_new: bool = False
    badge: Optional[str] = None
    created_at: datetime
    images: List[str] = Field(description="Image filenames, served under /uploads")


class ProductCreate(CamelModel):
    """
    Validated product data for catalog-create.

    Built by CatalogService from raw form fields after numeric coercion and
    `colors` JSON decoding. `images` holds the generated filenames in upload
    order.
    """
    name: str = Field(min_length=1)
    variant: str = Field(min_length=1)
    price: Int32
    original_price: Optional[Int32] = None
    category: str = Field(min_length=1)
    colors: List[str] = Field(min_length=1)
    rating: Rating = 0.0
    reviews: Int32 = 0
    is_new: bool = False
    badge: Optional[str] = None
    images: List[str]


# Columns that cannot hold NULL; an explicit null in a PUT body is rejected
_REQUIRED_FIELDS = (
    "name", "variant", "price", "category", "colors",
    "rating", "reviews", "is_new", "images",
)


class ProductUpdate(CamelModel):
    """
    PUT body: any subset of product fields.

    Only fields present in the body are replaced. Types are checked here;
    catalog invariants (such as the image count) are deliberately not.
    Unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    variant: Optional[str] = None
    price: Optional[Int32] = None
    original_price: Optional[Int32] = None
    category: Optional[str] = None
    colors: Optional[List[str]] = None
    rating: Optional[Rating] = None
    reviews: Optional[Int32] = None
    is_new: Optional[bool] = None
    badge: Optional[str] = None
    images: Optional[List[str]] = None

    @field_validator(*_REQUIRED_FIELDS)
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v

    def changes(self) -> dict:
        """Fields explicitly sent by the client, keyed by model attribute name."""
        return self.model_dump(exclude_unset=True)
