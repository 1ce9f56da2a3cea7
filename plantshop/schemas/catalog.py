"""Pydantic schemas for categories and products.

Wire field names follow the public API (``categoryId``, ``imageUrl``); Python
attributes stay snake_case and either name is accepted on input.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

# Numeric(10, 2) upper bound.
MAX_PRICE = 99_999_999.99

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
ImageRef = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=2048)]
Price = Annotated[
    float,
    Field(ge=0, le=MAX_PRICE, allow_inf_nan=False, description="Non-negative price, two decimals"),
]


class CategoryCreate(BaseModel):
    """Body for POST /categories."""

    name: Name
    value: Name


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    value: str


class ProductFields(BaseModel):
    """Full set of writable product fields (PUT replaces all of them)."""

    model_config = ConfigDict(populate_by_name=True)

    name: Name
    price: Price
    category_id: int = Field(..., alias="categoryId")
    image_url: ImageRef = Field(..., alias="imageUrl")


class ProductRead(ProductFields):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int


class UrlImage(BaseModel):
    """Image given as a path or URL (JSON body or `imageUrl` form field)."""

    kind: Literal["url"] = "url"
    url: ImageRef


class UploadedImage(BaseModel):
    """Image uploaded as a multipart `image` file part; stored server-side."""

    kind: Literal["upload"] = "upload"
    filename: str
    content_type: str | None = None
    content: bytes


class ProductDraft(BaseModel):
    """Validated input for product creation with either image source."""

    name: Name
    price: Price
    category_id: int
    image: UrlImage | UploadedImage = Field(..., discriminator="kind")
