"""Pydantic request/response schemas."""

from plantshop.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserRead,
)
from plantshop.schemas.catalog import (
    CategoryCreate,
    CategoryRead,
    ProductDraft,
    ProductFields,
    ProductRead,
    UploadedImage,
    UrlImage,
)
from plantshop.schemas.health import HealthResponse

__all__ = [
    "CategoryCreate",
    "CategoryRead",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "ProductDraft",
    "ProductFields",
    "ProductRead",
    "RegisterRequest",
    "UploadedImage",
    "UrlImage",
    "UserRead",
]
