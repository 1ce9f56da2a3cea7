"""API routes."""

from fastapi import APIRouter

from plantshop.api.routes import auth, categories, health, products

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(health.router, prefix="/health", tags=["health"])
