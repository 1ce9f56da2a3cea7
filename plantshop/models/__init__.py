"""SQLAlchemy ORM models."""

from plantshop.models.base import Base
from plantshop.models.category import Category
from plantshop.models.product import Product
from plantshop.models.user import User

__all__ = ["Base", "Category", "Product", "User"]
