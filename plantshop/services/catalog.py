"""Catalog operations over products and categories."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from plantshop.models import Category, Product
from plantshop.schemas.catalog import (
    CategoryCreate,
    ProductDraft,
    ProductFields,
    UploadedImage,
)
from plantshop.services.images import delete_image, save_image

if TYPE_CHECKING:
    from plantshop.core.config import Settings

logger = logging.getLogger(__name__)


class ProductNotFoundError(Exception):
    """Raised when no product row matches the requested id."""

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        self.message = f"Product {product_id} not found."
        super().__init__(self.message)


def list_products(db: Session) -> list[Product]:
    return db.query(Product).order_by(Product.id).all()


def get_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


def create_product(db: Session, draft: ProductDraft, settings: Settings) -> Product:
    """
    Persist a new product. An uploaded image is stored first and the product
    keeps its public path; a URL image is stored as given.

    category_id is not checked against existing categories.
    """
    uploaded = isinstance(draft.image, UploadedImage)
    if uploaded:
        image_url = save_image(draft.image, settings)
    else:
        image_url = draft.image.url
    product = Product(
        name=draft.name,
        price=draft.price,
        category_id=draft.category_id,
        image_url=image_url,
    )
    db.add(product)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        if uploaded:
            delete_image(image_url, settings)
        raise
    db.refresh(product)
    logger.info("Created product id=%s name=%r", product.id, product.name)
    return product


def update_product(db: Session, product_id: int, fields: ProductFields) -> int:
    """
    Overwrite every field of a product. Returns the number of rows matched
    (0 when the id does not exist; callers treat that as success).
    """
    matched = (
        db.query(Product)
        .filter(Product.id == product_id)
        .update(
            {
                Product.name: fields.name,
                Product.price: fields.price,
                Product.category_id: fields.category_id,
                Product.image_url: fields.image_url,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    logger.info("Updated product id=%s (rows matched=%s)", product_id, matched)
    return matched


def delete_product(db: Session, product_id: int) -> int:
    """Delete a product by id. Idempotent: returns rows deleted (0 or 1)."""
    deleted = (
        db.query(Product)
        .filter(Product.id == product_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info("Deleted product id=%s (rows deleted=%s)", product_id, deleted)
    return deleted


def list_categories(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.id).all()


def create_category(db: Session, body: CategoryCreate) -> Category:
    category = Category(name=body.name, value=body.value)
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info("Created category id=%s value=%r", category.id, category.value)
    return category


def delete_category(db: Session, category_id: int) -> int:
    """
    Delete a category by id. Idempotent. Products referring to it are left
    untouched with a dangling category id.
    """
    deleted = (
        db.query(Category)
        .filter(Category.id == category_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info("Deleted category id=%s (rows deleted=%s)", category_id, deleted)
    return deleted
