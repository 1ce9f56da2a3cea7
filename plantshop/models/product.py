"""ORM model for catalog products."""

from sqlalchemy import Column, Integer, Numeric, String

from plantshop.models.base import Base


class Product(Base):
    """
    A plant for sale.

    category_id is a plain integer, not a foreign key: products may point at a
    category that has since been deleted.
    """

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    category_id = Column(Integer, nullable=False, index=True)
    image_url = Column(String(2048), nullable=False, default="")
