"""ORM model for product categories."""

from sqlalchemy import Column, Integer, String

from plantshop.models.base import Base


class Category(Base):
    """Catalog category; `value` is the short key shown in selects (e.g. 'succulents')."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    value = Column(String(255), nullable=False)
