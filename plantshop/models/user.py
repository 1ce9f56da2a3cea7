"""ORM model for shop accounts (credentials and role)."""

from sqlalchemy import Column, Integer, String

from plantshop.models.base import Base


class User(Base):
    """
    Account used for login and role-based access control.

    role: 'admin' or 'user'
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user", server_default="user")
