"""Registration and login against the credential store."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from plantshop.core.security import (
    ROLE_USER,
    create_access_token,
    hash_password,
    verify_password,
)
from plantshop.models import User

logger = logging.getLogger(__name__)


class ConflictError(Exception):
    """Raised when registering an email that already has an account."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidCredentialsError(Exception):
    """Raised when login fails (unknown email or wrong password)."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        self.message = message
        super().__init__(message)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def register_user(db: Session, email: str, password: str, role: str = ROLE_USER) -> User:
    """
    Create an account with a bcrypt hash of the password.

    Raises ConflictError if the email exists, whether caught by the lookup or by
    the unique index when two registrations race.
    """
    if get_user_by_email(db, email) is not None:
        raise ConflictError(f"Email '{email}' is already registered.")
    user = User(email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"Email '{email}' is already registered.") from e
    db.refresh(user)
    logger.info("Registered user id=%s role=%s", user.id, user.role)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Return the user whose password matches; raise InvalidCredentialsError otherwise."""
    user = get_user_by_email(db, email)
    if user is None:
        logger.warning("Login failed: unknown email")
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.warning("Login failed: wrong password for user id=%s", user.id)
        raise InvalidCredentialsError()
    return user


def login(db: Session, email: str, password: str) -> tuple[str, str]:
    """Authenticate and mint a session token. Returns (token, role)."""
    user = authenticate_user(db, email, password)
    token = create_access_token(sub=user.id, role=user.role)
    logger.info("Issued token for user id=%s", user.id)
    return token, user.role
