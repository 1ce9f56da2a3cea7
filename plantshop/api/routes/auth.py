"""Register/login routes and the access-control dependencies (authenticate, require_admin)."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from plantshop.core.database import get_db
from plantshop.core.security import decode_access_token
from plantshop.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserRead,
)
from plantshop.services import auth as auth_service
from plantshop.services.auth import ConflictError, InvalidCredentialsError

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """Create an account with role 'user'."""
    try:
        user = auth_service.register_user(db, body.email, body.password)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return UserRead.model_validate(user)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a 24-hour token and the role.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        token, role = auth_service.login(db, body.email, body.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        ) from e
    return LoginResponse(token=token, role=role)


def authenticate(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return its claims. Raises 403 if
    the token is missing, malformed, badly signed or expired. No database lookup.
    """
    if credentials is None:
        raise _forbidden("Token missing")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _forbidden("Invalid token")
    sub = payload.get("sub")
    role = payload.get("role")
    if not sub or not isinstance(role, str):
        raise _forbidden("Invalid token payload")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise _forbidden("Invalid token payload")
    return CurrentUser(id=user_id, role=role)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(authenticate)],
) -> CurrentUser:
    """Dependency: require an authenticated user with role 'admin'. Raises 403 otherwise."""
    if not current_user.is_admin:
        raise _forbidden("Admins only")
    return current_user
