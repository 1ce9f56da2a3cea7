"""Category routes: list for any logged-in user, create/delete for admins."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from plantshop.api.routes.auth import authenticate, require_admin
from plantshop.core.database import get_db
from plantshop.schemas.auth import CurrentUser
from plantshop.schemas.catalog import CategoryCreate, CategoryRead
from plantshop.services import catalog

router = APIRouter()


@router.get("", response_model=list[CategoryRead])
def list_categories(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(authenticate)],
) -> list[CategoryRead]:
    return [CategoryRead.model_validate(c) for c in catalog.list_categories(db)]


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> CategoryRead:
    return CategoryRead.model_validate(catalog.create_category(db, body))


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    """Delete a category (admin only). Products keep their category id."""
    catalog.delete_category(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
