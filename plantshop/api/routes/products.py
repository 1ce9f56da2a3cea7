"""Product routes: public reads, admin-only writes (JSON or multipart image upload)."""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from plantshop.api.routes.auth import require_admin
from plantshop.core.config import get_settings
from plantshop.core.database import get_db
from plantshop.schemas.auth import CurrentUser
from plantshop.schemas.catalog import ProductDraft, ProductFields, ProductRead
from plantshop.services import catalog
from plantshop.services.catalog import ProductNotFoundError
from plantshop.services.images import InvalidImageError

router = APIRouter()

REQUIRED_PRODUCT_FIELDS = ("name", "price", "categoryId")


def _bad_request(detail: Any) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _is_present(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file part that actually carries a file."""
    return isinstance(obj, UploadFile) and bool(obj.filename)


def _require_fields(data: dict[str, Any], image_present: bool) -> None:
    missing = [f for f in REQUIRED_PRODUCT_FIELDS if not _is_present(data.get(f))]
    if not image_present:
        missing.append("image or imageUrl")
    if missing:
        raise _bad_request(f"Missing required fields: {', '.join(missing)}.")


def _build_draft(data: dict[str, Any], image: dict[str, Any]) -> ProductDraft:
    try:
        return ProductDraft.model_validate(
            {
                "name": data["name"],
                "price": data["price"],
                "category_id": data["categoryId"],
                "image": image,
            }
        )
    except ValidationError as e:
        raise _bad_request(
            [{"loc": err["loc"], "msg": err["msg"]} for err in e.errors()]
        ) from e


async def _draft_from_json(request: Request) -> ProductDraft:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise _bad_request(f"Invalid JSON: {e!s}") from e
    if not isinstance(body, dict):
        raise _bad_request("JSON body must be an object.")
    image_url = body.get("imageUrl")
    _require_fields(body, _is_present(image_url))
    return _build_draft(body, {"kind": "url", "url": image_url})


async def _draft_from_form(request: Request) -> ProductDraft:
    form = await request.form()
    data = {f: form.get(f) for f in REQUIRED_PRODUCT_FIELDS}
    for f in REQUIRED_PRODUCT_FIELDS:
        if isinstance(data[f], UploadFile):
            raise _bad_request(f"Field '{f}' must be a plain value, not a file.")
    image = form.get("image")
    image_url = form.get("imageUrl")
    has_file = _is_upload_file(image)
    has_url = isinstance(image_url, str) and _is_present(image_url)
    if has_file and has_url:
        raise _bad_request("Provide either an 'image' file or an 'imageUrl', not both.")
    _require_fields(data, has_file or has_url)
    if has_file:
        max_bytes = get_settings().MAX_IMAGE_BYTES
        if image.size is not None and image.size > max_bytes:
            raise _bad_request(f"Image size must not exceed {max_bytes} bytes.")
        content = await image.read(max_bytes + 1)
        return _build_draft(
            data,
            {
                "kind": "upload",
                "filename": image.filename,
                "content_type": image.content_type,
                "content": content,
            },
        )
    return _build_draft(data, {"kind": "url", "url": image_url})


async def _get_draft_from_request(request: Request) -> ProductDraft:
    """Read a JSON body or a multipart form into a validated ProductDraft."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json":
        return await _draft_from_json(request)
    if content_type in ("multipart/form-data", "application/x-www-form-urlencoded"):
        return await _draft_from_form(request)
    raise HTTPException(
        status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        detail="Content-Type must be application/json or multipart/form-data.",
    )


@router.get("", response_model=list[ProductRead])
def list_products(
    db: Annotated[Session, Depends(get_db)],
) -> list[ProductRead]:
    """Return every product (public)."""
    return [ProductRead.model_validate(p) for p in catalog.list_products(db)]


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> ProductRead:
    """Return one product (public); 404 if the id does not exist."""
    try:
        product = catalog.get_product(db, product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return ProductRead.model_validate(product)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> ProductRead:
    """
    Create a product (admin only).

    - **JSON body**: `{name, price, categoryId, imageUrl}`.
    - **Multipart form**: `name`, `price`, `categoryId` plus either an `image`
      file part (stored and served under the upload prefix) or an `imageUrl`
      field. Sending both is rejected.
    """
    draft = await _get_draft_from_request(request)
    try:
        product = catalog.create_product(db, draft, get_settings())
    except InvalidImageError as e:
        raise _bad_request(e.message) from e
    return ProductRead.model_validate(product)


@router.put("/{product_id}")
def update_product(
    product_id: int,
    body: ProductFields,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    """Overwrite all fields of a product (admin only). Unknown ids are not an error."""
    catalog.update_product(db, product_id, body)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    """Delete a product (admin only). Idempotent."""
    catalog.delete_product(db, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
