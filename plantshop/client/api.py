"""HTTP client for the Plant Shop API (httpx)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx

from plantshop.client.session import SessionContext


class ApiError(Exception):
    """Raised when the API answers with a non-2xx status or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        parts = []
        for err in detail:
            if isinstance(err, dict):
                loc = ".".join(str(x) for x in err.get("loc", []) if x != "body")
                parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        if parts:
            return "; ".join(parts)
    return f"HTTP {resp.status_code}"


class PlantShopClient:
    """One method per API operation; attaches the session's bearer token when present."""

    def __init__(
        self,
        base_url: str,
        session: SessionContext,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.session = session
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> PlantShopClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _headers(self) -> dict[str, str]:
        if self.session.token:
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = self._http.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            raise ApiError(f"API unreachable: {e!s}") from e
        if resp.status_code >= 400:
            raise ApiError(_error_message(resp), resp.status_code)
        return resp

    # Auth

    def register(self, email: str, password: str) -> dict[str, Any]:
        return self._request("POST", "/api/register", json={"email": email, "password": password}).json()

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Log in and store the token and role in the session."""
        data = self._request("POST", "/api/login", json={"email": email, "password": password}).json()
        self.session.start(token=data["token"], role=data["role"], email=email)
        return data

    def logout(self) -> None:
        self.session.clear()

    # Products

    def list_products(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/products").json()

    def get_product(self, product_id: int) -> dict[str, Any]:
        return self._request("GET", f"/api/products/{product_id}").json()

    def create_product(
        self,
        name: str,
        price: float,
        category_id: int,
        image_url: str | None = None,
        image_path: Path | None = None,
    ) -> dict[str, Any]:
        """Create a product from either an image URL or a local image file."""
        if (image_url is None) == (image_path is None):
            raise ValueError("Pass exactly one of image_url or image_path.")
        if image_url is not None:
            body = {"name": name, "price": price, "categoryId": category_id, "imageUrl": image_url}
            return self._request("POST", "/api/products", json=body).json()
        form = {"name": name, "price": str(price), "categoryId": str(category_id)}
        with open(image_path, "rb") as fh:
            files = {"image": (image_path.name, fh.read())}
        return self._request("POST", "/api/products", data=form, files=files).json()

    def update_product(
        self, product_id: int, name: str, price: float, category_id: int, image_url: str
    ) -> None:
        body = {"name": name, "price": price, "categoryId": category_id, "imageUrl": image_url}
        self._request("PUT", f"/api/products/{product_id}", json=body)

    def delete_product(self, product_id: int) -> None:
        self._request("DELETE", f"/api/products/{product_id}")

    # Categories

    def list_categories(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/categories").json()

    def create_category(self, name: str, value: str) -> dict[str, Any]:
        return self._request("POST", "/api/categories", json={"name": name, "value": value}).json()

    def delete_category(self, category_id: int) -> None:
        self._request("DELETE", f"/api/categories/{category_id}")
