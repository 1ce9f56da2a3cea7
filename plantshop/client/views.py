"""Text renderings of the shop screens. Pure functions: data in, string out."""

from typing import Any

from plantshop.client.session import SessionContext

NOT_FOUND_VIEW = "Product not found."
LOGIN_FAILED_ALERT = "Login failed. Check your email and password."


def render_menu(session: SessionContext) -> str:
    """Navigation bar; entries depend on login state and role."""
    items: list[str] = []
    if session.is_authenticated:
        items.append("products")
        if session.is_admin:
            items.extend(["admin categories", "admin products"])
        items.append("logout")
        header = f"Plant Shop - signed in as {session.email or 'unknown'} ({session.role})"
    else:
        items.extend(["signin", "signup"])
        header = "Plant Shop"
    return header + "\n" + " | ".join(items)


def render_error(message: str) -> str:
    """Inline error banner for admin forms."""
    return f"Error: {message}"


def _price(value: Any) -> str:
    try:
        return f"€{float(value):.2f}"
    except (TypeError, ValueError):
        return f"€{value}"


def render_product_list(products: list[dict[str, Any]]) -> str:
    if not products:
        return "No products yet."
    lines = [
        f"#{p.get('id')}  {p.get('name')} - {_price(p.get('price'))}  (category {p.get('categoryId')})"
        for p in products
    ]
    return "\n".join(lines)


def render_product_details(product: dict[str, Any] | None) -> str:
    if product is None:
        return NOT_FOUND_VIEW
    return "\n".join(
        [
            str(product.get("name")),
            f"Price: {_price(product.get('price'))}",
            f"Category ID: {product.get('categoryId')}",
            f"Image: {product.get('imageUrl')}",
        ]
    )


def render_category_list(categories: list[dict[str, Any]]) -> str:
    if not categories:
        return "No categories yet."
    return "\n".join(f"#{c.get('id')}  {c.get('name')} ({c.get('value')})" for c in categories)
