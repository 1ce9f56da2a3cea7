"""
Command-line client for the Plant Shop. Examples:

  plantshop signup you@example.com secret
  plantshop signin you@example.com secret
  plantshop products
  plantshop product 3
  plantshop admin-products add Fern 9.99 1 --image-url /img/fern.png
  plantshop admin-categories add Succulents succulents
  plantshop logout
"""

import argparse
import logging
import sys
from pathlib import Path

from plantshop.client.api import ApiError, PlantShopClient
from plantshop.client.session import ClientSettings, SessionContext
from plantshop.client.views import (
    LOGIN_FAILED_ALERT,
    render_category_list,
    render_error,
    render_menu,
    render_product_details,
    render_product_list,
)
from plantshop.core.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="plantshop", description="Plant Shop client.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("menu", help="Show navigation for the current session")

    for name in ("signup", "signin"):
        p = sub.add_parser(name)
        p.add_argument("email")
        p.add_argument("password")

    sub.add_parser("logout")
    sub.add_parser("products", help="List products")
    p = sub.add_parser("product", help="Show one product")
    p.add_argument("id", type=int)

    cats = sub.add_parser("admin-categories", help="Manage categories")
    cats_sub = cats.add_subparsers(dest="action", required=True)
    cats_sub.add_parser("list")
    p = cats_sub.add_parser("add")
    p.add_argument("name")
    p.add_argument("value")
    p = cats_sub.add_parser("delete")
    p.add_argument("id", type=int)

    prods = sub.add_parser("admin-products", help="Manage products")
    prods_sub = prods.add_subparsers(dest="action", required=True)
    prods_sub.add_parser("list")
    p = prods_sub.add_parser("add")
    p.add_argument("name")
    p.add_argument("price", type=float)
    p.add_argument("category_id", type=int)
    image = p.add_mutually_exclusive_group(required=True)
    image.add_argument("--image-url")
    image.add_argument("--image-file", type=Path)
    p = prods_sub.add_parser("update")
    p.add_argument("id", type=int)
    p.add_argument("name")
    p.add_argument("price", type=float)
    p.add_argument("category_id", type=int)
    p.add_argument("image_url")
    p = prods_sub.add_parser("delete")
    p.add_argument("id", type=int)
    return parser


def _admin_categories(client: PlantShopClient, args: argparse.Namespace) -> None:
    if args.action == "add":
        client.create_category(args.name, args.value)
    elif args.action == "delete":
        client.delete_category(args.id)
    print(render_category_list(client.list_categories()))


def _admin_products(client: PlantShopClient, args: argparse.Namespace) -> None:
    if args.action == "add":
        client.create_product(
            args.name,
            args.price,
            args.category_id,
            image_url=args.image_url,
            image_path=args.image_file,
        )
    elif args.action == "update":
        client.update_product(args.id, args.name, args.price, args.category_id, args.image_url)
    elif args.action == "delete":
        client.delete_product(args.id)
    print(render_product_list(client.list_products()))


def run(args: argparse.Namespace, client: PlantShopClient) -> int:
    """Dispatch one command against an open client. Returns the exit code."""
    session = client.session
    if args.command == "menu":
        print(render_menu(session))
    elif args.command == "signup":
        try:
            client.register(args.email, args.password)
        except ApiError as e:
            print(render_error(e.message), file=sys.stderr)
            return 1
        print("Account created. You can sign in now.")
    elif args.command == "signin":
        try:
            client.login(args.email, args.password)
        except ApiError as e:
            logger.debug("Login failed: %s", e.message)
            print(LOGIN_FAILED_ALERT, file=sys.stderr)
            return 1
        print(render_menu(session))
    elif args.command == "logout":
        client.logout()
        print(render_menu(session))
    elif args.command == "products":
        print(render_product_list(client.list_products()))
    elif args.command == "product":
        try:
            product = client.get_product(args.id)
        except ApiError as e:
            logger.debug("Product lookup failed: %s", e.message)
            product = None
        print(render_product_details(product))
    elif args.command in ("admin-categories", "admin-products"):
        if not session.is_admin:
            print(render_error("Admins only. Sign in with an admin account."), file=sys.stderr)
            return 1
        handler = _admin_categories if args.command == "admin-categories" else _admin_products
        try:
            handler(client, args)
        except (ApiError, ValueError, OSError) as e:
            print(render_error(getattr(e, "message", str(e))), file=sys.stderr)
            return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")
    settings = ClientSettings()
    session = SessionContext.load(settings.session_path)
    with PlantShopClient(settings.API_URL, session, timeout=settings.TIMEOUT) as client:
        try:
            return run(args, client)
        except ApiError as e:
            print(render_error(e.message), file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
