"""
Create a user (e.g. the first admin; registration only creates 'user' accounts).
Run from project root:
  python -m plantshop.scripts.create_user EMAIL PASSWORD [role]
Example:
  python -m plantshop.scripts.create_user admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from plantshop.core.database import SessionLocal
from plantshop.core.logging_setup import configure_logging
from plantshop.core.security import ROLES
from plantshop.services.auth import ConflictError, register_user

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Plant Shop user.")
    parser.add_argument("email", help="Email address (1-255 chars)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=list(ROLES))
    args = parser.parse_args(argv)
    configure_logging()

    email = args.email.strip()
    if not email or len(email) > 255:
        print("Invalid email length.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > 128:
        print("Password must be 1-128 characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = register_user(db, email, args.password, role=args.role)
    except ConflictError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
