"""Create a helpdesk user directly in the database.

Used to provision the first Administrator::

    helpdesk-create-user --name "Ada" --email ada@example.com --role Administrator
"""

from __future__ import annotations

import argparse
import getpass
import sys

from sqlmodel import Session

from helpdesk.core.errors import DuplicateEmailError
from helpdesk.db import engine, init_db
from helpdesk.models import UserRole
from helpdesk.services.users import create_user


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a helpdesk user.")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.OPERATOR.value,
    )
    parser.add_argument("--password", help="Prompted for when omitted.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Error: password is required", file=sys.stderr)
        return 1

    init_db()
    with Session(engine) as session:
        try:
            user = create_user(
                session,
                name=args.name,
                email=args.email,
                password=password,
                role=args.role,
            )
        except DuplicateEmailError:
            print(f"Error: a user with email {args.email} already exists", file=sys.stderr)
            return 1

    print(f"Created user {user.email} ({user.role}) with id {user.id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
