"""Utility script to create an account and print a bearer token for it."""

from __future__ import annotations

import argparse

from social_notifications.config import get_settings
from social_notifications.domain.entities import Account
from social_notifications.infrastructure.database import Store, StoreError
from social_notifications.infrastructure.repositories import AccountRepository
from social_notifications.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for account creation."""

    parser = argparse.ArgumentParser(
        description="Create an account for the social notification services.",
    )
    parser.add_argument("--email", required=True, help="Email of the new account")
    parser.add_argument("--first-name", default=None, help="First name (optional)")
    parser.add_argument("--last-name", default=None, help="Last name (optional)")
    return parser.parse_args()


def main() -> None:
    """Create an account using the provided command line arguments."""

    args = parse_args()
    settings = get_settings()
    store = Store(settings.database_url)
    store.initialize()
    try:
        with store.operation(settings.single_row_timeout_seconds) as session:
            account = AccountRepository(session).create(
                Account(
                    id=None,
                    email=args.email,
                    first_name=args.first_name,
                    last_name=args.last_name,
                )
            )
    except StoreError as exc:
        raise SystemExit(f"Could not store the account: {exc}") from exc
    finally:
        store.dispose()

    print(
        "Account created:\n"
        f"  ID: {account.id}\n"
        f"  Email: {account.email}\n"
        f"  Token: {create_access_token(account.id)}"
    )


if __name__ == "__main__":
    main()
