"""
Account provisioning script.

Creates a user that can then be issued bearer tokens by the identity
provider. The password is read interactively when not passed.

Dependencies: bossflow.application.services, bossflow.boundary.db
System role: Operator tooling for user accounts

Usage:
    python -m bossflow.scripts.create_user --username alice --email alice@example.com
"""

import argparse
import asyncio
import getpass
import logging
import sys

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bossflow.application.services.user_service import UserService
from bossflow.boundary.db.connection import get_async_engine, get_async_session_factory
from bossflow.core.exceptions import UserValidationError

logger = logging.getLogger(__name__)


async def create_user(
    username: str,
    email: str,
    password: str,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> dict:
    """
    Register one account in its own session.

    Raises:
        UserValidationError: Invalid input or already registered
    """
    factory = session_factory or get_async_session_factory()
    async with factory() as session:
        return await UserService(session).register_user(username, email, password)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Create a BossFlow user account")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="Prompted for when omitted")
    args = parser.parse_args(argv)

    password = args.password or getpass.getpass("Password: ")

    async def _run() -> dict:
        try:
            return await create_user(args.username, args.email, password)
        finally:
            await get_async_engine().dispose()

    try:
        user = asyncio.run(_run())
    except UserValidationError as e:
        logger.error(f"Error: {e.message}")
        return 1

    logger.info(f"Created user {user['username']} ({user['id']})")
    return 0


if __name__ == "__main__":
    from bossflow.observability.logger import configure_logging

    configure_logging()
    sys.exit(main())
