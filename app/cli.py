"""Operator commands.

Usage: tenant-cms-admin make-super-admin <email>
"""

import argparse
import asyncio
import logging
import sys

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.base import utcnow
from app.models.user import User

logger = logging.getLogger(__name__)


async def promote_to_super_admin(session: AsyncSession, email: str) -> User:
    """Grant global privilege to an existing user. Idempotent."""
    result = await session.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if user is None:
        raise LookupError(f"User with email {email} not found")

    if not user.is_super_admin:
        user.is_super_admin = True
        user.updated_at = utcnow()
        session.add(user)
        await session.commit()
        await session.refresh(user)
        logger.info("Promoted user %s to super-admin", user.id)
    return user


async def _make_super_admin(email: str) -> int:
    from app.core.database import async_session_factory

    async with async_session_factory() as session:
        try:
            user = await promote_to_super_admin(session, email)
        except LookupError as exc:
            print(str(exc), file=sys.stderr)
            return 1
    print(f"{email} is now a super-admin (user id {user.id})")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="tenant-cms-admin", description="Tenant CMS administration")
    sub = parser.add_subparsers(dest="cmd", required=True)

    promote = sub.add_parser("make-super-admin", help="Grant super-admin to an existing user")
    promote.add_argument("email")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "make-super-admin":
        return asyncio.run(_make_super_admin(args.email))
    return 2


if __name__ == "__main__":
    sys.exit(main())
