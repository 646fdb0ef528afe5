#!/usr/bin/env python3
"""
Script to make a user an admin.
Usage: python make_admin.py user@example.com
"""

import asyncio
import sys

from shop_accounts.application.use_cases.promote_admin import PromoteAdminUseCase
from shop_accounts.core.errors import UserNotFoundError
from shop_accounts.db.database import SessionLocal
from shop_accounts.infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl


def make_user_admin(email: str, session_factory=SessionLocal) -> bool:
    """Make a user an admin by email."""
    db = session_factory()
    try:
        user = asyncio.run(PromoteAdminUseCase(UnitOfWorkImpl(db)).execute(email))
    except UserNotFoundError:
        print(f"User with email '{email}' not found!")
        return False
    except ValueError as e:
        print(f"Cannot promote '{email}': {e}")
        return False
    finally:
        db.close()

    print(f"Successfully made '{user.email}' an admin (role: {user.role})")
    return True


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__.strip())
        sys.exit(2)
    sys.exit(0 if make_user_admin(sys.argv[1]) else 1)
